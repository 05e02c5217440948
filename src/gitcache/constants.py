"""
Global constants for the gitcache CLI.
"""

# Application identity
APP_NAME = "gitcache"
KEYRING_SERVICE_NAME = "gitcache"

# Cache layout
CACHE_DIR_NAME = "cache"
CACHE_HASH_BYTES = 8  # digest bytes rendered into the cache directory name
SSH_KEY_FILE_NAME = "ssrf_remote.key"
ASKPASS_FILE_NAME = "askpass.sh"

# Remote handling
DEFAULT_REMOTE_NAME = "origin"
HTTP_PROXY_CONFIG_SECTION = "http"
HTTP_PROXY_CONFIG_OPTION = "proxy"

# Environment variables read by the askpass helper
ASKPASS_USERNAME_ENV = "GITCACHE_GIT_USERNAME"
ASKPASS_PASSWORD_ENV = "GITCACHE_GIT_PASSWORD"

# Logging constants
LOG_FILE_NAME = "gitcache"
LOG_RETENTION_DAYS = 7
LOG_DIR_ENV = "GITCACHE_LOG_DIR"

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "passphrase", "token", "secret", "private_key",
    "authorization", "credential",
)
