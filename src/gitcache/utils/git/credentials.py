"""
Git credentials and proxy configuration for fetch, push and clone.
"""

import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from gitcache.constants import (
    ASKPASS_FILE_NAME,
    ASKPASS_PASSWORD_ENV,
    ASKPASS_USERNAME_ENV,
    HTTP_PROXY_CONFIG_OPTION,
    HTTP_PROXY_CONFIG_SECTION,
    SSH_KEY_FILE_NAME,
)
from gitcache.logging import get_logger
from gitcache.utils.git.errors import ConfigFailure
from gitcache.utils.git.locator import Locator, Scheme
from gitcache.utils.git.settings import GitCacheSettings

logger = get_logger("gitcache.utils.git.credentials")

# Git asks "Username for '...':" and "Password for '...':"; ssh asks for
# the key passphrase. Everything but the username prompt gets the password.
ASKPASS_SCRIPT = f"""#!/bin/sh
case "$1" in
    Username*) printf '%s\\n' "${ASKPASS_USERNAME_ENV}" ;;
    *) printf '%s\\n' "${ASKPASS_PASSWORD_ENV}" ;;
esac
"""


@dataclass(frozen=True)
class Credentials:
    scheme: Scheme
    username: Optional[str] = None
    password: str = ""
    private_key: Optional[Path] = None


def resolve_credentials(
    locator: Locator, settings: GitCacheSettings
) -> Optional[Credentials]:
    """
    Credentials for a remote, or None when its scheme takes none.

    ssh remotes use the key file in the cache root with the stored password
    as passphrase; https remotes use the identity embedded in the locator
    (falling back to the stored one) and the stored password.
    """
    password = settings.password or ""

    if locator.scheme is Scheme.SSH:
        return Credentials(
            scheme=Scheme.SSH,
            password=password,
            private_key=Path(settings.cache_root) / SSH_KEY_FILE_NAME,
        )

    if locator.scheme is Scheme.HTTPS:
        return Credentials(
            scheme=Scheme.HTTPS,
            username=locator.embedded_identity or settings.account_identity,
            password=password,
        )

    return None


def ensure_askpass_script(cache_root: Path) -> Path:
    """
    Write the askpass helper into the cache root (once) and return its path.

    Raises:
        ConfigFailure: If the helper cannot be written
    """
    script_path = Path(cache_root) / ASKPASS_FILE_NAME
    try:
        if script_path.is_file() and script_path.read_text() == ASKPASS_SCRIPT:
            return script_path
        script_path.parent.mkdir(parents=True, exist_ok=True)
        script_path.write_text(ASKPASS_SCRIPT)
        script_path.chmod(stat.S_IRWXU)
    except OSError as e:
        raise ConfigFailure(f"Unable to write askpass helper {script_path} ({e})") from e
    logger.debug(f"Wrote askpass helper: {script_path}")
    return script_path


def credential_environment(
    credentials: Optional[Credentials], cache_root: Path
) -> Dict[str, str]:
    """
    Environment for git commands that talk to the remote.

    Interactive prompts are disabled so that a missing credential fails the
    command instead of hanging it.
    """
    env = {"GIT_TERMINAL_PROMPT": "0"}
    if credentials is None:
        return env

    askpass = str(ensure_askpass_script(cache_root))
    env[ASKPASS_PASSWORD_ENV] = credentials.password

    if credentials.scheme is Scheme.SSH:
        env["GIT_SSH_COMMAND"] = (
            f"ssh -i '{credentials.private_key}' -o IdentitiesOnly=yes"
        )
        env["SSH_ASKPASS"] = askpass
        env["SSH_ASKPASS_REQUIRE"] = "force"
    else:
        env["GIT_ASKPASS"] = askpass
        env[ASKPASS_USERNAME_ENV] = credentials.username or ""

    return env


def remote_environment(locator: Locator, settings: GitCacheSettings) -> Dict[str, str]:
    """Environment for clone, fetch and push of the locator's remote"""
    return credential_environment(
        resolve_credentials(locator, settings), settings.cache_root
    )


def configure_proxy(backend, repo, locator: Locator, settings: GitCacheSettings) -> bool:
    """
    Write the host proxy into the repository config for https remotes.

    Returns:
        True when a proxy was configured
    """
    if locator.scheme is not Scheme.HTTPS:
        return False

    proxy = settings.proxy_lookup()
    if not proxy:
        return False

    backend.set_config(repo, HTTP_PROXY_CONFIG_SECTION, HTTP_PROXY_CONFIG_OPTION, proxy)
    logger.debug("Configured http.proxy for https remote")
    return True
