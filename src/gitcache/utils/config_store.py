import os
import json
import platform
from pathlib import Path
from typing import Any, Dict, Optional
import keyring
from keyring.errors import KeyringError

from gitcache.constants import APP_NAME, CACHE_DIR_NAME, KEYRING_SERVICE_NAME


class ConfigStore:
    def __init__(self):
        self.base_dir = self._get_config_dir()
        self.settings_file = self.base_dir / "settings.json"
        self._ensure_config_dir()

    def _get_config_dir(self) -> Path:
        """Get platform-specific config directory"""
        system = platform.system()
        if system == "Windows":
            base_dir = os.environ.get("APPDATA", "")
            return Path(base_dir) / APP_NAME
        elif system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
            if xdg_config:
                return Path(xdg_config) / APP_NAME
            return Path.home() / f".{APP_NAME}"

    def _ensure_config_dir(self):
        """Ensure config directory exists"""
        os.makedirs(self.base_dir, exist_ok=True)

    def get_settings(self) -> Dict[str, Any]:
        """Get stored settings"""
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}

    def save_settings(self, settings: Dict[str, Any]) -> None:
        """Merge settings into the stored settings file"""
        current = self.get_settings()
        current.update(settings)
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(current, f, indent=2)

    def get_cache_dir(self) -> Path:
        """Get the cache root, defaulting to a directory beside the settings"""
        cache_dir = self.get_settings().get("cache_dir")
        if cache_dir:
            return Path(cache_dir).expanduser()
        return self.base_dir / CACHE_DIR_NAME

    def store_password(self, password: str) -> None:
        """Store the remote password/passphrase in the system keyring"""
        keyring.set_password(KEYRING_SERVICE_NAME, "password", password)

    def get_password(self) -> Optional[str]:
        """Get the stored password, None when unset or no keyring is usable"""
        try:
            return keyring.get_password(KEYRING_SERVICE_NAME, "password")
        except KeyringError:
            return None

    def load_settings(self):
        """
        Build the settings value handed to the cache and sync code.

        Returns:
            GitCacheSettings with the stored cache root, account identity
            and keyring password
        """
        from gitcache.utils.git.settings import GitCacheSettings

        stored = self.get_settings()
        return GitCacheSettings(
            cache_root=self.get_cache_dir(),
            account_identity=stored.get("account_identity"),
            password=self.get_password(),
        )
