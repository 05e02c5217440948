"""
Logging configuration for the gitcache CLI.

The log file lives in a per-user state directory, separate from the cache
root, so that wiping the cache never loses the history of what happened
to it. GITCACHE_LOG_DIR overrides the location.
"""

import os
import platform
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from gitcache.constants import (
    APP_NAME,
    LOG_DIR_ENV,
    LOG_FILE_NAME,
    LOG_RETENTION_DAYS,
    SENSITIVE_KEYS,
)


class LogLevel(Enum):
    """Severity names shared by the log file and the report sink"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class LogConfig:
    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS

    # The file gets everything at default_level; stderr only what the
    # report sink has not already shown
    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.WARNING

    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS


def _platform_log_root() -> Path:
    system = platform.system().lower()
    if system == "windows":
        return Path(os.environ.get("LOCALAPPDATA") or Path.home()) / APP_NAME / "logs"
    if system == "darwin":
        return Path.home() / "Library" / "Logs" / APP_NAME
    state_home = os.environ.get("XDG_STATE_HOME")
    base_dir = Path(state_home) if state_home else Path.home() / ".local" / "state"
    return base_dir / APP_NAME


def get_log_directory() -> Path:
    """
    Directory holding the gitcache log file, created on demand.

    An unwritable location falls back to a directory under the system
    temporary directory rather than failing the command.
    """
    override = os.environ.get(LOG_DIR_ENV)
    log_dir = Path(override) if override else _platform_log_root()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        log_dir = Path(tempfile.gettempdir()) / f"{APP_NAME}-logs"
        log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    return get_log_directory() / (config or LogConfig()).log_filename
