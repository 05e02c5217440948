"""
Main logging module for the gitcache CLI.

This module provides the primary logging interface and logger setup
with daily rotation.
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import GitCacheFormatter
from .utils import cleanup_old_logs, sanitize_data


# Global logger registry
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the gitcache logging system.

    Args:
        config: LogConfig instance, uses default if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()

        # Try to read log level from user settings
        try:
            from gitcache.utils.config_store import ConfigStore

            user_level = ConfigStore().get_settings().get("log_level")
            if user_level and user_level in [lev.value for lev in LogLevel]:
                config.default_level = LogLevel(user_level)
        except Exception:
            # If anything fails, just use the default config
            pass

    _log_config = config

    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("gitcache")
    root_logger.setLevel(getattr(logging, config.default_level.value))
    root_logger.handlers.clear()

    # Daily rotating file handler
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when='midnight',
        interval=1,
        backupCount=config.log_retention_days,
        encoding='utf-8',
        utc=False
    )
    file_handler.setLevel(getattr(logging, config.default_level.value))
    file_handler.suffix = "%Y-%m-%d"

    file_formatter = GitCacheFormatter(
        sanitize_sensitive=config.sanitize_sensitive_data,
        sensitive_keys=config.sensitive_keys
    )
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    # Console handler for warnings and errors
    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))

        console_formatter = GitCacheFormatter(
            include_timestamps=False,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except Exception:
        # Don't fail setup if cleanup fails
        pass

    _logging_configured = True

    setup_logger = get_logger("gitcache.setup")
    setup_logger.info(f"Logging initialized - File: {log_file_path}, "
                      f"Level: {config.default_level.value}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'gitcache.utils.git.sync')

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        logger = logging.getLogger(name)
        _loggers[name] = logger

    return _loggers[name]


def log_git_operation(
    operation: str,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "gitcache.git"
) -> None:
    """
    Log a backend git operation at DEBUG level.

    Args:
        operation: Description of the operation (clone, fetch, push, ...)
        details: Additional operation details (sanitized before logging)
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"git_operation": operation}

    if details:
        from gitcache.constants import SENSITIVE_KEYS
        extra["git_details"] = sanitize_data(details, SENSITIVE_KEYS)

    logger.debug(f"Git: {operation}", extra=extra)
