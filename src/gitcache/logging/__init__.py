"""
gitcache Logging Module

This module provides logging for the gitcache CLI: a single log file
with daily rotation, cross-platform log directory detection, and
automatic sanitization of credentials in log records.
"""

from .logger import (
    get_logger,
    setup_logging,
    LogLevel,
    log_git_operation,
)
from .config import LogConfig, get_log_directory

__all__ = [
    "get_logger",
    "setup_logging",
    "log_git_operation",
    "LogLevel",
    "LogConfig",
    "get_log_directory",
]
