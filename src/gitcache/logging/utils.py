"""
Utility functions for gitcache logging.

This module provides helper functions for data sanitization
and log file housekeeping.
"""

import re
from typing import Any, Dict, List, Tuple
from pathlib import Path
from datetime import datetime, timedelta
from gitcache.constants import LOG_FILE_NAME


def sanitize_data(data: Any, sensitive_keys: Tuple[str, ...]) -> Any:
    """
    Recursively sanitize sensitive data from dictionaries, lists, and strings.

    Args:
        data: Data to sanitize (dict, list, str, or other)
        sensitive_keys: Tuple of keys/patterns to sanitize

    Returns:
        Any: Sanitized data with sensitive values replaced
    """
    if isinstance(data, dict):
        return sanitize_dict(data, sensitive_keys)
    elif isinstance(data, list):
        return sanitize_list(data, sensitive_keys)
    elif isinstance(data, str):
        return sanitize_string(data, sensitive_keys)
    else:
        return data


def sanitize_dict(data: Dict[str, Any], sensitive_keys: Tuple[str, ...]) -> Dict[str, Any]:
    """
    Sanitize sensitive values in a dictionary.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Keys to sanitize

    Returns:
        Dict: Sanitized dictionary
    """
    sanitized = {}

    for key, value in data.items():
        key_lower = str(key).lower()

        is_sensitive = any(
            sensitive_key.lower() in key_lower
            for sensitive_key in sensitive_keys
        )

        if is_sensitive:
            sanitized[key] = "***"
        else:
            sanitized[key] = sanitize_data(value, sensitive_keys)

    return sanitized


def sanitize_list(data: List[Any], sensitive_keys: Tuple[str, ...]) -> List[Any]:
    """Sanitize sensitive values in a list."""
    return [sanitize_data(item, sensitive_keys) for item in data]


def sanitize_string(data: str, sensitive_keys: Tuple[str, ...]) -> str:
    """
    Sanitize sensitive patterns in strings (like URLs carrying credentials).

    Args:
        data: String to sanitize
        sensitive_keys: Patterns to sanitize

    Returns:
        str: Sanitized string
    """
    sanitized = data

    patterns = [
        # user:password@ in URLs
        (r'(\b[a-z]+://[^/\s:@]+):[^/\s@]+@', r'\1:***@'),
        # URL parameters with sensitive names
        (r'([?&](?:token|key|secret|password)=)[^&\s]+', r'\1***'),
    ]

    for pattern, replacement in patterns:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

    return sanitized


def cleanup_old_logs(log_directory: Path, retention_days: int = 30) -> int:
    """
    Clean up old log files based on retention policy.

    Args:
        log_directory: Directory containing log files
        retention_days: Number of days to retain logs

    Returns:
        int: Number of files cleaned up
    """
    if not log_directory.exists():
        return 0

    cutoff_date = datetime.now() - timedelta(days=retention_days)
    cleaned_count = 0

    for log_file in log_directory.glob(f"{LOG_FILE_NAME}.log.*"):
        try:
            if log_file.stat().st_mtime < cutoff_date.timestamp():
                log_file.unlink()
                cleaned_count += 1
        except (OSError, ValueError):
            continue

    return cleaned_count
