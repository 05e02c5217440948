"""
Log formatter that masks credentials before a record reaches a handler.
"""

import logging
from .utils import sanitize_data
from gitcache.constants import SENSITIVE_KEYS

_FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_CONSOLE_FORMAT = "%(levelname)s [%(name)s] %(message)s"


class GitCacheFormatter(logging.Formatter):
    """
    Formats gitcache log lines.

    Remote URLs and git operation details pass through here, so both the
    message and its arguments are sanitized: URL userinfo is masked and
    values under sensitive keys are replaced.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        super().__init__(
            fmt=_FILE_FORMAT if include_timestamps else _CONSOLE_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS

    def _clean(self, value):
        if isinstance(value, (dict, list, str)):
            return sanitize_data(value, self.sensitive_keys)
        return value

    def format(self, record: logging.LogRecord) -> str:
        if self.sanitize_sensitive:
            record.msg = self._clean(record.msg)
            if isinstance(record.args, tuple):
                record.args = tuple(self._clean(arg) for arg in record.args)
        return super().format(record)
