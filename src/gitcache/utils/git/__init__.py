"""
Git cache package.
"""

from gitcache.utils.git.manager import (
    GitCacheManager,
    OpenResult,
    open_git_repository,
)
from gitcache.utils.git.locator import Locator, Scheme, parse_locator
from gitcache.utils.git.cache import cache_directory_name, get_cache_path
from gitcache.utils.git.settings import GitCacheSettings
from gitcache.utils.git.sync import AbortReason, SyncDecision, SyncResult

__all__ = [
    "GitCacheManager",
    "OpenResult",
    "open_git_repository",
    "Locator",
    "Scheme",
    "parse_locator",
    "cache_directory_name",
    "get_cache_path",
    "GitCacheSettings",
    "AbortReason",
    "SyncDecision",
    "SyncResult",
]
