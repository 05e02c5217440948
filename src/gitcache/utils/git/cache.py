"""
Cache addressing: one local directory per (remote, branch) pair.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path

from gitcache.constants import CACHE_HASH_BYTES
from gitcache.utils.git.locator import Locator


@dataclass(frozen=True)
class CacheEntry:
    local_path: Path
    remote: Locator


def cache_directory_name(remote: str, branch: str) -> str:
    """
    Name of the cache directory for a remote and branch.

    The zero byte between the two keeps "repo1" + "branch" and
    "repo" + "1branch" apart.
    """
    digest = hashlib.sha1()
    digest.update(remote.encode("utf-8"))
    digest.update(b"\0")
    digest.update(branch.encode("utf-8"))
    return digest.digest()[:CACHE_HASH_BYTES].hex()


def get_cache_path(remote: str, branch: str, cache_root: Path) -> Path:
    return Path(cache_root) / cache_directory_name(remote, branch)


def get_cache_entry(locator: Locator, cache_root: Path) -> CacheEntry:
    return CacheEntry(
        local_path=get_cache_path(locator.raw_path, locator.branch, cache_root),
        remote=locator,
    )
