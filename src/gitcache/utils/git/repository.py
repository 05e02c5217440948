"""
Git cache repository acquisition (open existing cache or clone a new one).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from git import Repo

from gitcache.logging import get_logger
from gitcache.utils.git.backend import GitBackend
from gitcache.utils.git.credentials import remote_environment
from gitcache.utils.git.errors import CloneFailure, ConfigFailure, CorruptCache
from gitcache.utils.git.locator import Locator
from gitcache.utils.git.settings import GitCacheSettings
from gitcache.utils.git.sync import Reporter, SyncResult, sync_repository

logger = get_logger("gitcache.utils.git.repository")


@dataclass
class AcquireResult:
    repo: Repo
    cloned: bool = False
    sync: Optional[SyncResult] = None


def update_local_repo(
    local_path: Path,
    locator: Locator,
    settings: GitCacheSettings,
    report: Reporter,
    backend: GitBackend,
) -> AcquireResult:
    """Open an existing cache and synchronize it with its remote"""
    logger.debug(f"Using existing cache repository: {local_path}")
    repo = backend.open(local_path)
    try:
        sync = sync_repository(repo, locator.branch, locator, settings, report, backend)
    except Exception:
        backend.close(repo)
        raise
    logger.info(f"Cache {local_path} for {locator}: {sync}")
    return AcquireResult(repo=repo, cloned=False, sync=sync)


def create_local_repo(
    local_path: Path,
    locator: Locator,
    settings: GitCacheSettings,
    backend: GitBackend,
) -> AcquireResult:
    """Clone the remote branch into a new cache directory"""
    logger.info(f"Cloning {locator} into cache: {local_path}")
    try:
        local_path.parent.mkdir(parents=True, exist_ok=True)
        env = remote_environment(locator, settings)
    except (OSError, ConfigFailure) as e:
        raise CloneFailure(
            f"Unable to prepare cache directory for {locator.raw_path} ({e})"
        ) from e
    repo = backend.clone(locator.raw_path, local_path, locator.branch, env=env)
    return AcquireResult(repo=repo, cloned=True)


def acquire_repository(
    local_path: Path,
    locator: Locator,
    settings: GitCacheSettings,
    report: Reporter,
    backend: Optional[GitBackend] = None,
) -> AcquireResult:
    """
    Get the cache repository for a locator, creating it on first use.

    A fresh clone is already up to date, so only an existing cache goes
    through synchronization.

    Raises:
        CorruptCache: If the cache path exists but is not a directory
        OpenFailure: If the existing cache cannot be opened
        CloneFailure: If the remote cannot be cloned
    """
    backend = backend or GitBackend()
    local_path = Path(local_path)

    if local_path.exists():
        if not local_path.is_dir():
            raise CorruptCache(f"Local git cache at '{local_path}' is corrupt")
        return update_local_repo(local_path, locator, settings, report, backend)

    return create_local_repo(local_path, locator, settings, backend)
