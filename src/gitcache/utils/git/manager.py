"""
Git cache manager (main entry point).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from git import Repo

from gitcache.logging import get_logger
from gitcache.utils.console import report as console_report
from gitcache.utils.git.backend import GitBackend
from gitcache.utils.git.cache import get_cache_entry
from gitcache.utils.git.errors import GitCacheError, OpenFailure, ParseError
from gitcache.utils.git.locator import Locator, parse_locator
from gitcache.utils.git.repository import acquire_repository
from gitcache.utils.git.settings import GitCacheSettings
from gitcache.utils.git.sync import Reporter, SyncResult

logger = get_logger("gitcache.utils.git.manager")


@dataclass
class OpenResult:
    """
    Outcome of opening a locator.

    `repo` is None when the locator names no usable repository; `error`
    then holds the fatal failure, if there was one.
    """

    repo: Optional[Repo]
    branch: str
    locator: Locator
    cache_path: Optional[Path] = None
    cloned: bool = False
    sync: Optional[SyncResult] = None
    error: Optional[GitCacheError] = None


class GitCacheManager:
    """Resolves locators to cache repositories"""

    def __init__(
        self,
        settings: Optional[GitCacheSettings] = None,
        report: Optional[Reporter] = None,
        backend: Optional[GitBackend] = None,
    ):
        self._settings = settings
        self.report = report or console_report
        self.backend = backend or GitBackend()

    @property
    def settings(self) -> GitCacheSettings:
        if self._settings is None:
            from gitcache.utils.config_store import ConfigStore

            self._settings = ConfigStore().load_settings()
        return self._settings

    def cache_path(self, locator: Locator) -> Optional[Path]:
        """Cache directory for a remote locator, None for local paths"""
        if not locator.scheme.is_remote:
            return None
        return get_cache_entry(locator, self.settings.cache_root).local_path

    def open(self, text: str) -> Optional[OpenResult]:
        """
        Open the repository named by a `path[branch]` locator.

        Returns:
            None if `text` is not a locator at all, otherwise an OpenResult.
            Fatal failures are reported and carried in OpenResult.error.
        """
        try:
            locator = parse_locator(text)
        except ParseError as e:
            logger.debug(f"Not a git locator: {e}")
            return None

        if not locator.scheme.is_remote:
            return self._open_local(locator)

        local_path = self.cache_path(locator)
        try:
            acquired = acquire_repository(
                local_path, locator, self.settings, self.report, self.backend
            )
        except GitCacheError as e:
            logger.error(f"Git cache for {locator} unavailable: {e}")
            self.report(str(e))
            return OpenResult(
                repo=None,
                branch=locator.branch,
                locator=locator,
                cache_path=local_path,
                error=e,
            )

        return OpenResult(
            repo=acquired.repo,
            branch=locator.branch,
            locator=locator,
            cache_path=local_path,
            cloned=acquired.cloned,
            sync=acquired.sync,
        )

    def _open_local(self, locator: Locator) -> OpenResult:
        """Local repositories are used in place, without a cache"""
        result = OpenResult(repo=None, branch=locator.branch, locator=locator)
        path = Path(locator.raw_path)
        if not path.is_dir():
            logger.debug(f"Local git path is not a directory: {path}")
            return result

        try:
            result.repo = self.backend.open(path)
        except OpenFailure as e:
            logger.debug(str(e))
            result.error = e
        return result


def open_git_repository(
    text: str,
    settings: Optional[GitCacheSettings] = None,
    report: Optional[Reporter] = None,
) -> Optional[OpenResult]:
    return GitCacheManager(settings, report).open(text)
