"""
Git cache synchronization (fetch, compare, fast-forward or push).

Only the two trivial cases are handled automatically: one side strictly
ahead of the other. Diverged histories are always reported for a manual
merge. Nothing here raises for a backend failure; the repository stays
usable at its last known state and the problem goes to the report sink.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from git import Repo

from gitcache.logging import LogLevel, get_logger
from gitcache.utils.git.backend import GitBackend
from gitcache.utils.git.credentials import configure_proxy, remote_environment
from gitcache.utils.git.errors import (
    BranchMissing,
    ConfigFailure,
    FetchFailure,
    MergeBaseFailure,
    PushFailure,
    RemoteMissing,
    StatusFailure,
    UpdateFailure,
    UpstreamMissing,
)
from gitcache.utils.git.locator import Locator
from gitcache.utils.git.settings import GitCacheSettings
from gitcache.utils.git.status import dirty_paths

logger = get_logger("gitcache.utils.git.sync")

# report(message) for problems, report(message, LogLevel.INFO) for applied updates
Reporter = Callable[..., None]


class SyncDecision(Enum):
    NO_OP = "no-op"
    FAST_FORWARD_LOCAL = "fast-forward-local"
    PUSH_LOCAL = "push-local"
    DIVERGED_BARE_REPO = "diverged-bare-repo"
    DIVERGED_NOT_HEAD = "diverged-not-head"
    DIVERGED_NEEDS_MERGE = "diverged-needs-merge"
    ABORTED = "aborted"


class AbortReason(Enum):
    SETUP_FAILED = "setup-failed"
    ORIGIN_MISSING = "origin-missing"
    FETCH_FAILED = "fetch-failed"
    BRANCH_MISSING = "branch-missing"
    UPSTREAM_MISSING = "upstream-missing"
    STATUS_FAILED = "status-failed"
    DIRTY_TREE = "dirty-tree"
    MERGE_BASE_FAILED = "merge-base-failed"


@dataclass(frozen=True)
class BranchPair:
    local_oid: str
    remote_oid: str
    merge_base_oid: Optional[str] = None


@dataclass(frozen=True)
class SyncResult:
    decision: SyncDecision
    reason: Optional[AbortReason] = None
    applied: bool = False
    message: str = ""

    def __str__(self) -> str:
        if self.reason:
            return f"{self.decision.value} ({self.reason.value})"
        return self.decision.value


def sync_repository(
    repo: Repo,
    branch: str,
    locator: Locator,
    settings: GitCacheSettings,
    report: Reporter,
    backend: Optional[GitBackend] = None,
) -> SyncResult:
    """
    Bring an already-open cache repository in line with its remote.

    Args:
        repo: Open (not freshly cloned) cache repository
        branch: Local branch mirrored by the cache
        locator: Remote the cache mirrors
        settings: Credentials, cache root and proxy lookup
        report: Sink for every outcome worth surfacing
        backend: Git backend, a GitBackend by default

    Returns:
        SyncResult describing the decision that was taken
    """
    backend = backend or GitBackend()

    def aborted(reason: AbortReason, message: str) -> SyncResult:
        report(message)
        return SyncResult(SyncDecision.ABORTED, reason=reason, message=message)

    try:
        configure_proxy(backend, repo, locator, settings)
        env = remote_environment(locator, settings)
    except ConfigFailure as e:
        return aborted(AbortReason.SETUP_FAILED, str(e))

    try:
        origin = backend.get_remote(repo)
    except RemoteMissing as e:
        return aborted(
            AbortReason.ORIGIN_MISSING,
            f"Repository '{locator.raw_path}' origin lookup failed ({e})",
        )

    try:
        backend.fetch(repo, origin, env)
    except FetchFailure as e:
        logger.debug(f"Fetch of {locator.raw_path} failed: {e}")
        return aborted(
            AbortReason.FETCH_FAILED, f"Unable to fetch remote '{locator.raw_path}'"
        )

    try:
        local_ref = backend.lookup_branch(repo, branch)
    except BranchMissing as e:
        return aborted(AbortReason.BRANCH_MISSING, str(e))

    try:
        remote_ref = backend.upstream(local_ref)
    except UpstreamMissing as e:
        return aborted(AbortReason.UPSTREAM_MISSING, str(e))

    pair = BranchPair(backend.target(local_ref), backend.target(remote_ref))
    if pair.local_oid == pair.remote_oid:
        logger.debug(f"Cache branch {branch} is up to date")
        return SyncResult(SyncDecision.NO_OP)

    # A modified working tree is never updated, whichever side is ahead
    try:
        modified = dirty_paths(backend.status(repo))
    except StatusFailure as e:
        return aborted(AbortReason.STATUS_FAILED, str(e))
    if modified:
        return aborted(
            AbortReason.DIRTY_TREE,
            "Local cached copy is dirty, skipping update "
            f"(modified: {', '.join(modified)})",
        )

    try:
        base = backend.merge_base(repo, pair.local_oid, pair.remote_oid)
    except MergeBaseFailure as e:
        logger.debug(f"merge-base failed: {e}")
        return aborted(
            AbortReason.MERGE_BASE_FAILED,
            "Unable to find common commit of local and remote branches",
        )
    pair = BranchPair(pair.local_oid, pair.remote_oid, base)

    if pair.merge_base_oid == pair.local_oid:
        return _fast_forward(backend, repo, local_ref, pair, report)

    if pair.merge_base_oid == pair.remote_oid:
        return _push_local(backend, repo, origin, local_ref, env, report)

    if backend.is_bare(repo):
        decision = SyncDecision.DIVERGED_BARE_REPO
        message = "Local and remote have diverged, merge of bare branch needed"
    elif not backend.is_head(repo, local_ref):
        decision = SyncDecision.DIVERGED_NOT_HEAD
        message = "Local and remote do not match, local branch not HEAD - cannot update"
    else:
        # Working tree is clean and checked out, but merging is left to the user
        decision = SyncDecision.DIVERGED_NEEDS_MERGE
        message = "Local and remote have diverged, need to merge"

    report(message)
    return SyncResult(decision, message=message)


def _fast_forward(backend, repo, local_ref, pair: BranchPair, report) -> SyncResult:
    """The remote is strictly newer than the local branch"""
    try:
        if backend.is_bare(repo) or not backend.is_head(repo, local_ref):
            backend.set_target(local_ref, pair.remote_oid)
            message = "Updated local branch from remote"
        else:
            backend.reset_hard(repo, pair.remote_oid)
            message = "Updated local information from remote"
    except UpdateFailure as e:
        report(str(e))
        return SyncResult(SyncDecision.FAST_FORWARD_LOCAL, message=str(e))

    logger.info(f"{message}: {local_ref.name} -> {pair.remote_oid}")
    report(message, LogLevel.INFO)
    return SyncResult(SyncDecision.FAST_FORWARD_LOCAL, applied=True, message=message)


def _push_local(backend, repo, origin, local_ref, env, report) -> SyncResult:
    """The local branch is strictly newer than the remote"""
    try:
        backend.push(repo, origin, local_ref, env)
    except PushFailure as e:
        message = f"Unable to update remote with current local cache state ({e})"
        report(message)
        return SyncResult(SyncDecision.PUSH_LOCAL, message=message)

    message = "Local cache more recent than remote, pushed local changes"
    logger.info(f"{message}: {local_ref.name}")
    report(message, LogLevel.INFO)
    return SyncResult(SyncDecision.PUSH_LOCAL, applied=True, message=message)
