"""
Version-control backend built on GitPython.

Every GitPython call the cache makes goes through GitBackend, so the rest of
the package only sees these capabilities and the GitCacheError types.
"""

from pathlib import Path
from typing import Dict, List, Optional

from git import (
    GitCommandError,
    Head,
    InvalidGitRepositoryError,
    NoSuchPathError,
    PushInfo,
    Remote,
    RemoteReference,
    Repo,
)

from gitcache.constants import DEFAULT_REMOTE_NAME
from gitcache.logging import log_git_operation
from gitcache.utils.git.errors import (
    BranchMissing,
    CloneFailure,
    ConfigFailure,
    FetchFailure,
    MergeBaseFailure,
    OpenFailure,
    PushFailure,
    RemoteMissing,
    StatusFailure,
    UpdateFailure,
    UpstreamMissing,
)
from gitcache.utils.git.status import StatusEntry, parse_porcelain_status

_PUSH_FAILURE_FLAGS = (
    PushInfo.ERROR
    | PushInfo.REJECTED
    | PushInfo.REMOTE_REJECTED
    | PushInfo.REMOTE_FAILURE
)


class GitBackend:
    """Git primitives used by the acquirer and the sync engine"""

    def open(self, path: Path) -> Repo:
        log_git_operation("open", {"path": str(path)})
        try:
            return Repo(str(path))
        except (InvalidGitRepositoryError, NoSuchPathError, GitCommandError) as e:
            raise OpenFailure(f"Unable to open git cache repository at {path}: {e}") from e

    def clone(
        self, url: str, path: Path, branch: str, env: Optional[Dict[str, str]] = None
    ) -> Repo:
        log_git_operation("clone", {"url": url, "path": str(path), "branch": branch})
        try:
            return Repo.clone_from(url, str(path), branch=branch, env=env)
        except GitCommandError as e:
            raise CloneFailure(f"git clone of {url} failed ({e})") from e

    def get_remote(self, repo: Repo, name: str = DEFAULT_REMOTE_NAME) -> Remote:
        try:
            return repo.remote(name)
        except ValueError as e:
            raise RemoteMissing(f"Repository has no '{name}' remote") from e

    def fetch(
        self, repo: Repo, remote: Remote, env: Optional[Dict[str, str]] = None
    ) -> None:
        log_git_operation("fetch", {"remote": remote.name})
        try:
            with repo.git.custom_environment(**(env or {})):
                remote.fetch()
        except (GitCommandError, ValueError) as e:
            raise FetchFailure(str(e)) from e

    def status(self, repo: Repo) -> List[StatusEntry]:
        """Working tree entries that differ from HEAD, including ignored ones"""
        if repo.bare:
            return []
        try:
            output = repo.git.status(
                "--porcelain", "-z", "--ignored", "--untracked-files=all"
            )
        except GitCommandError as e:
            raise StatusFailure(f"Unable to read working tree status ({e})") from e
        return parse_porcelain_status(output)

    def lookup_branch(self, repo: Repo, name: str) -> Head:
        try:
            return repo.heads[name]
        except IndexError as e:
            raise BranchMissing(f"Git cache branch {name} no longer exists") from e

    def upstream(self, branch: Head) -> RemoteReference:
        tracking = branch.tracking_branch()
        if tracking is None or not tracking.is_valid():
            raise UpstreamMissing(
                f"Git cache branch {branch.name} no longer has an upstream branch"
            )
        return tracking

    def target(self, ref) -> str:
        return ref.commit.hexsha

    def merge_base(self, repo: Repo, local_oid: str, remote_oid: str) -> str:
        try:
            bases = repo.merge_base(local_oid, remote_oid)
        except GitCommandError as e:
            raise MergeBaseFailure(str(e)) from e
        if not bases:
            raise MergeBaseFailure("No common commit between the two histories")
        return bases[0].hexsha

    def reset_hard(self, repo: Repo, oid: str) -> None:
        log_git_operation("reset", {"commit": oid})
        try:
            repo.head.reset(oid, index=True, working_tree=True)
        except GitCommandError as e:
            raise UpdateFailure(f"Local head checkout failed after update: {e}") from e

    def set_target(self, branch: Head, oid: str) -> None:
        log_git_operation("update-ref", {"ref": branch.path, "commit": oid})
        try:
            branch.set_commit(oid, logmsg="Update to remote")
        except (ValueError, OSError) as e:
            raise UpdateFailure(f"Could not update local ref to newer remote ref: {e}") from e

    def push(
        self,
        repo: Repo,
        remote: Remote,
        branch: Head,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        refspec = f"{branch.path}:{branch.path}"
        log_git_operation("push", {"remote": remote.name, "refspec": refspec})
        try:
            with repo.git.custom_environment(**(env or {})):
                results = remote.push(refspec=refspec)
        except GitCommandError as e:
            raise PushFailure(str(e)) from e

        if not results:
            raise PushFailure(f"Push of {branch.path} returned no result")
        for result in results:
            if result.flags & _PUSH_FAILURE_FLAGS:
                raise PushFailure(result.summary.strip())

    def set_config(self, repo: Repo, section: str, option: str, value: str) -> None:
        try:
            with repo.config_writer() as writer:
                writer.set_value(section, option, value)
        except OSError as e:
            raise ConfigFailure(f"Unable to set {section}.{option} ({e})") from e

    def is_bare(self, repo: Repo) -> bool:
        return repo.bare

    def is_head(self, repo: Repo, branch: Head) -> bool:
        """True when `branch` is the checked-out branch"""
        if repo.bare or repo.head.is_detached:
            return False
        return repo.head.reference.path == branch.path

    def close(self, repo: Repo) -> None:
        repo.close()
