"""
Git cache error types.

Structural failures (CorruptCache, CloneFailure, OpenFailure) leave no usable
repository and propagate to the caller. The rest are raised by the backend and
turned into reports by the sync engine.
"""


class GitCacheError(RuntimeError):
    """Base class for git cache failures"""


class ParseError(GitCacheError, ValueError):
    """Text is not a `path[branch]` locator"""


class CorruptCache(GitCacheError):
    """Cache path exists but is not a directory"""


class CloneFailure(GitCacheError):
    pass


class OpenFailure(GitCacheError):
    pass


class RemoteMissing(GitCacheError):
    """Repository has no remote to synchronize with"""


class FetchFailure(GitCacheError):
    pass


class BranchMissing(GitCacheError):
    pass


class UpstreamMissing(GitCacheError):
    pass


class MergeBaseFailure(GitCacheError):
    pass


class UpdateFailure(GitCacheError):
    """Moving the local branch to the remote commit failed"""


class PushFailure(GitCacheError):
    pass

class StatusFailure(GitCacheError):
    """Working tree status could not be read"""


class ConfigFailure(GitCacheError):
    """Repository config or credential helper could not be written"""
