"""
Locator parsing: `path[branch]` strings naming a branch of a git repository.

The recognized remote formats are
    git://host/repo[branch]
    ssh://host/repo[branch]
    http://host/repo[branch]
    https://host/repo[branch]
    file://repo[branch]
Anything without a `letters://` prefix is a local filesystem path.
"""

import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from gitcache.utils.git.errors import ParseError

_SCHEME_RE = re.compile(r"^([a-z]+)://")
_PATH_SEPARATORS = {"/", os.sep}
_HTTPS_PREFIX = "https://"
_FILE_PREFIX = "file://"


class Scheme(Enum):
    NONE = "none"
    FILE = "file"
    GIT = "git"
    SSH = "ssh"
    HTTP = "http"
    HTTPS = "https"
    OTHER = "other"

    @property
    def is_remote(self) -> bool:
        """True for every scheme that goes through the local cache"""
        return self is not Scheme.NONE


@dataclass(frozen=True)
class Locator:
    raw_path: str
    scheme: Scheme
    branch: str
    embedded_identity: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.raw_path}[{self.branch}]"


def split_locator(text: str) -> Tuple[str, str]:
    """
    Split `path[branch]` into its path and branch.

    The opening bracket is the nearest `[` before the final `]`; brackets
    cannot be nested or escaped. Trailing path separators are dropped from
    the path.

    Raises:
        ParseError: If there is no bracketed branch suffix, the branch is
            empty, or nothing is left of the path
    """
    close = len(text) - 1
    if close < 0 or text[close] != "]":
        raise ParseError(f"'{text}' has no [branch] suffix")

    start = close - 1
    while start >= 0 and text[start] != "[":
        start -= 1
    if start < 0:
        raise ParseError(f"'{text}' has no opening '[' for its branch")

    branch = text[start + 1:close]
    if not branch:
        raise ParseError(f"'{text}' names an empty branch")

    end = start
    while end > 0 and text[end - 1] in _PATH_SEPARATORS:
        end -= 1
    if end == 0:
        raise ParseError(f"'{text}' names an empty repository path")

    return text[:end], branch


def detect_scheme(path: str) -> Scheme:
    match = _SCHEME_RE.match(path)
    if not match:
        return Scheme.NONE
    try:
        return Scheme(match.group(1))
    except ValueError:
        return Scheme.OTHER


def extract_https_identity(url: str) -> Tuple[str, Optional[str]]:
    """
    Pull an account identity out of an https URL.

    Only an `@` that comes before the first `/` of the host part delimits an
    account; any other `@` belongs to the path.

    Returns:
        (url without the identity, identity or None)
    """
    if not url.startswith(_HTTPS_PREFIX):
        return url, None

    rest = url[len(_HTTPS_PREFIX):]
    at = rest.find("@")
    slash = rest.find("/")
    if at < 0 or slash < 0 or slash < at:
        return url, None

    return _HTTPS_PREFIX + rest[at + 1:], rest[:at]


def parse_locator(text: str) -> Locator:
    """
    Parse a `path[branch]` locator.

    `file://` paths are reduced to plain local paths (still cached as
    remotes), and https URLs have any embedded account identity removed.

    Raises:
        ParseError: If the text is not a locator
    """
    path, branch = split_locator(text)
    # Stripping separators can eat into a bare prefix such as "file://"
    scheme = detect_scheme(text)

    if scheme is Scheme.FILE:
        path = path[len(_FILE_PREFIX):]
        if not path:
            raise ParseError(f"'{text}' names an empty repository path")

    identity = None
    if scheme is Scheme.HTTPS:
        path, identity = extract_https_identity(path)

    return Locator(
        raw_path=path, scheme=scheme, branch=branch, embedded_identity=identity
    )
