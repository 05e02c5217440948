"""
Explicit settings for the cache, credential and proxy code.
"""

import urllib.request
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional


def system_proxy_lookup() -> Optional[str]:
    """Return the host's HTTPS (or HTTP) proxy, if one is configured"""
    proxies = urllib.request.getproxies()
    return proxies.get("https") or proxies.get("http")


@dataclass
class GitCacheSettings:
    """Settings handed to the acquirer, sync engine and credential resolver"""

    cache_root: Path
    account_identity: Optional[str] = None
    password: Optional[str] = None
    proxy_lookup: Callable[[], Optional[str]] = field(default=system_proxy_lookup)
