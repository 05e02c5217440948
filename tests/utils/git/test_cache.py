import hashlib
from pathlib import Path

from gitcache.utils.git.cache import (
    cache_directory_name,
    get_cache_entry,
    get_cache_path,
)
from gitcache.utils.git.locator import parse_locator


def test_cache_directory_name_is_deterministic():
    first = cache_directory_name("https://example.com/repo", "main")
    second = cache_directory_name("https://example.com/repo", "main")
    assert first == second


def test_cache_directory_name_format():
    name = cache_directory_name("https://example.com/repo", "main")
    assert len(name) == 16
    assert name == name.lower()
    int(name, 16)


def test_cache_directory_name_matches_sha1_prefix():
    expected = hashlib.sha1(b"repo\0branch").hexdigest()[:16]
    assert cache_directory_name("repo", "branch") == expected


def test_cache_directory_name_separates_remote_and_branch():
    assert cache_directory_name("repo1", "branch") != cache_directory_name(
        "repo", "1branch"
    )


def test_cache_directory_name_depends_on_branch():
    assert cache_directory_name("repo", "main") != cache_directory_name("repo", "dev")


def test_get_cache_path(tmp_path):
    path = get_cache_path("repo", "branch", tmp_path)
    assert path.parent == tmp_path
    assert path.name == cache_directory_name("repo", "branch")
    assert not path.exists()


def test_get_cache_entry_uses_stripped_url(tmp_path):
    locator = parse_locator("https://me@example.com/repo[main]")
    entry = get_cache_entry(locator, tmp_path)

    assert entry.remote is locator
    assert entry.local_path == Path(tmp_path) / cache_directory_name(
        "https://example.com/repo", "main"
    )
