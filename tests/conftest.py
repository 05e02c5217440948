"""Shared pytest configuration and fixtures for the gitcache test suite.

This module provides:
- Common fixtures (temp directories, settings, real git repositories)
- Test configuration (paths, markers)
"""
import sys
from pathlib import Path

import pytest
from git import Actor, Repo


# Add src/ to path so test modules can import the gitcache package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from gitcache.utils.git.settings import GitCacheSettings  # noqa: E402

TEST_ACTOR = Actor("Test User", "test@example.com")


def commit_file(repo: Repo, name: str, content: str, message: str = None):
    """Write a file into a work tree and commit it"""
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(
        message or f"Update {name}", author=TEST_ACTOR, committer=TEST_ACTOR
    )


@pytest.fixture
def commit():
    """Provide the commit_file helper."""
    return commit_file


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def settings(tmp_path):
    """Settings with a private cache root and no proxy."""
    return GitCacheSettings(
        cache_root=tmp_path / "cache",
        account_identity="user%40example.com",
        password="s3cret",
        proxy_lookup=lambda: None,
    )


@pytest.fixture
def origin_repo(tmp_path):
    """A bare 'remote' repository with one commit on branch main."""
    origin = Repo.init(tmp_path / "origin.git", bare=True)
    seed = Repo.init(tmp_path / "seed")
    commit_file(seed, "data.txt", "v1\n", "Initial commit")
    seed.git.branch("-M", "main")
    seed.create_remote("origin", origin.git_dir)
    seed.git.push("origin", "main")
    origin.git.symbolic_ref("HEAD", "refs/heads/main")
    yield origin
    seed.close()
    origin.close()


@pytest.fixture
def seed_repo(origin_repo, tmp_path):
    """Second working copy of the remote, used to advance it."""
    repo = Repo(tmp_path / "seed")
    yield repo
    repo.close()


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (uses real git repositories)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests by whether they build real repositories."""
    for item in items:
        if "origin_repo" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
