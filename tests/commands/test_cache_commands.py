import pytest
import typer
from pathlib import Path
from unittest.mock import MagicMock

from gitcache.commands.cache import open_locator, show_path
from gitcache.utils.git.errors import CorruptCache
from gitcache.utils.git.locator import parse_locator
from gitcache.utils.git.manager import OpenResult
from gitcache.utils.git.sync import AbortReason, SyncDecision, SyncResult

TEXT = "https://example.com/repo[main]"


@pytest.fixture
def manager(mocker):
    manager = MagicMock()
    mocker.patch("gitcache.commands.cache.GitCacheManager", return_value=manager)
    return manager


@pytest.fixture(autouse=True)
def console(mocker):
    return mocker.patch("gitcache.commands.cache.console")


def make_result(**kwargs):
    repo = MagicMock()
    repo.working_dir = "/cache/abc"
    values = dict(
        repo=repo,
        branch="main",
        locator=parse_locator(TEXT),
        cache_path=Path("/cache/abc"),
    )
    values.update(kwargs)
    return OpenResult(**values)


def test_open_not_a_locator(mocker, manager):
    manager.open.return_value = None
    error = mocker.patch("gitcache.commands.cache.error")

    with pytest.raises(typer.Exit):
        open_locator("/no/branch")

    error.assert_called_once()


def test_open_fatal_error(mocker, manager):
    manager.open.return_value = make_result(
        repo=None, error=CorruptCache("Local git cache at '/cache/abc' is corrupt")
    )
    error = mocker.patch("gitcache.commands.cache.error")

    with pytest.raises(typer.Exit):
        open_locator(TEXT)

    error.assert_not_called()


def test_open_local_path_not_repository(mocker, manager):
    manager.open.return_value = make_result(
        repo=None, locator=parse_locator("/tmp/nope[main]"), cache_path=None
    )
    error = mocker.patch("gitcache.commands.cache.error")

    with pytest.raises(typer.Exit):
        open_locator("/tmp/nope[main]")

    assert "/tmp/nope" in error.call_args[0][0]


def test_open_cloned(mocker, manager, console):
    result = make_result(cloned=True)
    manager.open.return_value = result
    success = mocker.patch("gitcache.commands.cache.success")

    open_locator(TEXT)

    table = console.print.call_args[0][0]
    assert table.row_count == 5
    result.repo.close.assert_called_once()
    success.assert_called_once_with("Repository ready")


def test_open_with_aborted_sync_warns(mocker, manager):
    sync = SyncResult(
        SyncDecision.ABORTED,
        reason=AbortReason.FETCH_FAILED,
        message="Unable to fetch remote 'https://example.com/repo'",
    )
    result = make_result(sync=sync)
    manager.open.return_value = result
    warning = mocker.patch("gitcache.commands.cache.warning")

    open_locator(TEXT)

    assert "Unable to fetch" in warning.call_args[0][0]
    result.repo.close.assert_called_once()


def test_open_closes_repo_when_display_fails(manager, console):
    result = make_result(sync=SyncResult(SyncDecision.NO_OP))
    manager.open.return_value = result
    console.print.side_effect = RuntimeError("terminal gone")

    with pytest.raises(RuntimeError):
        open_locator(TEXT)

    result.repo.close.assert_called_once()


def test_show_path_remote(mocker, manager):
    manager.cache_path.return_value = Path("/cache/abc")
    info = mocker.patch("gitcache.commands.cache.info")

    show_path(TEXT)

    info.assert_called_once_with(str(Path("/cache/abc")))


def test_show_path_local(mocker, manager):
    manager.cache_path.return_value = None
    info = mocker.patch("gitcache.commands.cache.info")

    show_path("/srv/repo[main]")

    assert "used in place: /srv/repo" in info.call_args[0][0]


def test_show_path_invalid(mocker, manager):
    error = mocker.patch("gitcache.commands.cache.error")

    with pytest.raises(typer.Exit):
        show_path("/srv/repo")

    error.assert_called_once()
    manager.cache_path.assert_not_called()
