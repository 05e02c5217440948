import pytest
from unittest.mock import MagicMock

from gitcache.utils.git.errors import CloneFailure, CorruptCache, FetchFailure
from gitcache.utils.git.locator import parse_locator
from gitcache.utils.git.repository import (
    AcquireResult,
    acquire_repository,
    create_local_repo,
    update_local_repo,
)
from gitcache.utils.git.sync import SyncDecision, SyncResult

LOCATOR = parse_locator("https://example.com/repo[main]")


def test_acquire_regular_file_is_corrupt(tmp_path, settings):
    path = tmp_path / "entry"
    path.write_text("not a repository")
    backend = MagicMock()

    with pytest.raises(CorruptCache, match="is corrupt"):
        acquire_repository(path, LOCATOR, settings, MagicMock(), backend)

    backend.open.assert_not_called()
    backend.clone.assert_not_called()


def test_acquire_missing_path_clones(tmp_path, settings, mocker):
    sync = mocker.patch("gitcache.utils.git.repository.sync_repository")
    backend = MagicMock()
    path = tmp_path / "cache" / "abc"

    result = acquire_repository(path, LOCATOR, settings, MagicMock(), backend)

    assert result.cloned is True
    assert result.sync is None
    assert result.repo is backend.clone.return_value
    assert path.parent.is_dir()
    sync.assert_not_called()


def test_create_local_repo_passes_credentials(tmp_path, settings):
    backend = MagicMock()
    path = tmp_path / "cache" / "abc"

    create_local_repo(path, LOCATOR, settings, backend)

    args, kwargs = backend.clone.call_args
    assert args == ("https://example.com/repo", path, "main")
    assert kwargs["env"]["GIT_TERMINAL_PROMPT"] == "0"
    assert "GIT_ASKPASS" in kwargs["env"]


def test_create_local_repo_propagates_clone_failure(tmp_path, settings):
    backend = MagicMock()
    backend.clone.side_effect = CloneFailure("git clone failed")

    with pytest.raises(CloneFailure):
        create_local_repo(tmp_path / "abc", LOCATOR, settings, backend)


def test_create_local_repo_under_regular_file(tmp_path, settings):
    blocker = tmp_path / "afile"
    blocker.write_text("not a directory\n")
    backend = MagicMock()

    with pytest.raises(CloneFailure, match="Unable to prepare cache directory"):
        create_local_repo(blocker / "cache" / "abc", LOCATOR, settings, backend)

    backend.clone.assert_not_called()


def test_acquire_existing_directory_syncs(tmp_path, settings, mocker):
    outcome = SyncResult(SyncDecision.NO_OP)
    sync = mocker.patch(
        "gitcache.utils.git.repository.sync_repository", return_value=outcome
    )
    backend = MagicMock()
    report = MagicMock()
    path = tmp_path / "abc"
    path.mkdir()

    result = acquire_repository(path, LOCATOR, settings, report, backend)

    assert result == AcquireResult(backend.open.return_value, cloned=False, sync=outcome)
    sync.assert_called_once_with(
        backend.open.return_value, "main", LOCATOR, settings, report, backend
    )
    backend.clone.assert_not_called()


def test_update_local_repo_closes_on_unexpected_error(tmp_path, settings, mocker):
    mocker.patch(
        "gitcache.utils.git.repository.sync_repository",
        side_effect=FetchFailure("boom"),
    )
    backend = MagicMock()

    with pytest.raises(FetchFailure):
        update_local_repo(tmp_path, LOCATOR, settings, MagicMock(), backend)

    backend.close.assert_called_once_with(backend.open.return_value)
