import pytest
from unittest.mock import MagicMock

from assetcache.core.cache_storage import FileCacheStorage
from assetcache.core.command_handler import CommandHandler, EXIT_ERROR, EXIT_MISS, EXIT_OK
from assetcache.domain.exceptions import CacheStorageSaveError
from assetcache.domain.interfaces.file_system import FileSystem
from assetcache.domain.interfaces.user_interface import UserInterface


@pytest.fixture
def storage(memory_fs, json_serializer):
    return FileCacheStorage("/cache", "storage.json", memory_fs, json_serializer)


@pytest.fixture
def mock_source_fs():
    return MagicMock(spec=FileSystem)


@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)


@pytest.fixture
def command_handler(storage, mock_source_fs, mock_ui):
    """Fixture to create CommandHandler with an in-memory storage and mocked I/O."""
    return CommandHandler(storage=storage, file_system=mock_source_fs, ui=mock_ui)


def test_handle_put_caches_and_saves(command_handler, storage, mock_source_fs, mock_ui, memory_fs):
    mock_source_fs.read.return_value = b"pixels"

    code = command_handler.handle_put("/assets/hero.png", "hero", "2.0")

    assert code == EXIT_OK
    assert storage.get("hero") == b"pixels"
    assert storage.matches_version("hero", "2.0")
    assert storage.version == "1.0"
    assert memory_fs.file_exists("/cache/storage.json")
    mock_ui.display_info.assert_called_once_with("Cached 6 bytes as 'hero' (version 2.0).")


def test_handle_put_unreadable_source(command_handler, storage, mock_source_fs, mock_ui):
    mock_source_fs.read.side_effect = FileNotFoundError("nope")

    code = command_handler.handle_put("/assets/missing.png", "missing")

    assert code == EXIT_ERROR
    assert not storage.has("missing")
    mock_ui.display_error.assert_called_once()


def test_handle_put_save_failure(command_handler, storage, mock_source_fs, mock_ui, mocker):
    mock_source_fs.read.return_value = b"x"
    mocker.patch.object(storage, "save_cache_storage_file", side_effect=CacheStorageSaveError("disk full"))

    assert command_handler.handle_put("/a", "a") == EXIT_ERROR
    mock_ui.display_error.assert_called_once_with("disk full")


def test_handle_get_reports_size(command_handler, storage, mock_ui):
    storage.set(b"12345", "a")
    assert command_handler.handle_get("a") == EXIT_OK
    mock_ui.display_output.assert_called_once_with("a: 5 bytes")


def test_handle_get_writes_output(command_handler, storage, mock_source_fs):
    storage.set(b"12345", "a")
    assert command_handler.handle_get("a", "/out/a.bin") == EXIT_OK
    mock_source_fs.write.assert_called_once_with("/out/a.bin", b"12345")


def test_handle_get_missing(command_handler, mock_ui):
    assert command_handler.handle_get("nope") == EXIT_MISS
    mock_ui.display_warning.assert_called_once()


def test_handle_has(command_handler, storage):
    storage.set(b"", "")
    assert command_handler.handle_has("") == EXIT_OK
    assert command_handler.handle_has("other") == EXIT_MISS


def test_handle_check(command_handler, storage, mock_ui):
    storage.set(b"1", "a", "1.1")

    assert command_handler.handle_check("a", "1.1") == EXIT_OK
    assert command_handler.handle_check("a", "2.0") == EXIT_MISS
    mock_ui.display_output.assert_called_with("a: stale (cached 1.1, wanted 2.0)")
    assert command_handler.handle_check("b", "1.1") == EXIT_MISS
    mock_ui.display_output.assert_called_with("b: missing")


def test_handle_delete(command_handler, storage, mock_ui):
    storage.set(b"1", "a")
    storage.set(b"2", "b")

    assert command_handler.handle_delete("a") == EXIT_OK

    assert not storage.has("a")
    assert storage.has("b")
    assert storage.version == "1.0"


def test_handle_delete_missing_is_not_an_error(command_handler, mock_ui):
    assert command_handler.handle_delete("ghost") == EXIT_OK
    mock_ui.display_warning.assert_called_once()


def test_handle_clear_asks_first(command_handler, storage, mock_ui):
    storage.set(b"1", "a")
    mock_ui.ask_yes_no_question.return_value = False

    assert command_handler.handle_clear() == EXIT_OK
    assert storage.has("a")

    mock_ui.ask_yes_no_question.return_value = True
    assert command_handler.handle_clear() == EXIT_OK
    assert len(storage) == 0


def test_handle_clear_assume_yes(command_handler, storage, mock_ui):
    storage.set(b"1", "a")
    assert command_handler.handle_clear(assume_yes=True) == EXIT_OK
    mock_ui.ask_yes_no_question.assert_not_called()
    assert len(storage) == 0


def test_handle_info(command_handler, storage, mock_ui):
    storage.set(b"1", "a")
    assert command_handler.handle_info() == EXIT_OK
    path, version, entries = mock_ui.display_storage_summary.call_args[0]
    assert path == storage.path
    assert version is None
    assert [e.id for e in entries] == ["a"]
