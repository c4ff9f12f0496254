import os

import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock

from assetcache.domain.interfaces.file_system import FileSystem
from assetcache.domain.interfaces.serializer import Serializer
from assetcache.infrastructure.config import settings
from assetcache.infrastructure.filesystem.memory_fs import InMemoryFileSystem
from assetcache.infrastructure.serialization.json_serializer import JsonSerializer

CACHE_DIR = "/cache"


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def mock_file_system():
    """FileSystem double: directory exists, storage file does not."""
    fs = MagicMock(spec=FileSystem)
    fs.dir_exists.return_value = True
    fs.file_exists.return_value = False
    fs.read.return_value = bytes([0x33] * 5)
    return fs


@pytest.fixture
def mock_serializer():
    """Serializer double that produces a fixed payload."""
    serializer = MagicMock(spec=Serializer)
    serializer.serialize.return_value = b"abcdefg"
    return serializer


@pytest.fixture
def memory_fs():
    fs = InMemoryFileSystem()
    fs.make_dir(CACHE_DIR)
    return fs


@pytest.fixture
def json_serializer():
    return JsonSerializer()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keeps tests away from the user's real config file and environment."""
    monkeypatch.setattr(settings, "DEFAULT_CONFIG_FILE", tmp_path / "no-config.yaml")
    monkeypatch.setattr(settings, "_config", {})
    monkeypatch.setattr(settings, "_loaded", False)
    monkeypatch.setattr(settings, "find_dotenv_path", lambda: None)
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    settings.clear_test_config()
    yield
    settings.clear_test_config()
