import pytest

from assetcache.domain.interfaces.file_system import FileMode
from assetcache.infrastructure.filesystem.memory_fs import InMemoryFileSystem


def test_directories_follow_files():
    fs = InMemoryFileSystem()
    assert not fs.dir_exists("/data")

    fs.write("/data/cache/storage.json", b"{}")

    assert fs.dir_exists("/data")
    assert fs.dir_exists("/data/cache")
    assert fs.file_exists("/data/cache/storage.json")
    assert not fs.file_exists("/data/cache")


def test_make_dir_without_files():
    fs = InMemoryFileSystem()
    fs.make_dir("/a/b")
    assert fs.dir_exists("/a")
    assert fs.dir_exists("/a/b/")


def test_read_write_and_append():
    fs = InMemoryFileSystem()
    fs.write("/f", b"ab")
    fs.write("/f", b"cd", mode=FileMode.APPEND)
    assert fs.read("/f") == b"abcd"
    fs.write("/f", b"x")
    assert fs.read("/f") == b"x"


def test_paths_are_normalized():
    fs = InMemoryFileSystem()
    fs.write("/cache//sub/../storage", b"1")
    assert fs.file_exists("/cache/storage")


def test_read_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        InMemoryFileSystem().read("/missing")
