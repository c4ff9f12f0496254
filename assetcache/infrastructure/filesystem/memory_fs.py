"""In-memory implementation of the FileSystem interface.

Keeps files in a dict keyed by normalized POSIX path. Directories exist if
they were created explicitly or contain a file. Used for tests and dry runs.
"""

import logging
import posixpath
from typing import Dict, Set

from assetcache.domain.interfaces.file_system import FileAccess, FileMode, FileShare, FileSystem
from assetcache.domain.models.common import DirPath, FilePath

logger = logging.getLogger(__name__)


def _normalize(path: str) -> str:
    return posixpath.normpath(str(path).replace("\\", "/"))


class InMemoryFileSystem(FileSystem):
    """FileSystem held entirely in process memory."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self._dirs: Set[str] = set()

    def make_dir(self, path: DirPath) -> None:
        """Registers a directory (and its parents)."""
        current = _normalize(path)
        while current not in ("", ".", "/") and current not in self._dirs:
            self._dirs.add(current)
            current = posixpath.dirname(current)

    def dir_exists(self, path: DirPath) -> bool:
        target = _normalize(path)
        if target in self._dirs:
            return True
        prefix = target.rstrip("/") + "/"
        return any(name.startswith(prefix) for name in self.files)

    def file_exists(self, path: FilePath) -> bool:
        return _normalize(path) in self.files

    def read(
        self,
        path: FilePath,
        mode: FileMode = FileMode.OPEN,
        access: FileAccess = FileAccess.READ,
        share: FileShare = FileShare.READ,
    ) -> bytes:
        key = _normalize(path)
        if key not in self.files:
            if mode == FileMode.OPEN:
                raise FileNotFoundError(f"File not found: {path}")
            return b""
        return self.files[key]

    def write(
        self,
        path: FilePath,
        data: bytes,
        mode: FileMode = FileMode.CREATE,
        access: FileAccess = FileAccess.WRITE,
        share: FileShare = FileShare.READ_WRITE,
    ) -> None:
        key = _normalize(path)
        if mode == FileMode.OPEN and key not in self.files:
            raise FileNotFoundError(f"File not found: {path}")
        if mode == FileMode.APPEND:
            self.files[key] = self.files.get(key, b"") + bytes(data)
        else:
            self.files[key] = bytes(data)
        self.make_dir(DirPath(posixpath.dirname(key)))
        logger.debug(f"Stored {len(data)} bytes in memory at {key}")
