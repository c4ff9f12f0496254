"""Concrete implementation of the FileSystem interface using standard Python libraries
for local file system operations.

Uses `pathlib` for path handling. Whole-file writes go through a temporary
sibling file and `os.replace`, so a reader never sees a half written file.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path

# Domain Layer Imports
from assetcache.domain.interfaces.file_system import FileAccess, FileMode, FileShare, FileSystem
from assetcache.domain.models.common import DirPath, FilePath

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def _target_mode(file_path: Path) -> int:
    """Permission bits for a replaced file: the old file's, else what open() would create."""
    try:
        return stat.S_IMODE(file_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class LocalFileSystem(FileSystem):
    """Implementation of FileSystem for the local disk."""

    def __init__(self, fsync: bool = True):
        """Initializes the LocalFileSystem adapter.

        Args:
            fsync: Flush file contents to disk before the atomic rename.
        """
        self.fsync = fsync
        logger.debug("LocalFileSystem initialized.")

    def dir_exists(self, path: DirPath) -> bool:
        exists = Path(path).is_dir()
        logger.debug(f"Checked directory existence for {path}: {exists}")
        return exists

    def file_exists(self, path: FilePath) -> bool:
        exists = Path(path).is_file()
        logger.debug(f"Checked existence for {path}: {exists}")
        return exists

    def read(
        self,
        path: FilePath,
        mode: FileMode = FileMode.OPEN,
        access: FileAccess = FileAccess.READ,
        share: FileShare = FileShare.READ,
    ) -> bytes:
        """Reads the whole file as bytes."""
        file_path = Path(path)
        logger.debug(f"Attempting to read file: {file_path}")
        if access == FileAccess.WRITE:
            raise ValueError("Cannot read from a file opened with write-only access")
        if mode == FileMode.OPEN and not file_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            content = file_path.read_bytes()
            logger.debug(f"Successfully read {len(content)} bytes from {file_path}")
            return content
        except PermissionError as e:
            logger.error(f"Permission denied reading file: {file_path}")
            raise PermissionError(f"Permission denied: {path}") from e
        except OSError as e:
            logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
            raise IOError(f"Failed to read file {path}: {e}") from e

    def write(
        self,
        path: FilePath,
        data: bytes,
        mode: FileMode = FileMode.CREATE,
        access: FileAccess = FileAccess.WRITE,
        share: FileShare = FileShare.READ_WRITE,
    ) -> None:
        """Writes bytes to a file, replacing it atomically unless appending."""
        file_path = Path(path)
        logger.debug(f"Attempting to write {len(data)} bytes to file: {file_path}")
        if access == FileAccess.READ:
            raise ValueError("Cannot write to a file opened with read-only access")
        if mode == FileMode.OPEN and not file_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            # Ensure parent directory exists
            file_path.parent.mkdir(parents=True, exist_ok=True)
            if mode == FileMode.APPEND:
                with open(file_path, 'ab') as f:
                    f.write(data)
            else:
                self._replace_atomically(file_path, data)
            logger.debug(f"Successfully wrote to {file_path}")
        except PermissionError as e:
            logger.error(f"Permission denied writing file: {file_path}")
            raise PermissionError(f"Permission denied: {path}") from e
        except OSError as e:
            logger.error(f"Error writing file {file_path}: {e}", exc_info=True)
            raise IOError(f"Failed to write file {path}: {e}") from e

    def _replace_atomically(self, file_path: Path, data: bytes) -> None:
        """Writes to a temp file in the target directory, then renames it over the target."""
        mode = _target_mode(file_path)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{file_path.name}.", suffix=TEMP_SUFFIX, dir=str(file_path.parent)
        )
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                if self.fsync:
                    f.flush()
                    os.fsync(f.fileno())
            os.chmod(temp_name, mode)
            # os.replace is atomic on both Windows and POSIX
            os.replace(temp_name, str(file_path))
        except BaseException:
            try:
                os.unlink(temp_name)
            except FileNotFoundError:
                pass
            raise
