"""Interface for interacting with the file system.

Defines the contract the cache storage engine uses to check for, read and
write its storage file, allowing the engine to be independent of the
concrete implementation (local disk, in-memory, ...). Payloads are opaque
byte buffers; the engine never assumes an on-disk encoding.
"""

import abc
import enum

from assetcache.domain.models.common import DirPath, FilePath


class FileMode(enum.Enum):
    """How a file is opened."""
    OPEN = "open"        # File must already exist
    CREATE = "create"    # Create, or truncate and replace an existing file
    APPEND = "append"    # Create if missing, then append


class FileAccess(enum.Enum):
    """What the caller intends to do with the handle."""
    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"


class FileShare(enum.Enum):
    """What other handles may do while this one is open (advisory)."""
    NONE = "none"
    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"


class FileSystem(abc.ABC):
    """Abstract Base Class for file system operations."""

    @abc.abstractmethod
    def dir_exists(self, path: DirPath) -> bool:
        """Checks if a directory exists.

        Args:
            path: The directory path to check.

        Returns:
            True if the directory exists, False otherwise.
        """
        pass

    @abc.abstractmethod
    def file_exists(self, path: FilePath) -> bool:
        """Checks if a regular file exists.

        Args:
            path: The file path to check.

        Returns:
            True if the file exists, False otherwise.
        """
        pass

    @abc.abstractmethod
    def read(
        self,
        path: FilePath,
        mode: FileMode = FileMode.OPEN,
        access: FileAccess = FileAccess.READ,
        share: FileShare = FileShare.READ,
    ) -> bytes:
        """Reads the entire content of a file.

        Args:
            path: The path to the file to read.
            mode: Open mode, normally FileMode.OPEN.
            access: Requested access, must allow reading.
            share: Sharing hint for other handles.

        Returns:
            The raw content of the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            PermissionError: If read permissions are denied.
            IOError: For other file system errors.
        """
        pass

    @abc.abstractmethod
    def write(
        self,
        path: FilePath,
        data: bytes,
        mode: FileMode = FileMode.CREATE,
        access: FileAccess = FileAccess.WRITE,
        share: FileShare = FileShare.READ_WRITE,
    ) -> None:
        """Writes content to a file.

        With FileMode.CREATE an existing file is replaced as a whole; readers
        must never observe a partially written file.

        Args:
            path: The path to the file to write.
            data: The bytes to write.
            mode: Open mode (CREATE replaces, APPEND appends).
            access: Requested access, must allow writing.
            share: Sharing hint for other handles.

        Raises:
            PermissionError: If write permissions are denied.
            IOError: For other file system errors.
        """
        pass
