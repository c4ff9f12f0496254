"""Domain exceptions for the cache storage engine.

Load-time problems never surface as exceptions (a broken cache file is
treated as an empty cache), so these only cover failures the caller must
see: saving the index and (de)serializing it.
"""

from typing import Optional


class CacheStorageError(Exception):
    """Base class for cache storage errors."""


class SerializationError(CacheStorageError):
    """Raised by a serializer when it cannot encode or decode a document."""


class CacheStorageSaveError(CacheStorageError):
    """Raised when the index could not be written to its storage file."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
