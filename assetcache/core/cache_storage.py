"""File-backed cache storage engine.

Keeps an in-memory index of CacheEntry objects keyed by id and persists it
as a single storage file through the injected FileSystem and Serializer
ports. The engine itself performs no direct I/O.

Load and save are deliberately asymmetric: a missing, unreadable or
corrupted storage file is treated as an empty cache, while any failure to
save is raised to the caller as CacheStorageSaveError.
"""

import collections.abc
import logging
import os
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from assetcache.domain.exceptions import CacheStorageSaveError
from assetcache.domain.interfaces.file_system import FileAccess, FileMode, FileShare, FileSystem
from assetcache.domain.interfaces.serializer import Serializer
from assetcache.domain.models.cache import CacheEntry
from assetcache.domain.models.common import (
    CacheId,
    DirPath,
    EntryVersion,
    FilePath,
    StorageDocument,
    StorageVersion,
)

logger = logging.getLogger(__name__)

# Schema tag written into every storage file produced by this engine
STORAGE_SCHEMA_VERSION = StorageVersion("1.0")

BinaryData = Union[bytes, bytearray, memoryview]


class StorageLoadError(Exception):
    """Internal signal for an unusable storage document. Never leaves this module."""


class FileCacheStorage:
    """Versioned key/value cache for binary artifacts, persisted to one file."""

    def __init__(
        self,
        directory: str,
        file_name: str,
        file_system: FileSystem,
        serializer: Serializer,
    ):
        """Creates the storage and loads any existing index (best effort).

        Args:
            directory: Directory holding the storage file.
            file_name: Name of the storage file inside ``directory``.
            file_system: FileSystem port used for all I/O.
            serializer: Serializer port used to encode the index.
        """
        self.directory = DirPath(str(directory))
        self.file_name = str(file_name)
        self.file_system = file_system
        self.serializer = serializer

        self._entries: Dict[CacheId, CacheEntry] = {}
        self._version: Optional[StorageVersion] = None

        self._load()

    @classmethod
    def open(
        cls,
        directory: str,
        file_name: str,
        file_system: FileSystem,
        serializer: Serializer,
    ) -> "FileCacheStorage":
        """Alternate constructor, reads a bit nicer at call sites."""
        return cls(directory, file_name, file_system, serializer)

    # --- Read-only state ---

    @property
    def path(self) -> FilePath:
        """Full path of the backing storage file."""
        return FilePath(os.path.join(self.directory, self.file_name))

    @property
    def version(self) -> Optional[StorageVersion]:
        """Schema tag of the storage file, None until loaded from or saved to disk."""
        return self._version

    @property
    def cache_entries(self) -> Mapping[CacheId, CacheEntry]:
        """Read-only view of the live index."""
        return _ReadOnlyEntries(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    # --- Index operations ---

    def set(self, data: BinaryData, entry_id: str, version: str = "") -> None:
        """Inserts or replaces the entry for ``entry_id``.

        The previous data and version of that id are discarded. Nothing is
        written to disk until save_cache_storage_file() is called.

        Raises:
            TypeError: If data is not bytes-like or id/version are not strings.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"data must be bytes-like, got {type(data).__name__}")
        if not isinstance(entry_id, str):
            raise TypeError(f"id must be a string, got {type(entry_id).__name__}")
        if version is None:
            version = ""
        if not isinstance(version, str):
            raise TypeError(f"version must be a string, got {type(version).__name__}")

        replaced = entry_id in self._entries
        self._entries[CacheId(entry_id)] = CacheEntry(
            id=CacheId(entry_id), data=bytes(data), version=EntryVersion(version)
        )
        logger.debug(
            f"{'Replaced' if replaced else 'Stored'} entry id={entry_id!r} "
            f"version={version!r} size={len(data)}"
        )

    def get(self, entry_id: str) -> Optional[bytes]:
        """Returns the cached bytes for ``entry_id``, or None if absent."""
        entry = self._entries.get(entry_id)
        return entry.data if entry is not None else None

    def has(self, entry_id: str) -> bool:
        return entry_id in self._entries

    def matches_version(self, entry_id: str, version: str) -> bool:
        """True if ``entry_id`` is cached with exactly this version tag.

        Comparison is ordinal string equality; "" only matches "".
        """
        entry = self._entries.get(entry_id)
        return entry is not None and entry.matches(version)

    def delete(self, entry_id: str) -> None:
        """Removes ``entry_id``. Unknown ids are ignored."""
        if self._entries.pop(entry_id, None) is not None:
            logger.debug(f"Deleted entry id={entry_id!r}")

    def delete_all(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.debug(f"Deleted all {count} entries")

    # --- Persistence ---

    def save_cache_storage_file(self) -> None:
        """Writes the whole index to the storage file.

        The file is replaced as a whole by the FileSystem port. On success
        the storage version is stamped with STORAGE_SCHEMA_VERSION.

        Raises:
            CacheStorageSaveError: If serializing or writing fails. The
                in-memory index and version are left untouched.
        """
        path = self.path
        document: StorageDocument = {
            "version": STORAGE_SCHEMA_VERSION,
            "entries": {entry_id: entry.to_record() for entry_id, entry in self._entries.items()},
        }
        try:
            payload = self.serializer.serialize(document)
            self.file_system.write(
                path, payload, FileMode.CREATE, FileAccess.WRITE, FileShare.READ_WRITE
            )
        except Exception as e:
            logger.error(f"Failed to save cache storage file {path}: {e}", exc_info=True)
            raise CacheStorageSaveError(f"Failed to save cache storage file {path}: {e}", path=path) from e

        self._version = STORAGE_SCHEMA_VERSION
        logger.info(f"Saved {len(self._entries)} cache entries to {path}")

    def reload(self) -> None:
        """Discards the in-memory index and loads it again from storage."""
        self._load()

    def _load(self) -> None:
        """Loads the index from storage, falling back to an empty cache on any problem."""
        self._entries.clear()
        self._version = None
        path = self.path

        try:
            if not self.file_system.dir_exists(self.directory):
                logger.debug(f"Cache directory {self.directory} does not exist, starting empty.")
                return
            if not self.file_system.file_exists(path):
                logger.debug(f"Cache storage file {path} does not exist, starting empty.")
                return
            raw = self.file_system.read(path, FileMode.OPEN, FileAccess.READ, FileShare.READ)
            document = self.serializer.deserialize(raw)
            version, entries = self._parse_document(document)
        except Exception as e:
            # Load failures always degrade to an empty, unsaved cache
            logger.warning(f"Ignoring unreadable cache storage file {path}: {e}")
            return

        self._entries.update(entries)
        self._version = version
        logger.info(f"Loaded {len(entries)} cache entries from {path} (schema {version})")

    @staticmethod
    def _parse_document(document: Any):
        """Validates a deserialized document and builds the entry index from it."""
        if not isinstance(document, collections.abc.Mapping):
            raise StorageLoadError(f"expected a mapping, got {type(document).__name__}")

        version = document.get("version")
        if version != STORAGE_SCHEMA_VERSION:
            raise StorageLoadError(
                f"unsupported schema version {version!r}, expected {STORAGE_SCHEMA_VERSION!r}"
            )

        records = document.get("entries")
        if records is None:
            records = {}
        if not isinstance(records, collections.abc.Mapping):
            raise StorageLoadError("'entries' is not a mapping")

        entries: Dict[CacheId, CacheEntry] = {}
        for entry_id, record in records.items():
            try:
                entry = CacheEntry.from_record(entry_id, record)
            except ValueError as e:
                raise StorageLoadError(str(e)) from e
            entries[entry.id] = entry
        return StorageVersion(version), entries


class _ReadOnlyEntries(collections.abc.Mapping):
    """Live, read-only mapping over the engine's index."""

    def __init__(self, entries: Dict[CacheId, CacheEntry]):
        self._entries = entries

    def __getitem__(self, key: CacheId) -> CacheEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[CacheId]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._entries)} entries)"
