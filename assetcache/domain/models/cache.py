"""Cache entry model.

A CacheEntry is owned by the storage engine's index. Its payload is kept
as immutable ``bytes`` so handing it out never aliases the index.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from assetcache.domain.models.common import CacheId, EntryRecord, EntryVersion


@dataclass(frozen=True)
class CacheEntry:
    """One cached artifact: id, raw content and an optional version tag."""
    id: CacheId
    data: bytes
    version: EntryVersion = EntryVersion("")

    def matches(self, version: str) -> bool:
        """Exact (ordinal) comparison against the stored version tag."""
        return self.version == version

    def to_record(self) -> EntryRecord:
        return {"data": self.data, "version": self.version}

    @classmethod
    def from_record(cls, entry_id: Any, record: Any) -> "CacheEntry":
        """Builds an entry from a deserialized record.

        Args:
            entry_id: The key the record was stored under.
            record: Mapping with ``data`` (bytes) and ``version`` (str).

        Returns:
            The reconstructed CacheEntry.

        Raises:
            ValueError: If the id or record does not have the expected shape.
        """
        if not isinstance(entry_id, str):
            raise ValueError(f"Cache id must be a string, got {type(entry_id).__name__}")
        if not isinstance(record, Mapping):
            raise ValueError(f"Record for id '{entry_id}' is not a mapping")

        data = record.get("data")
        version = record.get("version", "")
        if version is None:
            version = ""
        if not isinstance(data, (bytes, bytearray)):
            raise ValueError(f"Record for id '{entry_id}' has no binary data")
        if not isinstance(version, str):
            raise ValueError(f"Record for id '{entry_id}' has a non-string version")
        return cls(id=CacheId(entry_id), data=bytes(data), version=EntryVersion(version))
