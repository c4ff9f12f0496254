"""Defines common Value Objects used across the cache domain.

These objects represent simple values like cache ids, version tags and
storage paths, keeping signatures readable and consistent.
"""

from typing import Dict, NewType, TypedDict

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
CacheId = NewType("CacheId", str)              # Key of a cache entry ("" is legal)
EntryVersion = NewType("EntryVersion", str)    # Per-entry version tag ("" = no tag)
StorageVersion = NewType("StorageVersion", str)  # Schema tag of the storage file itself

# === File System Context ===
DirPath = NewType("DirPath", str)              # Directory holding the storage file
FilePath = NewType("FilePath", str)            # Full path to a file


# --- Structured Data ---
class EntryRecord(TypedDict):
    """Plain, serializer-friendly form of a single cache entry."""
    data: bytes
    version: str


class StorageDocument(TypedDict):
    """The whole object written to the storage file."""
    version: str
    entries: Dict[str, EntryRecord]

