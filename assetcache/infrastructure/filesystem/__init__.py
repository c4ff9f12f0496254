"""File system adapters (local disk, in-memory)."""
