"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and runs them
against a FileCacheStorage. Every handler returns a process exit code:
0 for success / cache hit, 1 for a miss or a failure.
"""

import logging
from typing import Optional

from assetcache.core.cache_storage import FileCacheStorage
from assetcache.domain.exceptions import CacheStorageError
from assetcache.domain.interfaces.file_system import FileSystem
from assetcache.domain.interfaces.user_interface import UserInterface
from assetcache.domain.models.common import FilePath

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISS = 1
EXIT_ERROR = 1


class CommandHandler:
    """Handles incoming commands and delegates to the cache storage."""

    def __init__(self, storage: FileCacheStorage, file_system: FileSystem, ui: UserInterface):
        """Initializes the CommandHandler.

        Args:
            storage: The opened cache storage.
            file_system: Used to read source files and write extracted entries.
            ui: Where results and errors are shown.
        """
        self.storage = storage
        self.file_system = file_system
        self.ui = ui

    def _save(self) -> bool:
        try:
            self.storage.save_cache_storage_file()
            return True
        except CacheStorageError as e:
            self.ui.display_error(str(e))
            return False

    def handle_put(self, source: str, entry_id: str, version: str = "") -> int:
        """Caches the bytes of ``source`` under ``entry_id``."""
        logger.info(f"Handling 'put' for id={entry_id!r} from {source}")
        try:
            data = self.file_system.read(FilePath(source))
        except OSError as e:
            logger.error(f"Put command failed: {e}", exc_info=True)
            self.ui.display_error(f"Could not read {source}: {e}")
            return EXIT_ERROR

        self.storage.set(data, entry_id, version)
        if not self._save():
            return EXIT_ERROR
        label = f" (version {version})" if version else ""
        self.ui.display_info(f"Cached {len(data)} bytes as '{entry_id}'{label}.")
        return EXIT_OK

    def handle_get(self, entry_id: str, output: Optional[str] = None) -> int:
        """Writes the cached bytes to ``output`` or reports their size."""
        data = self.storage.get(entry_id)
        if data is None:
            self.ui.display_warning(f"No cache entry for '{entry_id}'.")
            return EXIT_MISS

        if output is None:
            self.ui.display_output(f"{entry_id}: {len(data)} bytes")
            return EXIT_OK

        try:
            self.file_system.write(FilePath(output), data)
        except OSError as e:
            logger.error(f"Get command failed: {e}", exc_info=True)
            self.ui.display_error(f"Could not write {output}: {e}")
            return EXIT_ERROR
        self.ui.display_info(f"Wrote {len(data)} bytes to {output}.")
        return EXIT_OK

    def handle_has(self, entry_id: str) -> int:
        found = self.storage.has(entry_id)
        self.ui.display_output(f"{entry_id}: {'present' if found else 'missing'}")
        return EXIT_OK if found else EXIT_MISS

    def handle_check(self, entry_id: str, version: str) -> int:
        """Reports whether ``entry_id`` is cached with exactly ``version``."""
        if self.storage.matches_version(entry_id, version):
            self.ui.display_output(f"{entry_id}: up to date ({version or 'no version'})")
            return EXIT_OK
        if self.storage.has(entry_id):
            stored = self.storage.cache_entries[entry_id].version
            self.ui.display_output(f"{entry_id}: stale (cached {stored or 'no version'}, wanted {version or 'no version'})")
        else:
            self.ui.display_output(f"{entry_id}: missing")
        return EXIT_MISS

    def handle_delete(self, entry_id: str) -> int:
        if not self.storage.has(entry_id):
            self.ui.display_warning(f"No cache entry for '{entry_id}', nothing deleted.")
            return EXIT_OK
        self.storage.delete(entry_id)
        if not self._save():
            return EXIT_ERROR
        self.ui.display_info(f"Deleted '{entry_id}'.")
        return EXIT_OK

    def handle_clear(self, assume_yes: bool = False) -> int:
        count = len(self.storage)
        if not assume_yes and count and not self.ui.ask_yes_no_question(f"Delete all {count} cache entries?"):
            self.ui.display_info("Aborted.")
            return EXIT_OK
        self.storage.delete_all()
        if not self._save():
            return EXIT_ERROR
        self.ui.display_info(f"Cleared {count} cache entries.")
        return EXIT_OK

    def handle_info(self) -> int:
        self.ui.display_storage_summary(
            self.storage.path,
            self.storage.version,
            self.storage.cache_entries.values(),
        )
        return EXIT_OK
