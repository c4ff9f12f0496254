"""Interface for interacting with the user (input/output).

Defines the contract for displaying information, errors, warnings and
cache listings, allowing different UI implementations (console, quiet
scripting mode, ...).
"""

import abc
from typing import Any, Iterable, Optional

from assetcache.domain.models.cache import CacheEntry


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The text to display.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user.

        Args:
            warning_message: The warning message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user.

        Args:
            info_message: The informational message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_storage_summary(
        self,
        path: str,
        storage_version: Optional[str],
        entries: Iterable[CacheEntry],
    ) -> None:
        """Displays the storage file location, schema tag and its entries.

        Args:
            path: Path of the backing storage file.
            storage_version: Schema tag, or None if never saved.
            entries: The entries currently in the index.
        """
        pass

    @abc.abstractmethod
    def ask_yes_no_question(self, question: str) -> bool:
        """Asks a yes/no question and returns the answer.

        Args:
            question: The question to ask.

        Returns:
            True if the answer is yes, False otherwise.
        """
        pass
