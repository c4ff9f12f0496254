import logging
from typing import Any, Iterable, Optional

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from assetcache.domain.interfaces.user_interface import UserInterface
from assetcache.domain.models.cache import CacheEntry

logger = logging.getLogger(__name__)

# Entries larger than this are shown with a human readable size only
PREVIEW_BYTES = 16


def format_size(size: int) -> str:
    """Formats a byte count as B / KiB / MiB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size / (1024 * 1024):.1f} MiB"


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self._console = console or Console()

    @property
    def console(self):
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, value) -> None:
        self._console = value

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays plain output, optionally inside a titled panel.

        Args:
            output: The text to display.
            **kwargs: ``title`` wraps the output in a panel.
        """
        title = kwargs.get("title")
        if title:
            self.console.print(Panel(Text(output), title=f"[bold]{title}[/bold]", box=ROUNDED, padding=(0, 1)))
        else:
            self.console.print(Text(output))

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message."""
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_storage_summary(
        self,
        path: str,
        storage_version: Optional[str],
        entries: Iterable[CacheEntry],
    ) -> None:
        """Displays the storage header followed by a table of entries."""
        entries = sorted(entries, key=lambda e: e.id)
        header = Table.grid(padding=(0, 2))
        header.add_column(style="bold cyan")
        header.add_column()
        header.add_row("Storage file", Text(path))
        header.add_row("Schema version", storage_version or "[dim]not saved yet[/dim]")
        header.add_row("Entries", str(len(entries)))
        self.console.print(Panel(header, title="[bold]Asset Cache[/bold]", border_style="cyan", box=ROUNDED))

        if not entries:
            return

        table = Table(box=SIMPLE, show_header=True, header_style="bold")
        table.add_column("Id")
        table.add_column("Version")
        table.add_column("Size", justify="right")
        table.add_column("Preview", style="dim")
        for entry in entries:
            preview = entry.data[:PREVIEW_BYTES].hex(" ")
            if len(entry.data) > PREVIEW_BYTES:
                preview += " ..."
            table.add_row(
                Text(repr(entry.id) if entry.id == "" else entry.id),
                Text(entry.version) if entry.version else "[dim]-[/dim]",
                format_size(len(entry.data)),
                preview,
            )
        self.console.print(table)

    def ask_yes_no_question(self, question: str) -> bool:
        """Asks a yes/no question and returns the answer.

        Args:
            question: The question to ask

        Returns:
            True if the answer is yes, False otherwise
        """
        logger.debug(f"Asking yes/no question: {question}")
        panel = Panel(
            Text(f"{question} (y/n)", style="white"),
            title="[bold yellow]Question[/bold yellow]",
            border_style="yellow",
            box=ROUNDED,
            padding=(0, 1)
        )
        self.console.print(panel)
        response = self.console.input("[bold yellow]> [/bold yellow]").strip().lower()
        return response in ('y', 'yes')
