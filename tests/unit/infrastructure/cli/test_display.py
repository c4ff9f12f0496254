import pytest
from unittest.mock import MagicMock

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from assetcache.domain.models.cache import CacheEntry
from assetcache.infrastructure.cli.display import ConsoleDisplay, format_size


@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()


@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    display = ConsoleDisplay()
    display.console = mock_console  # Inject the mock
    return display


def test_display_output_plain(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output("hero.png: 7 bytes")
    args, _ = mock_console.print.call_args
    assert isinstance(args[0], Text)
    assert args[0].plain == "hero.png: 7 bytes"


def test_display_output_does_not_parse_markup():
    console = Console(record=True, width=80)
    ConsoleDisplay(console=console).display_output("[/red]: present")
    assert "[/red]: present" in console.export_text()


def test_display_output_with_title_uses_panel(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output("body", title="Result")
    args, _ = mock_console.print.call_args
    assert isinstance(args[0], Panel)


def test_display_error(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("Something went wrong")
    mock_console.print.assert_called_once()
    panel = mock_console.print.call_args[0][0]
    assert isinstance(panel, Panel)
    assert "Error" in panel.title
    assert panel.renderable.plain == "Something went wrong"


def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_info("Saved")
    panel = mock_console.print.call_args[0][0]
    assert "Info" in panel.title
    assert panel.renderable.plain == "Saved"


def test_storage_summary_prints_header_and_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    entries = [
        CacheEntry(id="b", data=b"\x00" * 40, version="2.0"),
        CacheEntry(id="", data=b"", version=""),
    ]
    console_display.display_storage_summary("/cache/storage.json", "1.0", entries)

    assert mock_console.print.call_count == 2
    assert isinstance(mock_console.print.call_args_list[0][0][0], Panel)
    table = mock_console.print.call_args_list[1][0][0]
    assert isinstance(table, Table)
    assert table.row_count == 2


def test_storage_summary_without_entries_skips_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_storage_summary("/cache/storage.json", None, [])
    mock_console.print.assert_called_once()


@pytest.mark.parametrize("answer, expected", [("y", True), ("YES ", True), ("n", False), ("", False)])
def test_ask_yes_no_question(console_display: ConsoleDisplay, mock_console: MagicMock, answer, expected):
    mock_console.input.return_value = answer
    assert console_display.ask_yes_no_question("Delete?") is expected


@pytest.mark.parametrize("size, expected", [(0, "0 B"), (1023, "1023 B"), (2048, "2.0 KiB"), (3 * 1024 * 1024, "3.0 MiB")])
def test_format_size(size, expected):
    assert format_size(size) == expected
