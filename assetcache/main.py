"""Main entry point for the assetcache application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from assetcache.core.cache_storage import FileCacheStorage
from assetcache.core.command_handler import CommandHandler

# --- Infrastructure Layer ---
# Config
from assetcache.infrastructure.config.settings import (
    get_cache_directory,
    get_cache_file_name,
    get_config,
    get_serializer_name,
    load_configuration,
)
# UI
from assetcache.infrastructure.cli.display import ConsoleDisplay
# FileSystem
from assetcache.infrastructure.filesystem.local_fs import LocalFileSystem
# Serialization
from assetcache.infrastructure.serialization.factory import get_serializer
# Monitoring
from assetcache.infrastructure.monitoring.logger_setup import resolve_log_level, setup_logging

logger = logging.getLogger(__name__)


# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    directory: Optional[str] = None,
    file_name: Optional[str] = None,
    serializer_name: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. Explicit arguments (from CLI options)
    take precedence over configuration.
    """
    # 1. Load Configuration First
    load_configuration()
    setup_logging(
        log_level=resolve_log_level(log_level or get_config('logging.level')),
        log_format=get_config('logging.format'),
        log_file=get_config('logging.file'),
    )

    # 2. Instantiate Infrastructure Adapters
    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['file_system'] = LocalFileSystem()
    dependencies['serializer'] = get_serializer(serializer_name or get_serializer_name())

    # 3. Open the storage (never fails on a missing or corrupted file)
    dependencies['storage'] = FileCacheStorage.open(
        directory or get_cache_directory(),
        file_name or get_cache_file_name(dependencies['serializer'].name),
        dependencies['file_system'],
        dependencies['serializer'],
    )

    # 4. Instantiate Command Handler
    dependencies['command_handler'] = CommandHandler(
        storage=dependencies['storage'],
        file_system=dependencies['file_system'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="assetcache",
    help="assetcache: persistent, versioned on-disk cache for binary artifacts.",
    add_completion=False,
    no_args_is_help=True,
)


def _handler(ctx: typer.Context) -> CommandHandler:
    return ctx.obj['command_handler']


def _finish(code: int) -> None:
    if code:
        raise typer.Exit(code=code)


@app.callback()
def main_callback(
    ctx: typer.Context,
    directory: Annotated[Optional[Path], typer.Option("--dir", "-d", help="Directory holding the cache storage file.")] = None,
    file_name: Annotated[Optional[str], typer.Option("--file", help="Name of the cache storage file.")] = None,
    serializer: Annotated[Optional[str], typer.Option("--format", help="Storage format ('json' or 'yaml').")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level (DEBUG, INFO, ...).")] = None,
):
    """Opens the cache storage shared by all commands."""
    try:
        ctx.obj = create_dependencies(
            directory=str(directory) if directory else None,
            file_name=file_name,
            serializer_name=serializer,
            log_level=log_level,
        )
    except ValueError as e:
        logger.error(f"Fatal Error during application initialization: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


# --- CLI Commands ---

@app.command()
def put(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="File whose bytes should be cached.")],
    entry_id: Annotated[Optional[str], typer.Option("--id", help="Cache id (defaults to the file name).")] = None,
    version: Annotated[str, typer.Option("--version", "-v", help="Version tag for the entry.")] = "",
):
    """Cache the contents of a file."""
    _finish(_handler(ctx).handle_put(str(source), entry_id if entry_id is not None else source.name, version))


@app.command()
def get(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Cache id.")],
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write the cached bytes to this file.")] = None,
):
    """Fetch a cached entry."""
    _finish(_handler(ctx).handle_get(entry_id, str(output) if output else None))


@app.command()
def has(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Cache id.")],
):
    """Exit with 0 if the id is cached, 1 otherwise."""
    _finish(_handler(ctx).handle_has(entry_id))


@app.command()
def check(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Cache id.")],
    version: Annotated[str, typer.Argument(help="Expected version tag.")],
):
    """Exit with 0 if the id is cached with exactly this version."""
    _finish(_handler(ctx).handle_check(entry_id, version))


@app.command()
def delete(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Cache id.")],
):
    """Remove one entry."""
    _finish(_handler(ctx).handle_delete(entry_id))


@app.command()
def clear(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
):
    """Remove every entry."""
    _finish(_handler(ctx).handle_clear(assume_yes=yes))


@app.command()
def info(ctx: typer.Context):
    """Show the storage file, its schema version and entries."""
    _finish(_handler(ctx).handle_info())


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
