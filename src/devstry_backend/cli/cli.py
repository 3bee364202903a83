"""
Devstry CLI Application.

Main entry point for the Devstry command-line interface: look up the tracked
change for a line, show raw change blocks and entry cards, and build or
compare content hash indexes of devlog documents.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.markup import escape
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .. import __version__
from ..core.devlog import (
    DevlogTreeCache,
    change_blocks_for_line,
    changed_lines,
    devlog_section,
    entry_cards,
    index_hashes,
    lookup as lookup_line,
)
from ..exceptions import ConfigurationError, DevlogError, DevlogNotFoundError
from ..services.devlog_discovery import (
    find_devlog_dir,
    latest_devlog_file,
    list_devlog_files,
    read_devlog_safe,
)
from ..utils.config import ConfigManager
from ..utils.logging_config import LogFormat, LoggingManager, LogLevel
from .formatting import render_cards, render_changed_lines, render_devlog_files, render_lookup

# Initialize console for rich output
console = Console()

# Create main Typer app
app = typer.Typer(
    name="devstry",
    help="Browse tracked changes recorded in devlog markdown documents",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Global state
_config_manager: Optional[ConfigManager] = None
_tree_cache: Optional[DevlogTreeCache] = None

logger = logging.getLogger(__name__)

DEVLOG_OPTION = typer.Option(
    None,
    "--devlog",
    "-d",
    help="Devlog file to read (default: most recent file in the devlog directory)",
    metavar="PATH",
)
DEVLOG_DIR_OPTION = typer.Option(
    None,
    "--devlog-dir",
    help="Devlog directory (default: first configured directory that exists)",
    metavar="DIR",
)


def setup_logging(config_manager: ConfigManager, verbose: bool = False) -> logging.Logger:
    """
    Set up logging from the configuration.

    Args:
        config_manager: Loaded configuration
        verbose: Force DEBUG level regardless of configuration

    Returns:
        Configured package logger
    """
    level = LogLevel.DEBUG if verbose else LogLevel.from_name(config_manager.get("logging.level", "INFO"))
    LoggingManager(
        log_level=level,
        log_format=LogFormat(config_manager.get("logging.format", "standard")),
        log_file=config_manager.get("logging.file"),
    )
    return logging.getLogger("devstry_backend")


def get_config_manager(config_path: Optional[str] = None) -> ConfigManager:
    """
    Get or create the global configuration manager.

    Raises:
        typer.Exit: If configuration loading fails
    """
    global _config_manager

    if _config_manager is None or config_path:
        try:
            _config_manager = ConfigManager(config_file=config_path)
            _config_manager.load_config()
        except ConfigurationError as e:
            rprint(f"[red]Configuration Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)

    return _config_manager


def get_tree_cache() -> DevlogTreeCache:
    """Get or create the parsed-tree cache sized from the configuration."""
    global _tree_cache
    if _tree_cache is None:
        config = get_config_manager()
        _tree_cache = DevlogTreeCache(
            max_entries=config.get("cache.max_entries", 16),
            algorithm=config.get("hashing.algorithm", "sha256"),
        )
    return _tree_cache


def resolve_devlog_dir(devlog_dir: Optional[Path]) -> Path:
    """Return the devlog directory to use, or raise DevlogNotFoundError."""
    if devlog_dir is not None:
        if not devlog_dir.is_dir():
            raise DevlogNotFoundError(f"Devlog directory not found: {devlog_dir}", str(devlog_dir))
        return devlog_dir

    config = get_config_manager()
    directories = config.get("devlog.directories", [])
    found = find_devlog_dir(config.project_root, directories)
    if found is None:
        raise DevlogNotFoundError(
            f"No devlog directory found (looked for: {', '.join(directories)})",
            str(config.project_root),
        )
    return found


def resolve_devlog(devlog: Optional[Path]) -> Path:
    """Return the devlog file to use: the given one, or the newest in the devlog directory."""
    if devlog is not None:
        if not devlog.is_file():
            raise DevlogNotFoundError(f"Devlog file not found: {devlog}", str(devlog))
        return devlog

    directory = resolve_devlog_dir(None)
    latest = latest_devlog_file(directory, get_config_manager().get("devlog.extension", ".md"))
    if latest is None:
        raise DevlogNotFoundError(f"No devlog markdown files found in {directory}", str(directory))
    return latest


def load_devlog(path: Path) -> str:
    """Read a devlog file, raising DevlogError if it cannot be read."""
    text = read_devlog_safe(path)
    if text is None:
        raise DevlogError(f"Could not read devlog file: {path}", context={"path": str(path)})
    return text


def handle_cli_error(error: Exception) -> None:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
    """
    if isinstance(error, ConfigurationError):
        rprint(f"[red]Configuration Error:[/red] {escape(str(error))}")
        logger.debug("Configuration error details", exc_info=True)
    elif isinstance(error, DevlogNotFoundError):
        rprint(f"[red]Devlog Not Found:[/red] {escape(str(error))}")
        logger.debug("Devlog discovery details", exc_info=True)
    elif isinstance(error, DevlogError):
        rprint(f"[red]Devlog Error:[/red] {escape(str(error))}")
        logger.debug("Devlog error details", exc_info=True)
    else:
        rprint(f"[red]Error:[/red] {escape(str(error))}")
        logger.debug("Unexpected error details", exc_info=True)


# Global callback for common options
@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: devstry.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    Devstry CLI - browse the change history recorded in devlog documents.

    Common workflows:
    • Explain a line: devstry lookup /src/app.js 34
    • Show raw blocks: devstry changes app.js 34
    • Detect changes: devstry diff old.md new.md
    """
    global _config_manager, _tree_cache
    _config_manager = None
    _tree_cache = None

    config_manager = get_config_manager(config_path)
    setup_logging(config_manager, verbose)

    ctx.obj = {
        "config_path": config_path,
        "verbose": verbose,
    }


@app.command()
def lookup(
    file_path: str = typer.Argument(..., help="File path exactly as written in the devlog heading"),
    line: int = typer.Argument(..., min=1, help="Line number to look up"),
    devlog: Optional[Path] = DEVLOG_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Show the tracked change and narrative context for one line."""
    try:
        path = resolve_devlog(devlog)
        tree = get_tree_cache().get_tree(load_devlog(path))
        result = lookup_line(tree, file_path, line)
    except DevlogError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    if as_json:
        payload = {"devlog": str(path), "file": file_path, "line": line, **result.to_dict()}
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    console.print(render_lookup(result, file_path, line))


@app.command()
def changes(
    file_name: str = typer.Argument(..., help="File name or path as a whole token of the heading"),
    line: int = typer.Argument(..., min=1, help="Line number to look up"),
    devlog: Optional[Path] = DEVLOG_OPTION,
) -> None:
    """Show the raw change blocks that cover one line."""
    try:
        path = resolve_devlog(devlog)
        text = load_devlog(path)
    except DevlogError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    if not devlog_section(text, file_name):
        rprint("[yellow]No devlog section found for this file.[/yellow]")
        return

    blocks = change_blocks_for_line(text, file_name, line)
    if not blocks:
        rprint("[yellow]No tracked change for this line.[/yellow]")
        return

    for block in blocks:
        console.print(Panel(Text(block), border_style="cyan"))


@app.command()
def cards(
    file_name: str = typer.Argument(..., help="File name or path as a whole token of the heading"),
    devlog_dir: Optional[Path] = DEVLOG_DIR_OPTION,
) -> None:
    """Show the entry cards for a file from every devlog, newest first."""
    try:
        directory = resolve_devlog_dir(devlog_dir)
    except DevlogError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    files = list_devlog_files(directory, get_config_manager().get("devlog.extension", ".md"))
    if not files:
        rprint("[red]No devlog markdown files found.[/red]")
        raise typer.Exit(1)

    for devlog_file in files:
        text = read_devlog_safe(devlog_file)
        if text is None:
            rprint(f"[red]Could not read devlog file:[/red] {escape(devlog_file.name)}")
            continue

        section = devlog_section(text, file_name)
        if not section:
            rprint(f"[yellow]No devlog section found for this file in[/yellow] {escape(devlog_file.name)}")
            continue

        file_cards = entry_cards(section)
        if not file_cards:
            rprint(f"[yellow]No devlog cards found for this file in[/yellow] {escape(devlog_file.name)}")
            continue

        console.print(render_cards(devlog_file, file_cards))


@app.command()
def hashes(
    devlog: Optional[Path] = DEVLOG_OPTION,
) -> None:
    """Print the per-line content hash index of a devlog as JSON."""
    try:
        path = resolve_devlog(devlog)
        index = index_hashes(load_devlog(path), get_config_manager().get("hashing.algorithm", "sha256"))
    except DevlogError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    typer.echo(json.dumps(index, indent=2, ensure_ascii=False))


@app.command()
def diff(
    old: Path = typer.Argument(..., help="Earlier devlog snapshot"),
    new: Path = typer.Argument(..., help="Later devlog snapshot"),
) -> None:
    """List tracked lines whose content changed between two devlog snapshots."""
    algorithm = get_config_manager().get("hashing.algorithm", "sha256")
    try:
        old_index = index_hashes(load_devlog(resolve_devlog(old)), algorithm)
        new_index = index_hashes(load_devlog(resolve_devlog(new)), algorithm)
    except DevlogError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    changes_by_label = changed_lines(old_index, new_index)
    if not changes_by_label:
        rprint("[green]No tracked content changed.[/green]")
        return

    console.print(render_changed_lines(changes_by_label))


@app.command()
def files(
    devlog_dir: Optional[Path] = DEVLOG_DIR_OPTION,
) -> None:
    """List devlog files, most recently modified first."""
    try:
        directory = resolve_devlog_dir(devlog_dir)
    except DevlogError as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    devlog_files = list_devlog_files(directory, get_config_manager().get("devlog.extension", ".md"))
    if not devlog_files:
        rprint("[yellow]No devlog markdown files found.[/yellow]")
        return

    console.print(render_devlog_files(devlog_files))


@app.command()
def version() -> None:
    """Show version information."""
    rprint(f"Devstry [blue]v{__version__}[/blue]")


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    cli_main()
