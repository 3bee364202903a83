"""
Rich rendering helpers for the Devstry CLI.

Document text is always wrapped in ``Text`` or ``Markdown`` renderables so
that square brackets in code fragments are never read as rich markup.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Sequence

from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.devlog import LookupResult


def format_line_ranges(lines: Sequence[int]) -> str:
    """
    Compress line numbers into a compact range token.

    The output parses back with ``parse_line_range`` to the sorted, unique
    input.

    Example:
        >>> format_line_ranges([5, 1, 2, 3, 9])
        '1-3,5,9'
    """
    ordered = sorted(set(lines))
    if not ordered:
        return ""

    parts: List[str] = []
    start = prev = ordered[0]
    for line in ordered[1:]:
        if line == prev + 1:
            prev = line
            continue
        parts.append(str(start) if start == prev else f"{start}-{prev}")
        start = prev = line
    parts.append(str(start) if start == prev else f"{start}-{prev}")
    return ",".join(parts)


def render_lookup(result: LookupResult, file_path: str, line: int) -> RenderableType:
    """Render a lookup result as a panel, or a one-line notice when nothing matched."""
    if not result.found:
        return Text("No tracked change for this line.", style="yellow")

    scope = result.scope
    body = Text()
    body.append(f"{scope.name}", style="bold cyan")
    body.append(f"  lines {scope.line_start}-{scope.line_end}", style="dim")
    noun = "change" if scope.change_count == 1 else "changes"
    body.append(f"  ({scope.change_count} {noun} tracked)\n", style="dim")

    if scope.explanation:
        body.append("\nExplanation\n", style="bold")
        body.append(f"{scope.explanation}\n")

    if not result.is_exact:
        body.append("\nNo exact row for this line in the scope.", style="yellow")
        return Panel(body, title=Text(f"{file_path}:{line}"), border_style="yellow")

    row = result.row
    body.append(f"\n{result.entry.timestamp}", style="bold")
    if row.highlight:
        body.append(f"  {row.highlight}")
    body.append("\n")
    body.append("- ", style="red")
    body.append(f"{row.before}\n", style="red")
    body.append("+ ", style="green")
    body.append(f"{row.after}\n", style="green")

    if result.ai_insight:
        body.append("\nAI Insight\n", style="bold")
        body.append(f"{result.ai_insight}\n")

    if result.suggestions:
        body.append("\nSuggestions\n", style="bold")
        for suggestion in result.suggestions:
            body.append(f"  • {suggestion}\n")

    return Panel(body, title=Text(f"{file_path}:{line}"), border_style="blue")


def render_cards(devlog_file: Path, cards: Sequence[str]) -> RenderableType:
    """Render the entry cards of one devlog file under a header with its mtime."""
    modified = datetime.fromtimestamp(devlog_file.stat().st_mtime).strftime("%Y-%m-%d %H:%M:%S")
    header = Text()
    header.append(devlog_file.name, style="bold blue")
    header.append(f" ({modified})", style="dim")

    panels = [Panel(Markdown(card), border_style="cyan") for card in cards]
    return Group(header, *panels)


def render_changed_lines(changes: Dict[str, List[int]]) -> Table:
    """Render a hash diff as a table of section labels and changed line ranges."""
    table = Table(title="Changed tracked lines")
    table.add_column("Section", style="cyan")
    table.add_column("Lines", style="yellow")
    table.add_column("Count", justify="right")

    for label, lines in changes.items():
        table.add_row(Text(label), format_line_ranges(lines), str(len(lines)))

    return table


def render_devlog_files(files: Sequence[Path]) -> Table:
    """Render devlog files, newest first, with their modification times."""
    table = Table(title="Devlog files")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="cyan")
    table.add_column("Modified", style="green")

    for index, path in enumerate(files, 1):
        modified = datetime.fromtimestamp(path.stat().st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        table.add_row(str(index), Text(path.name), modified)

    return table
