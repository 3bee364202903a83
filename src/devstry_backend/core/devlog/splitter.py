"""
Section Splitter Module - Line-oriented section extraction

This module locates sections of a devlog document by scanning its lines for
heading predicates. A section starts at a line accepted by the heading
predicate and runs up to (not including) the next line accepted by the
boundary predicate, or to the end of the document.

Opening and closing are separate predicates on purpose: a heading can close
a section without itself being a section the caller asked for.

Key Components:
- SectionSpan: Immutable (heading, start, end, text) record
- find_section: First matching section as character offsets
- split_sections: Every matching section, in document order
- file_heading_matcher / is_path_heading / is_file_heading: heading predicates
- devlog_section: Section text for one file name

Usage:
    >>> doc = "## /a.js\\nA\\n## /b.js\\nB\\n"
    >>> find_section(doc, file_heading_matcher("a.js"), is_path_heading)
    (0, 11)
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from .grammar import FILE_HEADING, is_path_like

logger = logging.getLogger(__name__)

LinePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class SectionSpan:
    """
    A located section of a document.

    Attributes:
        heading: The heading line that opened the section (no line terminator)
        start: Character offset of the heading line
        end: Character offset one past the section's last character
        text: ``document[start:end]``
    """
    heading: str
    start: int
    end: int
    text: str

    @property
    def body(self) -> str:
        """Section text without its heading line."""
        newline = self.text.find("\n")
        return "" if newline == -1 else self.text[newline + 1:]


def iter_lines(document: str) -> Iterator[Tuple[int, str]]:
    """
    Yield ``(offset, line)`` for every line of the document.

    Lines are split on ``\\n`` only; a trailing ``\\r`` is dropped from the
    yielded text but still counted in the offsets.
    """
    offset = 0
    for raw in document.split("\n"):
        yield offset, raw.rstrip("\r")
        offset += len(raw) + 1


def find_section(
    document: str,
    heading_matches: LinePredicate,
    sibling_heading_matches: LinePredicate
) -> Optional[Tuple[int, int]]:
    """
    Locate the first section opened by ``heading_matches``.

    Args:
        document: Full document text
        heading_matches: Predicate accepting the section's own heading line
        sibling_heading_matches: Predicate accepting any line that closes it

    Returns:
        ``(start_offset, end_offset)`` or None if no heading matched
    """
    start: Optional[int] = None

    for offset, line in iter_lines(document):
        if start is None:
            if heading_matches(line):
                start = offset
        elif sibling_heading_matches(line):
            return start, offset

    if start is None:
        return None
    return start, len(document)


def split_sections(
    document: str,
    heading_matches: LinePredicate,
    boundary_matches: Optional[LinePredicate] = None
) -> List[SectionSpan]:
    """
    Split a document into every section opened by ``heading_matches``.

    A section closes at the next line accepted by either predicate, so the
    returned spans never overlap. Text before the first heading belongs to
    no section.

    Args:
        document: Text to split (a whole document or an enclosing span)
        heading_matches: Predicate accepting section headings
        boundary_matches: Extra predicate for lines that close a section
            without opening one. Defaults to none, so only headings close
            sections

    Returns:
        List of SectionSpan objects in document order
    """
    spans: List[SectionSpan] = []
    open_heading: Optional[str] = None
    open_start = 0

    def close(end: int) -> None:
        spans.append(SectionSpan(
            heading=open_heading,
            start=open_start,
            end=end,
            text=document[open_start:end],
        ))

    for offset, line in iter_lines(document):
        is_heading = heading_matches(line)
        is_boundary = is_heading or (boundary_matches is not None and boundary_matches(line))

        if open_heading is not None and is_boundary:
            close(offset)
            open_heading = None

        if is_heading:
            open_heading = line
            open_start = offset

    if open_heading is not None:
        close(len(document))

    logger.debug(f"Split text of {len(document)} chars into {len(spans)} sections")
    return spans


def is_file_heading(line: str) -> bool:
    """Return True for any two-hash heading line."""
    return FILE_HEADING.matches(line)


def heading_title(line: str) -> str:
    """Return the trimmed text of a two-hash heading line."""
    match = FILE_HEADING.match(line)
    if match is None:
        raise ValueError(f"Not a file heading: {line!r}")
    return match.group("title").strip()


def is_path_heading(line: str) -> bool:
    """Return True for a two-hash heading whose first token is path-like."""
    match = FILE_HEADING.match(line)
    if match is None:
        return False
    tokens = match.group("title").split()
    return bool(tokens) and is_path_like(tokens[0])


def file_heading_matcher(file_name: str) -> LinePredicate:
    """
    Build a predicate accepting the two-hash heading for ``file_name``.

    The name must appear as a whole token: at the start of the heading text
    or after whitespace or ``/``, and followed by whitespace or end of line.
    ``"app.js"`` therefore matches ``## /src/app.js`` but not
    ``## /src/app.js.bak`` or ``## /src/myapp.js``.

    Raises:
        ValueError: If file_name is empty
    """
    if not file_name or not file_name.strip():
        raise ValueError("File name cannot be empty")

    pattern = re.compile(
        r"^[ \t]*##[ \t]+(?:.*[\s/])?" + re.escape(file_name.strip()) + r"(?:\s|$)"
    )

    def matches(line: str) -> bool:
        return pattern.match(line) is not None

    return matches


def devlog_section(document: str, file_name: str) -> str:
    """
    Return the section of ``document`` tracking ``file_name``.

    The section starts at the first heading naming the file and ends at the
    next path heading. Non-path ``##`` headings inside it do not end it.

    Returns:
        Section text including its heading, or an empty string if not found
    """
    span = find_section(document, file_heading_matcher(file_name), is_path_heading)
    if span is None:
        logger.debug(f"No devlog section found for '{file_name}'")
        return ""
    start, end = span
    return document[start:end]
