"""
Change Blocks Module - Raw-text views of a devlog section

Where the parser builds a full entity tree, this module slices a section into
its raw change blocks and entry cards. These views power content hashing and
plain-text display, both of which need the exact document text rather than
the parsed fields.

Key Components:
- ChangeBlock: One ``**Lines <range>** | **<n> change tracked**`` block
- iter_change_blocks: Blocks of one section, in order
- change_blocks_for_line: Block texts of a file covering one line
- entry_cards: ``#####`` entries of a section as display cards
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ...exceptions.devlog_exceptions import MalformedRangeError
from .grammar import CHANGE_BLOCK_HEADER, ENTRY_HEADER
from .line_range import parse_line_range
from .splitter import devlog_section, is_file_heading, split_sections

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeBlock:
    """
    A change block: header line plus everything up to the next header.

    Attributes:
        label: Label of the enclosing file section
        lines: Expanded line numbers from the header's range token
        change_count: Declared number of changes (metadata only)
        text: Exact raw text of the block, header line included
        scope_name: Scope name when the header carries one
    """
    label: str
    lines: Tuple[int, ...]
    change_count: int
    text: str
    scope_name: Optional[str] = None

    def covers(self, line: int) -> bool:
        return line in self.lines


def iter_change_blocks(section_text: str, label: str = "") -> Iterator[ChangeBlock]:
    """
    Yield the change blocks of one section in document order.

    A block whose range token is malformed is skipped with a warning. The
    header still ends the previous block, so its body is never attributed
    to the wrong lines.

    Args:
        section_text: Text of a single file section
        label: Section label recorded on each block
    """
    for span in split_sections(section_text, CHANGE_BLOCK_HEADER.matches):
        match = CHANGE_BLOCK_HEADER.match(span.heading)
        token = match.group("range").strip()

        try:
            lines = parse_line_range(token)
        except MalformedRangeError as e:
            logger.warning(f"Skipping change block in '{label}': {e}")
            continue

        name = match.group("name")
        yield ChangeBlock(
            label=label,
            lines=tuple(lines),
            change_count=int(match.group("count")),
            text=span.text,
            scope_name=name.strip() if name else None,
        )


def change_blocks_for_line(document: str, file_name: str, line: int) -> List[str]:
    """
    Return the trimmed text of every block in ``file_name``'s section covering ``line``.

    The section is located by whole-token file name matching, so the caller
    can pass a bare file name or the full path from the heading.

    Returns:
        Block texts in document order; empty if the file or line is untracked
    """
    section = devlog_section(document, file_name)
    if not section:
        return []

    return [
        block.text.strip()
        for block in iter_change_blocks(section, label=file_name)
        if block.covers(line)
    ]


def entry_cards(section_text: str) -> List[str]:
    """
    Split a section into its timestamped entries for display.

    Each card runs from a ``#####`` heading to the next entry, change block
    or file heading, or to the end of the section, trimmed.
    """
    def closes_card(line: str) -> bool:
        return CHANGE_BLOCK_HEADER.matches(line) or is_file_heading(line)

    return [
        span.text.strip()
        for span in split_sections(section_text, ENTRY_HEADER.matches, closes_card)
    ]
