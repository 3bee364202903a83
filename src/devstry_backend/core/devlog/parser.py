"""
Devlog Parser Module - Builds the TrackedFile tree from raw document text

The parser works top-down over nested spans and assembles the tree bottom-up:

1. Every ``##`` heading opens a TrackedFile section.
2. Inside a file section, every scope-header line opens a Scope span.
3. Inside a scope span, an optional ``**Explanation**`` block is read and
   every ``#####`` heading opens an Entry span.
4. Inside an entry span, the first ``| Line | Before | After |`` table gives
   the rows, and optional ``**AI Insight**`` / ``**Suggestions**`` blocks
   give the narrative.

Parsing is best-effort. Unrecognised lines are prose, malformed rows are
skipped, and nothing in a document can make ``parse`` raise.

Usage:
    >>> tree = parse(document_text)
    >>> tree[0].path
    '/src/app.js'
"""

import logging
from typing import List, Optional, Tuple

from .grammar import (
    ENTRY_HEADER,
    HIGHLIGHT_MARKERS,
    LABEL,
    LABEL_AI_INSIGHT,
    LABEL_EXPLANATION,
    LABEL_SUGGESTIONS,
    ROW_LINE_CELL,
    SCOPE_HEADER,
    SUGGESTION_MARKER,
    TABLE_HEADER,
    TABLE_ROW,
    TABLE_SEPARATOR,
    is_structural_line,
)
from .models import DevlogTree, Entry, Row, Scope, TrackedFile
from .splitter import SectionSpan, heading_title, is_file_heading, iter_lines, split_sections

logger = logging.getLogger(__name__)


def extract_label_block(text: str, label: str) -> Optional[str]:
    """
    Extract the free text following a ``**<label>**`` line.

    Blank lines directly after the label are skipped; collection then stops
    at the next blank line or structural line. Only the first occurrence of
    the label in ``text`` is read.

    Args:
        text: Span to search
        label: Label name, e.g. ``"AI Insight"``

    Returns:
        The block text, or None if the label is absent or has no text
    """
    lines = [line for _, line in iter_lines(text)]

    for index, line in enumerate(lines):
        match = LABEL.match(line)
        if match is None or match.group("label") != label:
            continue

        collected: List[str] = []
        for follow in lines[index + 1:]:
            if not follow.strip():
                if collected:
                    break
                continue
            if is_structural_line(follow):
                break
            collected.append(follow.strip())

        return "\n".join(collected) or None

    return None


def split_suggestions(block: Optional[str]) -> Optional[Tuple[str, ...]]:
    """Split a suggestions block into items, dropping list markers and blanks."""
    if block is None:
        return None

    items = []
    for line in block.split("\n"):
        item = SUGGESTION_MARKER.compiled_regex.sub("", line, count=1).strip()
        if item:
            items.append(item)

    return tuple(items) or None


class DevlogParser:
    """
    Parser for change-tracker documents.

    The parser holds no per-document state, so one instance can parse any
    number of documents, and parsing the same text twice yields equal trees.

    Example:
        >>> parser = DevlogParser()
        >>> tree = parser.parse("## /app.js\\n")
        >>> tree[0].scopes
        ()
    """

    def parse(self, document: str) -> DevlogTree:
        """
        Parse a document into its TrackedFile tree.

        Args:
            document: Full devlog markdown text

        Returns:
            Tuple of TrackedFile, one per ``##`` heading, in document order

        Raises:
            TypeError: If document is not a string
        """
        if not isinstance(document, str):
            raise TypeError(f"Document must be string, got: {type(document)}")

        files = tuple(
            self._parse_file(span)
            for span in split_sections(document, is_file_heading)
        )

        logger.debug(
            f"Parsed {len(files)} tracked files with "
            f"{sum(len(f.scopes) for f in files)} scopes"
        )
        return files

    def _parse_file(self, span: SectionSpan) -> TrackedFile:
        scopes = []
        for scope_span in split_sections(span.body, SCOPE_HEADER.matches):
            scope = self._parse_scope(scope_span)
            if scope is not None:
                scopes.append(scope)

        return TrackedFile(path=heading_title(span.heading), scopes=tuple(scopes))

    def _parse_scope(self, span: SectionSpan) -> Optional[Scope]:
        match = SCOPE_HEADER.match(span.heading)
        name = match.group("name").strip()
        line_start = int(match.group("start"))
        line_end = int(match.group("end") or line_start)

        if line_start > line_end:
            # The header still closes the previous scope; only this one is dropped.
            logger.warning(
                f"Skipping scope '{name}' with reversed line range {line_start}-{line_end}"
            )
            return None

        entries = tuple(
            self._parse_entry(entry_span)
            for entry_span in split_sections(span.body, ENTRY_HEADER.matches)
        )

        return Scope(
            name=name,
            line_start=line_start,
            line_end=line_end,
            change_count=int(match.group("count")),
            entries=entries,
            explanation=extract_label_block(span.body, LABEL_EXPLANATION),
        )

    def _parse_entry(self, span: SectionSpan) -> Entry:
        timestamp = ENTRY_HEADER.match(span.heading).group("timestamp")

        return Entry(
            timestamp=timestamp,
            rows=self._parse_table(span.body),
            ai_insight=extract_label_block(span.body, LABEL_AI_INSIGHT),
            suggestions=split_suggestions(extract_label_block(span.body, LABEL_SUGGESTIONS)),
        )

    def _parse_table(self, text: str) -> Tuple[Row, ...]:
        """Parse the first change table in ``text``; missing table gives no rows."""
        lines = [line for _, line in iter_lines(text)]

        for index, line in enumerate(lines):
            if not TABLE_HEADER.matches(line):
                continue

            rows = []
            for row_line in lines[index + 1:]:
                if not row_line.strip().startswith("|"):
                    break
                if TABLE_SEPARATOR.matches(row_line):
                    continue
                row = self._parse_row(row_line)
                if row is not None:
                    rows.append(row)
            return tuple(rows)

        return ()

    def _parse_row(self, line: str) -> Optional[Row]:
        match = TABLE_ROW.match(line)
        if match is None:
            logger.debug(f"Skipping malformed table row: {line!r}")
            return None

        cell = ROW_LINE_CELL.match(match.group("line"))
        if cell is None:
            logger.debug(f"Skipping table row without line number: {line!r}")
            return None

        marker = cell.group("marker").strip()
        if marker and marker not in HIGHLIGHT_MARKERS:
            logger.debug(f"Skipping table row with unknown marker {marker!r}")
            return None

        return Row(
            line=int(cell.group("line")),
            before=match.group("before") or "",
            after=match.group("after") or "",
            highlight=marker or None,
        )


_default_parser = DevlogParser()


def parse(document: str) -> DevlogTree:
    """Parse ``document`` with the shared stateless parser."""
    return _default_parser.parse(document)
