"""
Devlog Grammar Module - Canonical patterns for the change-tracker dialect

Every structural element of a devlog document is recognised by exactly one
pattern defined here. The document parser, the section splitter and the hash
indexer all import these instead of carrying their own regular expressions,
so the tree view and the hash view of a document can never drift apart.

Key Components:
- Pattern: Named, pre-compiled, line-anchored regex
- FILE_HEADING, SCOPE_HEADER, ENTRY_HEADER, CHANGE_BLOCK_HEADER: section openers
- TABLE_HEADER, TABLE_SEPARATOR, TABLE_ROW, ROW_LINE_CELL: change tables
- LABEL: ``**AI Insight**``, ``**Suggestions**`` and ``**Explanation**`` blocks

Dialect:
    ## /src/app.js
    **Global constants** | **Lines 31-53** | **1 change tracked**
    ##### 2025-08-18T20:32:01.435Z
    | Line | Before | After |
    |------|--------|-------|
    | 🟡34 | `});` | `res.send(x)` |
"""

import logging
import re
from typing import Optional

from ...exceptions.devlog_exceptions import DevlogGrammarError

logger = logging.getLogger(__name__)


# Amber, orange, red and green row markers; passed through verbatim.
HIGHLIGHT_MARKERS = frozenset({"🟡", "🟠", "🔴", "🟢"})

LABEL_EXPLANATION = "Explanation"
LABEL_AI_INSIGHT = "AI Insight"
LABEL_SUGGESTIONS = "Suggestions"


class Pattern:
    """
    A named, pre-compiled regular expression applied to single lines.

    Patterns are anchored with ``re.match`` semantics: a line either is or is
    not a given structural element, there is no "contains" matching.

    Attributes:
        name: Descriptive identifier for the pattern
        regex_pattern: Raw regex string
        compiled_regex: Pre-compiled regex object
    """

    def __init__(self, name: str, regex_pattern: str) -> None:
        """
        Initialize a Pattern with name and regex validation.

        Args:
            name: Descriptive name for the pattern (e.g., 'scope_header')
            regex_pattern: Regular expression pattern string

        Raises:
            DevlogGrammarError: If regex pattern is invalid
            ValueError: If name or pattern is empty
        """
        if not name or not name.strip():
            raise ValueError("Pattern name cannot be empty")

        if not regex_pattern:
            raise ValueError("Regex pattern cannot be empty")

        self.name = name.strip()
        self.regex_pattern = regex_pattern

        try:
            self.compiled_regex = re.compile(regex_pattern)
        except re.error as e:
            raise DevlogGrammarError(
                f"Invalid regex pattern for '{name}': {e}",
                pattern_name=name,
                regex=regex_pattern
            )

    def match(self, line: str) -> Optional["re.Match[str]"]:
        """
        Match a single line against the pattern.

        Args:
            line: One line of document text, without its line terminator

        Returns:
            Match object if the line is this element, None otherwise
        """
        if not line:
            return None

        return self.compiled_regex.match(line)

    def matches(self, line: str) -> bool:
        """Return True if the line is this structural element."""
        return self.match(line) is not None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"Pattern(name='{self.name}', regex='{self.regex_pattern}')"

    def __eq__(self, other: object) -> bool:
        """Equality comparison based on name and regex pattern."""
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.name == other.name and self.regex_pattern == other.regex_pattern

    def __hash__(self) -> int:
        return hash((self.name, self.regex_pattern))


# Section openers

FILE_HEADING = Pattern("file_heading", r"^[ \t]*##[ \t]+(?P<title>.*?)[ \t]*$")

ENTRY_HEADER = Pattern("entry_header", r"^[ \t]*#####[ \t](?P<timestamp>\S+)[ \t]*$")

ANY_HEADING = Pattern("any_heading", r"^[ \t]*#{1,6}[ \t]")

SCOPE_HEADER = Pattern(
    "scope_header",
    r"^[ \t]*\*\*(?P<name>(?:(?!\*\*).)+?)\*\* \| "
    r"\*\*Lines (?P<start>\d+)(?:-(?P<end>\d+))?\*\* \| "
    r"\*\*(?P<count>\d+) changes? tracked\*\*[ \t]*$"
)

# The range is captured loosely so malformed tokens reach parse_line_range
# and fail loudly instead of silently not opening a block.
CHANGE_BLOCK_HEADER = Pattern(
    "change_block_header",
    r"^[ \t]*(?:\*\*(?P<name>(?:(?!\*\*).)+?)\*\* \| )?"
    r"\*\*Lines (?P<range>[^*]+?)\*\* \| "
    r"\*\*(?P<count>\d+) changes? tracked\*\*[ \t]*$"
)

# Change tables

TABLE_HEADER = Pattern("table_header", r"^[ \t]*\|\s*Line\s*\|\s*Before\s*\|\s*After\s*\|[ \t]*$")

TABLE_SEPARATOR = Pattern("table_separator", r"^[ \t]*\|(?:\s*:?-+:?\s*\|)+[ \t]*$")

TABLE_ROW = Pattern(
    "table_row",
    r"^[ \t]*\|\s*(?P<line>[^|]*?)\s*"
    r"\|\s*(?:`(?P<before>.*?)`)?\s*"
    r"\|\s*(?:`(?P<after>.*?)`)?\s*\|[ \t]*$"
)

ROW_LINE_CELL = Pattern("row_line_cell", r"^(?P<marker>\D*?)\s*(?P<line>\d+)$")

# Labeled free-text blocks

LABEL = Pattern(
    "label",
    r"^[ \t]*\*\*(?P<label>AI Insight|Suggestions|Explanation):?\*\*:?[ \t]*$"
)

SUGGESTION_MARKER = Pattern("suggestion_marker", r"^[ \t]*[-*][ \t]+")


def is_path_like(token: str) -> bool:
    """Return True if a heading token looks like a file path."""
    return token.startswith(("/", "./", "~/")) or "/" in token


def is_structural_line(line: str) -> bool:
    """
    Return True if a line opens or belongs to a structural element.

    Free-text label blocks end at the first such line, so bold prose inside
    an insight never counts as structure: only the fixed grammars below do.
    """
    stripped = line.strip()
    return (
        ANY_HEADING.matches(line)
        or SCOPE_HEADER.matches(line)
        or CHANGE_BLOCK_HEADER.matches(line)
        or LABEL.matches(line)
        or stripped.startswith("|")
    )
