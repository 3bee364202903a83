"""
Devlog document model.

Immutable value objects for a parsed change-tracker document:
TrackedFile -> Scope -> Entry -> Row, plus the LookupResult returned by a
line query. All sequences are tuples, so two parses of the same text compare
equal and a parsed tree can be shared between readers without copying.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Row:
    """
    One line-level before/after change inside an entry's table.

    Attributes:
        line: Line number the change applies to
        before: Raw code fragment before the change (may be empty)
        after: Raw code fragment after the change (may be empty)
        highlight: Optional marker glyph, passed through verbatim
    """
    line: int
    before: str
    after: str
    highlight: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "highlight": self.highlight,
            "before": self.before,
            "after": self.after,
        }


@dataclass(frozen=True)
class Entry:
    """
    One timestamped change event within a scope.

    The timestamp is kept as an opaque string; entries are ordered by their
    appearance in the document, never by parsing the timestamp.
    """
    timestamp: str
    rows: Tuple[Row, ...] = ()
    ai_insight: Optional[str] = None
    suggestions: Optional[Tuple[str, ...]] = None

    def find_row(self, line: int) -> Optional[Row]:
        """Return the first row for ``line``, or None."""
        for row in self.rows:
            if row.line == line:
                return row
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "rows": [row.to_dict() for row in self.rows],
            "ai_insight": self.ai_insight,
            "suggestions": list(self.suggestions) if self.suggestions is not None else None,
        }


@dataclass(frozen=True)
class Scope:
    """
    A named, line-ranged group of entries within a tracked file.

    ``change_count`` is the count declared in the document header. It is
    descriptive only and is never reconciled with the number of rows.
    """
    name: str
    line_start: int
    line_end: int
    change_count: int
    entries: Tuple[Entry, ...] = ()
    explanation: Optional[str] = None

    def __post_init__(self) -> None:
        if self.line_start > self.line_end:
            raise ValueError(
                f"Scope '{self.name}' has line_start {self.line_start} > line_end {self.line_end}"
            )

    def contains(self, line: int) -> bool:
        """Return True if ``line`` falls within the inclusive bounds."""
        return self.line_start <= line <= self.line_end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "change_count": self.change_count,
            "explanation": self.explanation,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class TrackedFile:
    """One top-level ``##`` section of a devlog document."""
    path: str
    scopes: Tuple[Scope, ...] = ()

    def find_scope(self, line: int) -> Optional[Scope]:
        """Return the first scope containing ``line``, or None."""
        for scope in self.scopes:
            if scope.contains(line):
                return scope
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "scopes": [scope.to_dict() for scope in self.scopes],
        }


@dataclass(frozen=True)
class LookupResult:
    """
    Result of a line lookup.

    Every field is optional. A result with only ``scope`` set is a coarse
    hit: the line is inside a scope but no row names it exactly.
    """
    scope: Optional[Scope] = None
    entry: Optional[Entry] = None
    row: Optional[Row] = None
    ai_insight: Optional[str] = None
    suggestions: Optional[Tuple[str, ...]] = None

    @property
    def found(self) -> bool:
        """True if the line fell inside a tracked scope."""
        return self.scope is not None

    @property
    def is_exact(self) -> bool:
        """True if a row matched the line exactly."""
        return self.row is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scope": None if self.scope is None else {
                "name": self.scope.name,
                "line_start": self.scope.line_start,
                "line_end": self.scope.line_end,
                "change_count": self.scope.change_count,
                "explanation": self.scope.explanation,
            },
            "entry": None if self.entry is None else {"timestamp": self.entry.timestamp},
            "row": None if self.row is None else self.row.to_dict(),
            "ai_insight": self.ai_insight,
            "suggestions": list(self.suggestions) if self.suggestions is not None else None,
        }


DevlogTree = Tuple[TrackedFile, ...]
