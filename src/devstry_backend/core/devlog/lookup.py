"""
Line lookup over a parsed devlog tree.

Answers "what tracked change touches line L of file F" with the most specific
match available: row, then scope. File paths are compared by exact string
equality; callers are responsible for normalising them to the form the
document uses.
"""

import logging
from typing import Sequence

from .models import LookupResult, TrackedFile

logger = logging.getLogger(__name__)


def lookup(tree: Sequence[TrackedFile], file_path: str, line_number: int) -> LookupResult:
    """
    Find the tracked change for ``line_number`` in ``file_path``.

    The first file with an equal path is used, and within it the first scope
    whose range contains the line. Entries and their rows are then scanned in
    document order for a row with the same line number.

    Args:
        tree: Parsed document (see ``parse``)
        file_path: Path exactly as it appears in the document heading
        line_number: Line to look up

    Returns:
        LookupResult with scope, entry, row and the entry's narrative on an
        exact hit; scope only when the line is in range but no row names it;
        all fields None otherwise
    """
    tracked = next((f for f in tree if f.path == file_path), None)
    if tracked is None:
        logger.debug(f"No tracked file '{file_path}'")
        return LookupResult()

    scope = tracked.find_scope(line_number)
    if scope is None:
        logger.debug(f"Line {line_number} of '{file_path}' is outside every scope")
        return LookupResult()

    for entry in scope.entries:
        row = entry.find_row(line_number)
        if row is not None:
            return LookupResult(
                scope=scope,
                entry=entry,
                row=row,
                ai_insight=entry.ai_insight,
                suggestions=entry.suggestions,
            )

    logger.debug(f"Line {line_number} of '{file_path}' is in scope '{scope.name}' without an exact row")
    return LookupResult(scope=scope)
