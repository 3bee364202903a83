"""
Line Range Parsing - Expansion of compact line-range tokens.

Devlog documents describe tracked lines with compact tokens such as ``"12"``,
``"5-9"`` or ``"1-3,5,9-10"``. This module expands them into explicit
ascending sequences and is shared by the document parser and the hash indexer.

Usage:
    >>> parse_line_range("1-3,5")
    [1, 2, 3, 5]
"""

import logging
import re
from typing import List

from ...exceptions.devlog_exceptions import MalformedRangeError

logger = logging.getLogger(__name__)

_SINGLE = re.compile(r"^\d+$")
_SPAN = re.compile(r"^(\d+)\s*-\s*(\d+)$")

# Upper bound on the lines one token may expand to.
MAX_RANGE_LINES = 100_000


def parse_line_range(token: str) -> List[int]:
    """
    Expand a line-range token into an ordered list of line numbers.

    Each comma-separated part is either a single integer or an inclusive
    ``start-end`` span. Parts are expanded in the order given and concatenated;
    overlapping parts keep their duplicates.

    Args:
        token: Range token such as ``"7"``, ``"3-6"`` or ``"1-3,5,9-10"``

    Returns:
        List of line numbers in expansion order

    Raises:
        MalformedRangeError: If any part is empty, non-numeric, negative,
            a span whose start is greater than its end, or a token that
            expands to more than MAX_RANGE_LINES lines

    Example:
        >>> parse_line_range("5")
        [5]
        >>> parse_line_range("1-3")
        [1, 2, 3]
    """
    if not isinstance(token, str):
        raise MalformedRangeError(f"Line range must be string, got: {type(token)}", token=repr(token))

    result: List[int] = []
    for raw_part in token.split(","):
        part = raw_part.strip()

        if _SINGLE.match(part):
            result.append(int(part))
            _check_size(token, len(result))
            continue

        span = _SPAN.match(part)
        if span is None:
            raise MalformedRangeError(
                f"Malformed line range part '{part}' in '{token}'",
                token=token,
                part=part,
            )

        start, end = int(span.group(1)), int(span.group(2))
        if start > end:
            raise MalformedRangeError(
                f"Reversed line range '{part}' in '{token}' (start {start} > end {end})",
                token=token,
                part=part,
            )
        _check_size(token, len(result) + end - start + 1)
        result.extend(range(start, end + 1))

    logger.debug(f"Expanded line range '{token}' to {len(result)} lines")
    return result


def _check_size(token: str, count: int) -> None:
    if count > MAX_RANGE_LINES:
        raise MalformedRangeError(
            f"Line range '{token}' expands to {count} lines (limit {MAX_RANGE_LINES})",
            token=token,
        )
