"""
Devstry Backend

Parses change-tracker devlog documents into a queryable model and answers
which tracked change, if any, touches a given line of a given file.
"""

__version__ = "0.1.0"

from .core.devlog import index_hashes, lookup, parse, parse_line_range

__all__ = [
    "__version__",
    "parse",
    "lookup",
    "index_hashes",
    "parse_line_range",
]
