"""
Devlog Package

Parsing, lookup and content hashing for change-tracker ("devlog") markdown
documents.

Components:
- line_range: Compact line-range token expansion
- grammar: Canonical patterns for the devlog dialect
- splitter: Line-oriented section extraction
- parser: TrackedFile -> Scope -> Entry -> Row tree construction
- lookup: Most specific match for a file and line
- blocks / hash_index: Raw change blocks and per-line content hashes
- cache: Digest-keyed cache of parsed trees
"""

from .line_range import parse_line_range
from .grammar import HIGHLIGHT_MARKERS, Pattern
from .splitter import (
    SectionSpan,
    devlog_section,
    file_heading_matcher,
    find_section,
    is_file_heading,
    is_path_heading,
    split_sections,
)
from .models import DevlogTree, Entry, LookupResult, Row, Scope, TrackedFile
from .parser import DevlogParser, parse
from .lookup import lookup
from .blocks import ChangeBlock, change_blocks_for_line, entry_cards, iter_change_blocks
from .hash_index import (
    SUPPORTED_ALGORITHMS,
    HashIndex,
    changed_lines,
    content_digest,
    index_hashes,
)
from .cache import DevlogTreeCache

__all__ = [
    # Query surface
    "parse",
    "lookup",
    "index_hashes",
    "parse_line_range",
    # Model
    "DevlogTree",
    "TrackedFile",
    "Scope",
    "Entry",
    "Row",
    "LookupResult",
    # Sections
    "SectionSpan",
    "find_section",
    "split_sections",
    "devlog_section",
    "file_heading_matcher",
    "is_file_heading",
    "is_path_heading",
    # Parsing
    "DevlogParser",
    "Pattern",
    "HIGHLIGHT_MARKERS",
    # Blocks and hashing
    "ChangeBlock",
    "iter_change_blocks",
    "change_blocks_for_line",
    "entry_cards",
    "HashIndex",
    "SUPPORTED_ALGORITHMS",
    "content_digest",
    "changed_lines",
    # Caching
    "DevlogTreeCache",
]
