"""
Content hash index for devlog documents.

A cheaper, parallel view of a document: for every file section, map each
tracked line to the digest of the raw change block that covers it. Two
indexes built from different snapshots of a document can then be compared
line by line to tell which tracked content changed, without building or
diffing entity trees.
"""

import hashlib
import logging
from typing import Dict, List, Mapping

from .blocks import iter_change_blocks
from .splitter import heading_title, is_file_heading, split_sections

logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHMS = ("sha256", "sha512", "blake2b", "sha3_256")
DEFAULT_ALGORITHM = "sha256"

HashIndex = Dict[str, Dict[int, str]]


def content_digest(text: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Compute the hex digest of ``text`` encoded as UTF-8.

    Raises:
        ValueError: If the algorithm is not one of SUPPORTED_ALGORITHMS
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(
            f"Unsupported hash algorithm '{algorithm}', expected one of: {', '.join(SUPPORTED_ALGORITHMS)}"
        )
    return hashlib.new(algorithm, text.encode("utf-8")).hexdigest()


def index_hashes(document: str, algorithm: str = DEFAULT_ALGORITHM) -> HashIndex:
    """
    Build the per-section, per-line content hash index of a document.

    Every line covered by a change block gets that block's digest. When
    blocks overlap, the later block wins; sections sharing a label write
    into the same map, again last-write-wins.

    Args:
        document: Full devlog markdown text
        algorithm: hashlib algorithm name (see SUPPORTED_ALGORITHMS)

    Returns:
        Mapping of section label to mapping of line number to hex digest
    """
    if not isinstance(document, str):
        raise TypeError(f"Document must be string, got: {type(document)}")

    index: HashIndex = {}

    for span in split_sections(document, is_file_heading):
        label = heading_title(span.heading)
        line_hashes = index.setdefault(label, {})

        for block in iter_change_blocks(span.text, label=label):
            digest = content_digest(block.text, algorithm)
            for line in block.lines:
                line_hashes[line] = digest

    logger.debug(f"Indexed {sum(len(v) for v in index.values())} lines across {len(index)} sections")
    return index


def changed_lines(old: Mapping[str, Mapping[int, str]], new: Mapping[str, Mapping[int, str]]) -> Dict[str, List[int]]:
    """
    Compare two hash indexes.

    Returns:
        For each label with differences, the sorted lines whose digest
        differs or that are tracked in only one of the indexes
    """
    changes: Dict[str, List[int]] = {}

    for label in dict.fromkeys([*old, *new]):
        old_lines = old.get(label, {})
        new_lines = new.get(label, {})
        differing = sorted(
            line for line in set(old_lines) | set(new_lines)
            if old_lines.get(line) != new_lines.get(line)
        )
        if differing:
            changes[label] = differing

    return changes
