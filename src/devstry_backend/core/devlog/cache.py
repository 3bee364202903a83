"""
Digest-keyed cache of parsed devlog trees.

Parsed trees are immutable, so one cached tree can serve any number of
concurrent lookups. Entries are keyed by the content digest of the whole
document; an edited document hashes differently and is simply parsed again.
"""

import logging
import threading
from collections import OrderedDict
from typing import Callable, Optional

from .hash_index import DEFAULT_ALGORITHM, content_digest
from .models import DevlogTree
from .parser import parse

logger = logging.getLogger(__name__)


class DevlogTreeCache:
    """
    Bounded LRU cache from document digest to parsed tree.

    Attributes:
        max_entries: Number of trees kept before the least recently used is evicted
        hits: Number of lookups served from the cache
        misses: Number of lookups that required a parse
    """

    def __init__(
        self,
        max_entries: int = 16,
        algorithm: str = DEFAULT_ALGORITHM,
        parser: Optional[Callable[[str], DevlogTree]] = None
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got: {max_entries}")

        self.max_entries = max_entries
        self.algorithm = algorithm
        self._parse = parser or parse
        self._trees: "OrderedDict[str, DevlogTree]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_tree(self, document: str) -> DevlogTree:
        """Return the parsed tree for ``document``, parsing it on a miss."""
        key = content_digest(document, self.algorithm)

        with self._lock:
            tree = self._trees.get(key)
            if tree is not None:
                self._trees.move_to_end(key)
                self.hits += 1
                return tree
            self.misses += 1

        tree = self._parse(document)

        with self._lock:
            self._trees[key] = tree
            self._trees.move_to_end(key)
            while len(self._trees) > self.max_entries:
                evicted, _ = self._trees.popitem(last=False)
                logger.debug(f"Evicted parsed devlog {evicted[:12]}")

        return tree

    def clear(self) -> None:
        """Drop every cached tree and reset the counters."""
        with self._lock:
            self._trees.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._trees)
