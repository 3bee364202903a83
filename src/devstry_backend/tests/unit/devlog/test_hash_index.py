"""
Tests for the per-line content hash index.

The index must change for exactly the lines whose change block text changed,
and nothing else.
"""

import hashlib
import logging

import pytest

from devstry_backend.core.devlog import SUPPORTED_ALGORITHMS, changed_lines, content_digest, index_hashes


DOC = (
    "## /src/app.js\n"
    "**init** | **Lines 1-3** | **1 change tracked**\n"
    "##### t1\n"
    "body one\n"
    "**Lines 10-11** | **1 change tracked**\n"
    "##### t2\n"
    "body two\n"
    "## /src/util.js\n"
    "**Lines 1** | **1 change tracked**\n"
    "util body\n"
)


class TestContentDigest:
    """Tests for content_digest."""

    def test_default_is_sha256_of_utf8(self):
        text = "res.send(x) 🟡"
        assert content_digest(text) == hashlib.sha256(text.encode("utf-8")).hexdigest()

    @pytest.mark.parametrize("algorithm", SUPPORTED_ALGORITHMS)
    def test_supported_algorithms(self, algorithm):
        assert content_digest("x", algorithm) == hashlib.new(algorithm, b"x").hexdigest()

    def test_unsupported_algorithm_raises(self):
        with pytest.raises(ValueError):
            content_digest("x", "md5")


class TestIndexHashes:
    """Tests for index_hashes."""

    def test_every_covered_line_is_indexed(self):
        index = index_hashes(DOC)

        assert set(index) == {"/src/app.js", "/src/util.js"}
        assert sorted(index["/src/app.js"]) == [1, 2, 3, 10, 11]
        assert sorted(index["/src/util.js"]) == [1]

    def test_lines_of_one_block_share_a_digest(self):
        index = index_hashes(DOC)["/src/app.js"]
        assert index[1] == index[2] == index[3]
        assert index[10] == index[11]
        assert index[1] != index[10]

    def test_digest_is_of_exact_block_text(self):
        block = "**Lines 1** | **1 change tracked**\nutil body\n"
        assert index_hashes(DOC)["/src/util.js"][1] == content_digest(block)

    def test_body_edit_changes_only_that_blocks_lines(self):
        old = index_hashes(DOC)
        new = index_hashes(DOC.replace("body two", "body two, edited"))

        assert new["/src/app.js"][1] == old["/src/app.js"][1]
        assert new["/src/app.js"][10] != old["/src/app.js"][10]
        assert new["/src/util.js"] == old["/src/util.js"]
        assert changed_lines(old, new) == {"/src/app.js": [10, 11]}

    def test_overlapping_blocks_last_wins(self):
        doc = (
            "## /a.js\n"
            "**Lines 1-5** | **1 change tracked**\n"
            "first\n"
            "**Lines 4-6** | **1 change tracked**\n"
            "second\n"
        )
        index = index_hashes(doc)["/a.js"]
        second = content_digest("**Lines 4-6** | **1 change tracked**\nsecond\n")
        assert index[3] != second
        assert index[4] == index[5] == index[6] == second

    def test_sections_with_same_label_merge(self):
        doc = (
            "## /a.js\n"
            "**Lines 1-2** | **1 change tracked**\n"
            "first\n"
            "## /a.js\n"
            "**Lines 2-3** | **1 change tracked**\n"
            "second\n"
        )
        index = index_hashes(doc)
        second = content_digest("**Lines 2-3** | **1 change tracked**\nsecond\n")
        assert sorted(index["/a.js"]) == [1, 2, 3]
        assert index["/a.js"][2] == second

    def test_non_path_headings_are_sections(self):
        index = index_hashes("## Notes\n**Lines 1** | **1 change tracked**\nx\n")
        assert list(index) == ["Notes"]

    def test_section_without_blocks_is_empty(self):
        assert index_hashes("## /a.js\nprose\n") == {"/a.js": {}}

    def test_malformed_range_is_skipped(self, caplog):
        doc = (
            "## /a.js\n"
            "**Lines 3-1** | **1 change tracked**\n"
            "x\n"
            "**Lines 7** | **1 change tracked**\n"
            "y\n"
        )
        with caplog.at_level(logging.WARNING):
            index = index_hashes(doc)

        assert list(index["/a.js"]) == [7]
        assert "3-1" in caplog.text

    def test_oversized_range_is_skipped(self, caplog):
        doc = (
            "## /a.js\n"
            "**Lines 1-999999999** | **1 change tracked**\n"
            "x\n"
            "**Lines 7** | **1 change tracked**\n"
            "y\n"
        )
        with caplog.at_level(logging.WARNING):
            index = index_hashes(doc)

        assert list(index["/a.js"]) == [7]
        assert "1-999999999" in caplog.text

    def test_algorithm_changes_digests(self):
        sha256 = index_hashes(DOC)["/src/util.js"][1]
        blake = index_hashes(DOC, "blake2b")["/src/util.js"][1]
        assert sha256 != blake
        assert len(blake) == 128

    def test_non_string_raises(self):
        with pytest.raises(TypeError):
            index_hashes(b"## /a.js")


class TestChangedLines:
    """Tests for changed_lines."""

    def test_identical_indexes(self):
        index = index_hashes(DOC)
        assert changed_lines(index, index) == {}

    def test_added_and_removed_lines(self):
        old = {"/a.js": {1: "x", 2: "y"}}
        new = {"/a.js": {2: "y", 3: "z"}, "/b.js": {1: "q"}}
        assert changed_lines(old, new) == {"/a.js": [1, 3], "/b.js": [1]}

    def test_removed_label(self):
        assert changed_lines({"/a.js": {4: "x"}}, {}) == {"/a.js": [4]}
