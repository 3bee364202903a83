"""Tests for raw change blocks and entry cards."""

import logging

from devstry_backend.core.devlog import ChangeBlock, change_blocks_for_line, entry_cards, iter_change_blocks


SECTION = (
    "## /src/app.js\n"
    "**init** | **Lines 1-3** | **1 change tracked**\n"
    "##### t1\n"
    "first body\n"
    "**Lines 2,8-9** | **2 changes tracked**\n"
    "##### t2\n"
    "second body\n"
)


class TestIterChangeBlocks:
    """Tests for iter_change_blocks."""

    def test_blocks_in_document_order(self):
        blocks = list(iter_change_blocks(SECTION, label="/src/app.js"))

        assert [b.lines for b in blocks] == [(1, 2, 3), (2, 8, 9)]
        assert [b.scope_name for b in blocks] == ["init", None]
        assert [b.change_count for b in blocks] == [1, 2]
        assert blocks[0].label == "/src/app.js"

    def test_block_text_is_exact_slice(self):
        first, second = iter_change_blocks(SECTION)
        assert first.text == (
            "**init** | **Lines 1-3** | **1 change tracked**\n"
            "##### t1\n"
            "first body\n"
        )
        assert second.text.endswith("second body\n")

    def test_malformed_range_is_skipped_with_warning(self, caplog):
        section = (
            "**Lines 9-5** | **1 change tracked**\n"
            "stale body\n"
            "**Lines 4** | **1 change tracked**\n"
            "good body\n"
        )
        with caplog.at_level(logging.WARNING):
            blocks = list(iter_change_blocks(section, label="x"))

        assert [b.lines for b in blocks] == [(4,)]
        assert "stale body" not in blocks[0].text
        assert "Skipping change block" in caplog.text

    def test_covers(self):
        block = ChangeBlock(label="", lines=(2, 8, 9), change_count=1, text="")
        assert block.covers(8)
        assert not block.covers(5)


class TestChangeBlocksForLine:
    """Tests for change_blocks_for_line."""

    def test_line_in_two_blocks(self):
        blocks = change_blocks_for_line(SECTION, "app.js", 2)
        assert len(blocks) == 2
        assert blocks[0].startswith("**init**")
        assert blocks[1].endswith("second body")

    def test_line_in_one_block(self):
        assert change_blocks_for_line(SECTION, "/src/app.js", 9) == [
            "**Lines 2,8-9** | **2 changes tracked**\n##### t2\nsecond body"
        ]

    def test_untracked_line(self):
        assert change_blocks_for_line(SECTION, "app.js", 5) == []

    def test_unknown_file(self):
        assert change_blocks_for_line(SECTION, "other.js", 2) == []

    def test_blocks_do_not_leak_across_files(self, sample_devlog):
        assert change_blocks_for_line(sample_devlog, "app.js", 5) == []
        assert len(change_blocks_for_line(sample_devlog, "util.js", 5)) == 1


class TestEntryCards:
    """Tests for entry_cards."""

    def test_cards_end_at_next_entry_or_block(self):
        assert entry_cards(SECTION) == [
            "##### t1\nfirst body",
            "##### t2\nsecond body",
        ]

    def test_sample_card_keeps_narrative(self, sample_devlog):
        from devstry_backend.core.devlog import devlog_section

        cards = entry_cards(devlog_section(sample_devlog, "app.js"))
        assert len(cards) == 1
        assert cards[0].startswith("##### 2025-08-18T20:32:01.435Z")
        assert cards[0].endswith("- Return early on error")

    def test_no_entries(self):
        assert entry_cards("## /a.js\nprose only\n") == []
