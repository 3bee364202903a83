"""Tests for line lookup over a parsed devlog tree."""

import pytest

from devstry_backend.core.devlog import LookupResult, lookup, parse


@pytest.fixture
def tree(sample_devlog):
    return parse(sample_devlog)


class TestLookup:
    """Tests for lookup."""

    def test_exact_row_hit(self, tree):
        """A line named by a row returns the full context."""
        result = lookup(tree, "/src/app.js", 34)

        assert result.found and result.is_exact
        assert result.scope.name == "Global constants"
        assert result.entry.timestamp == "2025-08-18T20:32:01.435Z"
        assert result.row.after == "res.send(x)"
        assert result.row.highlight == "🟡"
        assert result.ai_insight == "Sends the response **before** the handler returns."
        assert result.suggestions == ("Add a test for the empty body case", "Return early on error")

    def test_line_in_scope_without_row(self, tree):
        """A line inside a scope but not in any row is a coarse hit."""
        result = lookup(tree, "/src/app.js", 50)

        assert result.found and not result.is_exact
        assert result.scope.name == "Global constants"
        assert result.entry is None
        assert result.row is None
        assert result.ai_insight is None
        assert result.suggestions is None

    def test_scope_bounds_are_inclusive(self, tree):
        assert lookup(tree, "/src/app.js", 31).found
        assert lookup(tree, "/src/app.js", 53).found
        assert not lookup(tree, "/src/app.js", 54).found

    def test_line_outside_every_scope(self, tree):
        assert lookup(tree, "/src/app.js", 5) == LookupResult()

    def test_unknown_file(self, tree):
        assert lookup(tree, "/src/missing.js", 34) == LookupResult()

    def test_path_must_match_exactly(self, tree):
        """Paths are not normalised: a bare name does not match a full path."""
        assert not lookup(tree, "app.js", 34).found
        assert not lookup(tree, "src/app.js", 34).found

    def test_empty_tree(self):
        assert lookup((), "/a.js", 1) == LookupResult()

    def test_overlapping_scopes_first_wins(self):
        doc = (
            "## /a.js\n"
            "**outer** | **Lines 1-20** | **1 change tracked**\n"
            "**inner** | **Lines 5-8** | **1 change tracked**\n"
            "##### t\n"
            "| Line | Before | After |\n"
            "|------|--------|-------|\n"
            "| 6 | `a` | `b` |\n"
        )
        result = lookup(parse(doc), "/a.js", 6)
        assert result.scope.name == "outer"
        assert not result.is_exact

    def test_row_outside_scope_range_is_ignored(self):
        """A row naming a line beyond its scope bounds is never reached."""
        doc = (
            "## /a.js\n"
            "**s** | **Lines 1-5** | **1 change tracked**\n"
            "##### t\n"
            "| Line | Before | After |\n"
            "|------|--------|-------|\n"
            "| 99 | `a` | `b` |\n"
        )
        tree = parse(doc)

        assert lookup(tree, "/a.js", 99) == LookupResult()
        inside = lookup(tree, "/a.js", 3)
        assert inside.scope.name == "s"
        assert inside.row is None

    def test_first_matching_row_across_entries(self):
        doc = (
            "## /a.js\n"
            "**s** | **Lines 1-10** | **2 changes tracked**\n"
            "##### first\n"
            "| Line | Before | After |\n"
            "|------|--------|-------|\n"
            "| 3 | `a` | `b` |\n"
            "##### second\n"
            "| Line | Before | After |\n"
            "|------|--------|-------|\n"
            "| 3 | `b` | `c` |\n"
            "\n"
            "**AI Insight**\n"
            "Second insight.\n"
        )
        result = lookup(parse(doc), "/a.js", 3)
        assert result.entry.timestamp == "first"
        assert result.row.after == "b"
        assert result.ai_insight is None

    def test_duplicate_file_headings_first_wins(self):
        doc = (
            "## /a.js\n"
            "**first** | **Lines 1-2** | **1 change tracked**\n"
            "## /a.js\n"
            "**second** | **Lines 1-2** | **1 change tracked**\n"
        )
        assert lookup(parse(doc), "/a.js", 1).scope.name == "first"

    def test_to_dict(self, tree):
        data = lookup(tree, "/src/app.js", 34).to_dict()
        assert data["scope"]["line_start"] == 31
        assert data["entry"] == {"timestamp": "2025-08-18T20:32:01.435Z"}
        assert data["row"]["line"] == 34
        assert data["suggestions"] == ["Add a test for the empty body case", "Return early on error"]

    def test_to_dict_for_miss(self, tree):
        data = lookup(tree, "/src/app.js", 5).to_dict()
        assert all(value is None for value in data.values())

    def test_bare_file_heading(self, sample_devlog):
        """Headings without a directory are looked up by the bare name."""
        tree = parse(sample_devlog.replace("## /src/app.js", "## app.js"))

        hit = lookup(tree, "app.js", 34)
        assert hit.row.highlight == "🟡"
        assert "before" in hit.ai_insight
        assert len(hit.suggestions) == 2
        assert lookup(tree, "app.js", 50).row is None
        assert lookup(tree, "app.js", 5) == LookupResult()
        assert lookup(tree, "missing.js", 34) == LookupResult()

    def test_stale_change_count_does_not_affect_lookup(self, sample_devlog):
        """The declared count never changes which row is found."""
        stale = sample_devlog.replace("**2 changes tracked**", "**40 changes tracked**")
        fresh_hit = lookup(parse(sample_devlog), "/src/app.js", 34)
        stale_hit = lookup(parse(stale), "/src/app.js", 34)

        assert stale_hit.scope.change_count == 40
        assert stale_hit.row == fresh_hit.row
        assert stale_hit.entry == fresh_hit.entry
        assert not lookup(parse(stale), "/src/app.js", 54).found
