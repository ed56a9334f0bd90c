"""Tests for BulletGrammar."""

from __future__ import annotations

import pytest

from plan_ingest import BulletGrammar, IdSequence, PlanFormat


@pytest.fixture
def grammar() -> BulletGrammar:
    """Create a bullet grammar."""
    return BulletGrammar()


def parse(grammar: BulletGrammar, text: str):
    return grammar.try_parse(text, IdSequence())


class TestBulletGrammar:
    """Test the flat-list fallback."""

    def test_identity(self, grammar: BulletGrammar) -> None:
        """Test grammar name and format."""
        assert grammar.name == "bullets"
        assert grammar.format is PlanFormat.BULLETS

    def test_simple_list(self, grammar: BulletGrammar) -> None:
        """Test a dash list becomes one "Tasks" phase."""
        phases = parse(grammar, "- Buy milk\n- Walk dog")

        assert len(phases) == 1
        assert phases[0].name == "Tasks"
        assert phases[0].hours is None
        assert [(t.text, t.done) for t in phases[0].tasks] == [
            ("Buy milk", False),
            ("Walk dog", False),
        ]

    def test_numbered_list(self, grammar: BulletGrammar) -> None:
        """Test numbered items in both styles."""
        phases = parse(grammar, "1. first\n2) second")

        assert [t.text for t in phases[0].tasks] == ["first", "second"]

    def test_mixed_markers(self, grammar: BulletGrammar) -> None:
        """Test all bullet characters together."""
        phases = parse(grammar, "- a\n* b\n• c\n+ d")

        assert [t.text for t in phases[0].tasks] == ["a", "b", "c", "d"]

    def test_leading_checkbox_honoured(self, grammar: BulletGrammar) -> None:
        """Test "[x]" at the start of an item marks it done."""
        phases = parse(grammar, "1. [x] shipped\n2. [ ] pending")

        assert [(t.text, t.done) for t in phases[0].tasks] == [
            ("shipped", True),
            ("pending", False),
        ]

    def test_half_bullets_accepted(self, grammar: BulletGrammar) -> None:
        """Test exactly half bulleted lines meets the threshold."""
        phases = parse(grammar, "My list:\n- item")

        assert [t.text for t in phases[0].tasks] == ["item"]

    def test_mostly_prose_declines(self, grammar: BulletGrammar) -> None:
        """Test fewer than half bulleted lines is declined."""
        assert parse(grammar, "Intro\nMore intro\nYet more\n- item") is None

    def test_blank_lines_not_counted(self, grammar: BulletGrammar) -> None:
        """Test blank lines do not dilute bullet density."""
        phases = parse(grammar, "Intro\n\n\n\n- a\n\n- b")

        assert len(phases[0].tasks) == 2

    def test_single_line_declines(self, grammar: BulletGrammar) -> None:
        """Test a lone sentence is not a list."""
        assert parse(grammar, "Buy milk") is None

    def test_empty_items_decline(self, grammar: BulletGrammar) -> None:
        """Test items that clean to nothing produce no phase."""
        assert parse(grammar, "- **\n- ``") is None

    def test_marker_without_space_is_not_bullet(self, grammar: BulletGrammar) -> None:
        """Test "-x" is not a bullet item."""
        assert parse(grammar, "-x\n-y") is None
