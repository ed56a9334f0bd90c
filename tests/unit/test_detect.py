"""Tests for structural signal detection."""

from __future__ import annotations

import pytest

from plan_ingest import PlanFormat, StructuralSignals, detect_signals
from plan_ingest.detect import BULLET_DENSITY_THRESHOLD


class TestDetectSignals:
    """Test individual signals."""

    def test_braces(self) -> None:
        """Test an object span sets has_braces."""
        assert detect_signals('prose {"a": 1} prose').has_braces

    def test_wrapped_array(self) -> None:
        """Test text wrapped in brackets sets has_braces."""
        assert detect_signals('  ["a", "b"]  ').has_braces

    def test_reversed_braces(self) -> None:
        """Test "}" before "{" does not count."""
        assert not detect_signals("} and {").has_braces

    def test_code_fence(self) -> None:
        """Test triple backticks are detected."""
        assert detect_signals("```\nx\n```").has_code_fence

    def test_headings(self) -> None:
        """Test markdown headings are detected."""
        assert detect_signals("intro\n## Setup").has_headings
        assert not detect_signals("#tag").has_headings

    def test_checkboxes(self) -> None:
        """Test checkbox items are detected."""
        assert detect_signals("- [ ] a").has_checkboxes
        assert detect_signals("  * [X] a").has_checkboxes
        assert not detect_signals("- a").has_checkboxes

    @pytest.mark.parametrize("text", ["Phase 1: x", "step 2 - y", "Stage3:z", "see Phase 4: here"])
    def test_phase_prefix(self, text: str) -> None:
        """Test Phase/Step/Stage prefixes anywhere in the text."""
        assert detect_signals(text).has_phase_prefix

    def test_phase_word_without_number(self) -> None:
        """Test the bare word "phase" is not a prefix."""
        assert not detect_signals("The next phase: testing").has_phase_prefix

    def test_numbered_list(self) -> None:
        """Test "N. " items are detected."""
        assert detect_signals("1. a").has_numbered_list
        assert not detect_signals("1) a").has_numbered_list

    def test_counts_ignore_blank_lines(self) -> None:
        """Test line and bullet counts skip blank lines."""
        signals = detect_signals("Intro\n\n- a\n\n   \n1. b\n")

        assert signals.line_count == 3
        assert signals.bullet_count == 2

    def test_empty_text(self) -> None:
        """Test empty text has no signals."""
        signals = detect_signals("")

        assert signals == StructuralSignals()
        assert signals.bullet_ratio == 0.0
        assert signals.likely_format is PlanFormat.UNKNOWN


class TestStructuralSignals:
    """Test derived properties."""

    def test_bullet_ratio(self) -> None:
        """Test the ratio of bullets to non-blank lines."""
        assert StructuralSignals(line_count=4, bullet_count=1).bullet_ratio == 0.25

    def test_bullet_threshold(self) -> None:
        """Test the bullet density threshold is inclusive."""
        assert BULLET_DENSITY_THRESHOLD == 0.5
        assert StructuralSignals(line_count=2, bullet_count=1).looks_like_bullets
        assert not StructuralSignals(line_count=3, bullet_count=1).looks_like_bullets

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('{"phases": []}', PlanFormat.JSON),
            ("## A\n- [ ] x", PlanFormat.MARKDOWN),
            ("- [ ] x", PlanFormat.MARKDOWN),
            ("Phase 1: A\n- x", PlanFormat.AI_TEXT),
            ("- a\n- b", PlanFormat.BULLETS),
            ("Buy milk", PlanFormat.UNKNOWN),
        ],
    )
    def test_likely_format(self, text: str, expected: PlanFormat) -> None:
        """Test the best-guess format follows grammar priority."""
        assert detect_signals(text).likely_format is expected

    def test_frozen(self) -> None:
        """Test signals are immutable."""
        signals = detect_signals("- a")
        with pytest.raises(AttributeError):
            signals.line_count = 5  # type: ignore[misc]
