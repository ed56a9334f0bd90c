"""Structural detection of plan text.

Looks for cheap, high-confidence signals (braces, code fences, markdown
headings, checkboxes, Phase/Step prefixes, bullet density) without parsing.
Each grammar uses these signals as its applicability pre-check.
"""

from __future__ import annotations

from dataclasses import dataclass

from plan_ingest.models import PlanFormat
from plan_ingest.patterns import (
    BULLET_ITEM_PATTERN,
    CHECKBOX_PATTERN,
    HEADING_PATTERN,
    NUMBERED_ITEM_PATTERN,
    PHASE_PREFIX_PATTERN,
)

__all__ = ["BULLET_DENSITY_THRESHOLD", "StructuralSignals", "detect_signals"]

# Minimum share of non-blank lines that must be bullets for the fallback grammar
BULLET_DENSITY_THRESHOLD = 0.5


@dataclass(frozen=True)
class StructuralSignals:
    """Structural signals found in a block of text.

    Attributes:
        has_braces: Contains a "{...}" span or is wrapped in "[...]"
        has_code_fence: Contains a triple-backtick fence
        has_headings: Some line is a markdown heading ("# ..." to "###### ...")
        has_checkboxes: Some line is a checkbox item ("- [ ]" / "- [x]")
        has_phase_prefix: Contains "Phase N:" / "Step N-" / "Stage N:"
        has_numbered_list: Some line starts with "N. "
        line_count: Number of non-blank lines
        bullet_count: Non-blank lines that are bullet or numbered items
    """

    has_braces: bool = False
    has_code_fence: bool = False
    has_headings: bool = False
    has_checkboxes: bool = False
    has_phase_prefix: bool = False
    has_numbered_list: bool = False
    line_count: int = 0
    bullet_count: int = 0

    @property
    def bullet_ratio(self) -> float:
        if not self.line_count:
            return 0.0
        return self.bullet_count / self.line_count

    @property
    def looks_like_json(self) -> bool:
        return self.has_braces

    @property
    def looks_like_markdown(self) -> bool:
        return self.has_headings or self.has_checkboxes

    @property
    def looks_like_ai_text(self) -> bool:
        return self.has_phase_prefix or self.has_numbered_list

    @property
    def looks_like_bullets(self) -> bool:
        return self.bullet_count > 0 and self.bullet_ratio >= BULLET_DENSITY_THRESHOLD

    @property
    def likely_format(self) -> PlanFormat:
        """Best guess at the format, in grammar priority order."""
        if self.looks_like_json:
            return PlanFormat.JSON
        if self.looks_like_markdown:
            return PlanFormat.MARKDOWN
        if self.looks_like_ai_text:
            return PlanFormat.AI_TEXT
        if self.looks_like_bullets:
            return PlanFormat.BULLETS
        return PlanFormat.UNKNOWN


def _has_braces(text: str) -> bool:
    stripped = text.strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        return True
    start = text.find("{")
    return start != -1 and text.rfind("}") > start


def detect_signals(text: str) -> StructuralSignals:
    """Scan text once and collect its structural signals."""
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]

    has_headings = False
    has_checkboxes = False
    bullet_count = 0
    for line in lines:
        if not has_headings and HEADING_PATTERN.match(line):
            has_headings = True
        if CHECKBOX_PATTERN.match(line):
            has_checkboxes = True
        if BULLET_ITEM_PATTERN.match(line):
            bullet_count += 1

    return StructuralSignals(
        has_braces=_has_braces(text),
        has_code_fence="```" in text,
        has_headings=has_headings,
        has_checkboxes=has_checkboxes,
        has_phase_prefix=bool(PHASE_PREFIX_PATTERN.search(text)),
        has_numbered_list=any(NUMBERED_ITEM_PATTERN.match(line) for line in lines),
        line_count=len(lines),
        bullet_count=bullet_count,
    )
