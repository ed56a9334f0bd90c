"""Markdown / checkbox grammar.

Headings open phases and checkbox list items become tasks:

    ### Phase 1: Setup (2-4 hours)
    - [ ] Init repo
    - [x] Install deps

parses to one phase "Setup" with hours "2-4 hours" and two tasks, the second
already done. Checkboxes before any heading go into an implicit "Tasks" phase.
"""

from __future__ import annotations

import re

from plan_ingest.detect import detect_signals
from plan_ingest.grammars.base import PhaseBuilder
from plan_ingest.models import IdSequence, Phase, PlanFormat
from plan_ingest.patterns import CHECKBOX_PATTERN, HEADING_PATTERN, clean_text

__all__ = ["MarkdownGrammar", "parse_heading"]

IMPLICIT_PHASE_NAME = "Tasks"
DEFAULT_PHASE_NAME = "Phase"

# Leading "Phase 1:", "Step 2 -", "Stage 3." prefix. A "." only separates
# when followed by whitespace, so "Stage 2.5 Refactor" keeps its number.
_NUMBERED_PREFIX = re.compile(
    r"^(?:Phase|Step|Stage)\s*\d+(?:\s*[:\-]\s*|\s*\.(?:\s+|$)|\s+)",
    re.IGNORECASE,
)


def _strip_closing_hashes(text: str) -> str:
    """Drop an ATX closing sequence: "## Title ##" -> "Title"."""
    text = text.rstrip()
    body = text.rstrip("#")
    if body != text and body and body[-1].isspace():
        return body.rstrip()
    return text


def _split_trailing_parens(text: str) -> tuple[str, str | None]:
    """Split "Setup (2-4 hours)" into ("Setup", "2-4 hours")."""
    if not text.endswith(")"):
        return text, None
    start = text.rfind("(")
    if start == -1:
        return text, None
    inner = text[start + 1 : -1]
    if ")" in inner:
        return text, None
    return text[:start].rstrip(), inner.strip() or None


def parse_heading(heading: str) -> tuple[str, str | None]:
    """Split heading text into a phase name and an optional hours label.

    Example:
        >>> parse_heading("Phase 1: Setup (2-4 hours)")
        ('Setup', '2-4 hours')
    """
    text = _strip_closing_hashes(heading.strip())
    text, hours = _split_trailing_parens(text)

    stripped = _NUMBERED_PREFIX.sub("", text, count=1)
    if clean_text(stripped):
        text = stripped

    return clean_text(text) or DEFAULT_PHASE_NAME, hours


class MarkdownGrammar:
    """Grammar for markdown headings with checkbox task lists."""

    name = "markdown"
    format = PlanFormat.MARKDOWN

    def try_parse(self, text: str, ids: IdSequence) -> list[Phase] | None:
        if not detect_signals(text).looks_like_markdown:
            return None

        builder = PhaseBuilder(ids)
        for line in text.split("\n"):
            stripped = line.strip()
            if not stripped:
                continue

            heading = HEADING_PATTERN.match(stripped)
            if heading:
                name, hours = parse_heading(heading.group(2))
                builder.open(name, hours)
                continue

            checkbox = CHECKBOX_PATTERN.match(stripped)
            if checkbox:
                if builder.current is None:
                    builder.open(IMPLICIT_PHASE_NAME)
                builder.add_task(checkbox.group(2), done=checkbox.group(1).lower() == "x")

        return builder.finish()
