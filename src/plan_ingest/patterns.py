"""Regex patterns and text cleanup shared by the detector and the grammars."""

from __future__ import annotations

import re

__all__ = [
    "BULLET_ITEM_PATTERN",
    "CHECKBOX_PATTERN",
    "HEADING_PATTERN",
    "NUMBERED_ITEM_PATTERN",
    "PHASE_PREFIX_PATTERN",
    "clean_text",
]

# Heading: "#" through "######" followed by a space
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*)$")

# Checkbox list item: - [ ] text, * [x] text, + [X] text
CHECKBOX_PATTERN = re.compile(r"^[-*+]\s*\[([ xX])\]\s*(.*)$")

# Bullet or numbered item: "1." / "1)" / "-" / "*" / "•" / "+" followed by whitespace
BULLET_ITEM_PATTERN = re.compile(r"^(?:\d+[.)]|[-*•+])\s+(.*)$")

# Numbered list item: "1. text"
NUMBERED_ITEM_PATTERN = re.compile(r"^\d+\.\s+")

# Phase/Step/Stage prefix anywhere on a line: "Phase 1:", "Step 2 -"
PHASE_PREFIX_PATTERN = re.compile(r"(?:Phase|Step|Stage)\s*\d+\s*[:\-]", re.IGNORECASE)


def clean_text(text: str) -> str:
    """Strip bold ("**"), inline code ("`") and strikethrough ("~~") markers, then trim.

    Markers are removed until none remain, in one pass: a marker exposed by an
    earlier removal (the "**" left by "*`*") is removed too, so
    clean_text(clean_text(s)) is always clean_text(s).

    Example:
        >>> clean_text("  **Add** `Task` ~~model~~ ")
        'Add Task model'
    """
    out: list[str] = []
    for ch in text:
        if ch == "`":
            continue
        if ch in "*~" and out and out[-1] == ch:
            out.pop()
            continue
        out.append(ch)
    return "".join(out).strip()

