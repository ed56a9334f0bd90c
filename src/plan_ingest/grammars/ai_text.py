"""Grammar for loosely formatted assistant output.

Recognizes "Phase N:", "Step N:" and "Stage N -" headers followed by
numbered or bulleted task lines, without any markdown heading syntax.
"""

from __future__ import annotations

import re

from plan_ingest.detect import detect_signals
from plan_ingest.grammars.base import PhaseBuilder
from plan_ingest.models import IdSequence, Phase, PlanFormat
from plan_ingest.patterns import BULLET_ITEM_PATTERN, clean_text

__all__ = ["AITextGrammar"]

# "Phase 1: Design", "## Step 2 - Build", "**Stage 3:** Ship"
PHASE_HEADER_PATTERN = re.compile(
    r"^(?:#{1,6}\s*)?(?:\*\*)?(?:Phase|Step|Stage)\s*(\d+)\s*[:\-]\s*(.*)$",
    re.IGNORECASE,
)


class AITextGrammar:
    """Grammar for "Phase N:" style plans.

    Phases are always named "Phase {N}: {rest}" regardless of whether the
    source said Phase, Step or Stage. Tasks start undone.
    """

    name = "ai-text"
    format = PlanFormat.AI_TEXT

    def try_parse(self, text: str, ids: IdSequence) -> list[Phase] | None:
        if not detect_signals(text).looks_like_ai_text:
            return None

        builder = PhaseBuilder(ids)
        for line in text.split("\n"):
            stripped = line.strip()
            if not stripped:
                continue

            header = PHASE_HEADER_PATTERN.match(stripped)
            if header:
                number, rest = header.group(1), clean_text(header.group(2))
                builder.open(f"Phase {number}: {rest}" if rest else f"Phase {number}")
                continue

            item = BULLET_ITEM_PATTERN.match(stripped)
            if item:
                # Items before the first header have no phase and are ignored
                builder.add_task(item.group(1))

        return builder.finish()
