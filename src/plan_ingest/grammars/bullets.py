"""Last-resort grammar for flat bullet or numbered lists."""

from __future__ import annotations

import re

from plan_ingest.detect import detect_signals
from plan_ingest.grammars.base import PhaseBuilder
from plan_ingest.models import IdSequence, Phase, PlanFormat
from plan_ingest.patterns import BULLET_ITEM_PATTERN

__all__ = ["BulletGrammar"]

FALLBACK_PHASE_NAME = "Tasks"

_LEADING_CHECKBOX = re.compile(r"^\[([ xX])\]\s*(.*)$")


class BulletGrammar:
    """Treat a mostly-bulleted block as one implicit "Tasks" phase.

    Declines when fewer than half of the non-blank lines are bullet or
    numbered items.
    """

    name = "bullets"
    format = PlanFormat.BULLETS

    def try_parse(self, text: str, ids: IdSequence) -> list[Phase] | None:
        if not detect_signals(text).looks_like_bullets:
            return None

        builder = PhaseBuilder(ids)
        builder.open(FALLBACK_PHASE_NAME)
        for line in text.split("\n"):
            item = BULLET_ITEM_PATTERN.match(line.strip())
            if not item:
                continue
            body = item.group(1)
            checkbox = _LEADING_CHECKBOX.match(body)
            if checkbox:
                builder.add_task(checkbox.group(2), done=checkbox.group(1).lower() == "x")
            else:
                builder.add_task(body)

        return builder.finish()
