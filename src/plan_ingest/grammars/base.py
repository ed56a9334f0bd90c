"""Grammar protocol and the phase accumulator shared by line-oriented grammars."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from plan_ingest.models import IdSequence, Phase, PlanFormat, Task
from plan_ingest.patterns import clean_text

__all__ = ["Grammar", "PhaseBuilder"]


@runtime_checkable
class Grammar(Protocol):
    """A self-contained recognizer for one input shape.

    try_parse returns None when the grammar does not apply, otherwise a
    non-empty list of phases, each holding at least one task.
    """

    name: str
    format: PlanFormat

    def try_parse(self, text: str, ids: IdSequence) -> list[Phase] | None: ...


class PhaseBuilder:
    """Accumulates phases for line-oriented grammars.

    Holds one open phase at a time. Closing a phase keeps it only if it
    gathered at least one task.
    """

    def __init__(self, ids: IdSequence) -> None:
        self.ids = ids
        self.phases: list[Phase] = []
        self.current: Phase | None = None

    def open(self, name: str, hours: str | None = None) -> Phase:
        self.close()
        self.current = Phase(id=self.ids.next("phase"), name=name, hours=hours)
        return self.current

    def close(self) -> None:
        if self.current is not None and self.current.tasks:
            self.phases.append(self.current)
        self.current = None

    def add_task(self, raw_text: str, done: bool = False) -> Task | None:
        """Append a task to the open phase. Empty text is dropped."""
        if self.current is None:
            return None
        text = clean_text(raw_text)
        if not text:
            return None
        task = Task(id=self.ids.next("task"), text=text, done=done)
        self.current.tasks.append(task)
        return task

    def finish(self) -> list[Phase] | None:
        self.close()
        return self.phases or None
