"""Data models for parsed development plans.

A plan is an ordered list of Phase objects, each holding an ordered list of
Task objects. The to_dict/from_dict pair on each model is the serialization
contract shared with anything that stores or re-imports a parsed plan.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from plan_ingest.errors import PlanSchemaError, error_for_code

__all__ = [
    "IdSequence",
    "ParseResult",
    "Phase",
    "PlanFormat",
    "PlanProgress",
    "Task",
    "phases_from_json",
    "phases_to_json",
    "plan_progress",
    "reassign_ids",
]


class PlanFormat(str, Enum):
    """Input format a plan was recognised as."""

    JSON = "json"
    MARKDOWN = "markdown"
    AI_TEXT = "ai-text"
    BULLETS = "bullets"
    UNKNOWN = "unknown"


class IdSequence:
    """Monotonic identifier generator scoped to one parse call.

    Example:
        >>> ids = IdSequence()
        >>> ids.next("phase"), ids.next("task")
        ('phase-1', 'task-2')
    """

    def __init__(self, start: int = 0) -> None:
        self._counter = start

    def next(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter}"

    @property
    def count(self) -> int:
        """Number of identifiers issued so far."""
        return self._counter


@dataclass
class Task:
    """A single actionable item.

    Attributes:
        id: Identifier, unique within one parse call (e.g., "task-3")
        text: Display text, never empty
        done: Whether the task is marked complete
    """

    id: str
    text: str
    done: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, "text": self.text, "done": self.done}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Create from dictionary.

        Raises:
            PlanSchemaError: If required fields are missing or mistyped.
        """
        if not isinstance(data, dict):
            raise PlanSchemaError(f"Task entry must be an object, got {type(data).__name__}")
        try:
            task_id = data["id"]
            text = data["text"]
        except KeyError as e:
            raise PlanSchemaError(f"Task entry missing field: {e.args[0]}", details=data) from e
        if not isinstance(text, str) or not text:
            raise PlanSchemaError("Task text must be a non-empty string", details=data)
        return cls(id=str(task_id), text=text, done=bool(data.get("done", False)))


@dataclass
class Phase:
    """An ordered group of tasks representing one stage of work.

    Attributes:
        id: Identifier, unique within one parse call (e.g., "phase-1")
        name: Display name, never empty
        hours: Free-text effort label such as "2-4", or None
        tasks: Tasks in source order
    """

    id: str
    name: str
    hours: str | None = None
    tasks: list[Task] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.done)

    @property
    def progress(self) -> float:
        """Completion percentage in the range 0-100."""
        if not self.tasks:
            return 0.0
        return self.completed_count / self.total_count * 100

    @property
    def is_complete(self) -> bool:
        return bool(self.tasks) and self.completed_count == self.total_count

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "hours": self.hours,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Phase:
        """Create from dictionary.

        Raises:
            PlanSchemaError: If required fields are missing or mistyped.
        """
        if not isinstance(data, dict):
            raise PlanSchemaError(f"Phase entry must be an object, got {type(data).__name__}")
        try:
            phase_id = data["id"]
            name = data["name"]
        except KeyError as e:
            raise PlanSchemaError(f"Phase entry missing field: {e.args[0]}") from e
        if name is None or not str(name).strip():
            raise PlanSchemaError("Phase name must be a non-empty string", details={"id": phase_id})
        tasks = data.get("tasks", [])
        if not isinstance(tasks, list):
            raise PlanSchemaError("Phase tasks must be a list", details={"phase": name})
        hours = data.get("hours")
        return cls(
            id=str(phase_id),
            name=str(name),
            hours=None if hours is None else str(hours),
            tasks=[Task.from_dict(t) for t in tasks],
        )


# =============================================================================
# Progress
# =============================================================================


@dataclass(frozen=True)
class PlanProgress:
    """Aggregate completion across all phases."""

    total: int
    completed: int

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return round(self.completed / self.total * 100)

    @property
    def all_done(self) -> bool:
        return self.total > 0 and self.completed == self.total


def plan_progress(phases: Iterable[Phase]) -> PlanProgress:
    """Count total and completed tasks across phases."""
    total = completed = 0
    for phase in phases:
        total += phase.total_count
        completed += phase.completed_count
    return PlanProgress(total=total, completed=completed)


# =============================================================================
# Serialization
# =============================================================================


def phases_to_json(phases: Iterable[Phase], indent: int | None = 2) -> str:
    """Serialize a phase tree to a JSON document `{"phases": [...]}`."""
    return json.dumps({"phases": [p.to_dict() for p in phases]}, indent=indent)


def phases_from_json(text: str) -> list[Phase]:
    """Load a phase tree previously written by phases_to_json.

    Accepts either the `{"phases": [...]}` document or a bare list.

    Raises:
        PlanSchemaError: If the document is not valid JSON or not a phase tree.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PlanSchemaError(f"Invalid JSON: {e.msg}", details={"position": e.pos}) from e

    if isinstance(data, dict):
        data = data.get("phases")
    if not isinstance(data, list):
        raise PlanSchemaError(
            "Expected a list of phases",
            hint='Export documents look like {"phases": [...]}',
        )
    return [Phase.from_dict(p) for p in data]


def reassign_ids(phases: Iterable[Phase], ids: IdSequence | None = None) -> list[Phase]:
    """Return a deep copy of `phases` with fresh identifiers.

    Used when importing a previously exported tree so its identifiers cannot
    collide with those of trees already held by the caller.
    """
    ids = ids or IdSequence()
    result: list[Phase] = []
    for phase in phases:
        clone = copy.deepcopy(phase)
        clone.id = ids.next("phase")
        for task in clone.tasks:
            task.id = ids.next("task")
        result.append(clone)
    return result


# =============================================================================
# ParseResult
# =============================================================================


@dataclass
class ParseResult:
    """Outcome of a parse call.

    Either success with at least one phase, or failure with a diagnostic.

    Attributes:
        success: Whether a grammar produced a non-empty phase list
        phases: Parsed phases (empty on failure)
        format: Format the input was recognised as
        error: Human-readable diagnostic on failure
        error_code: Machine-readable failure code ("empty_input", ...)
    """

    success: bool
    phases: list[Phase] = field(default_factory=list)
    format: PlanFormat = PlanFormat.UNKNOWN
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, phases: list[Phase], fmt: PlanFormat) -> ParseResult:
        return cls(success=True, phases=phases, format=fmt)

    @classmethod
    def fail(cls, error: str, code: str) -> ParseResult:
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    @property
    def progress(self) -> PlanProgress:
        return plan_progress(self.phases)

    def raise_for_error(self) -> ParseResult:
        """Raise the matching PlanParseError if this result is a failure."""
        if not self.success:
            error_cls = error_for_code(self.error_code)
            raise error_cls(self.error or "Parse failed", code=self.error_code)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "success": self.success,
            "format": self.format.value,
            "phases": [p.to_dict() for p in self.phases],
        }
        if not self.success:
            data["error"] = self.error
            data["error_code"] = self.error_code
        return data
