"""Tolerant JSON grammar.

Recovers a phase/task tree from text that is JSON or JSON-like: bare JSON,
JSON inside a ```json fence, JSON surrounded by prose, and JSON with the
defects language models tend to produce (comments, trailing commas, smart
quotes, zero-width spaces).

Phase and task objects are normalized across several alternative key names,
so `{"phases": [{"title": ..., "items": [...]}]}` and
`[{"name": ..., "tasks": [...]}]` both work.
"""

from __future__ import annotations

import json
import re
from typing import Any

from plan_ingest.errors import MalformedJSONError
from plan_ingest.logging import get_logger
from plan_ingest.models import IdSequence, Phase, PlanFormat, Task
from plan_ingest.patterns import clean_text

__all__ = ["JSONGrammar", "extract_json_text", "sanitize_json"]

logger = get_logger("grammars.json")

# =============================================================================
# Key Names
# =============================================================================

PHASE_LIST_KEYS = ("phases", "plan", "steps")
PHASE_NAME_KEYS = ("name", "title", "phase", "label")
PHASE_HOURS_KEYS = ("hours", "duration", "timeEstimate", "time")
PHASE_TASK_KEYS = ("tasks", "items", "steps", "todo")
TASK_TEXT_KEYS = ("text", "task", "name", "description", "title")
TASK_DONE_KEYS = ("done", "completed", "checked")

DEFAULT_PHASE_NAME = "Phase"

# =============================================================================
# Extraction and Sanitization
# =============================================================================

# ```json ... ``` or ``` ... ```
CODE_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?(.*?)\n?```", re.DOTALL | re.IGNORECASE)

SMART_QUOTES = {
    "\u201c": '"',  # left double
    "\u201d": '"',  # right double
    "\u201e": '"',  # low double
    "\u2033": '"',  # double prime
    "\u2018": "'",  # left single
    "\u2019": "'",  # right single
    "\u201a": "'",  # low single
    "\u2032": "'",  # prime
}

ZERO_WIDTH_CHARS = ("\u200b", "\u200c", "\u200d", "\ufeff")

_TRANSLATION = str.maketrans({**SMART_QUOTES, **{c: None for c in ZERO_WIDTH_CHARS}})


def extract_json_text(text: str) -> str | None:
    """Pull the JSON-looking part out of text.

    Uses the content of the first code fence if there is one. If the result
    does not start with "{" or "[", slices from the first opening brace or
    bracket to the last closing one. This slicing is not nesting-aware and
    can mis-slice when surrounding prose contains braces.

    Returns:
        The candidate JSON text, or None if there is nothing to slice.
    """
    fence = CODE_FENCE_PATTERN.search(text)
    candidate = (fence.group(1) if fence else text).strip()

    if candidate.startswith(("{", "[")):
        return candidate

    starts = [i for i in (candidate.find("{"), candidate.find("[")) if i != -1]
    end = max(candidate.rfind("}"), candidate.rfind("]"))
    if not starts or end == -1:
        return None
    start = min(starts)
    if end <= start:
        return None
    return candidate[start : end + 1]


def _strip_comments(text: str) -> str:
    """Remove // and /* */ comments outside string literals."""
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = n if close == -1 else close + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede a closing brace or bracket."""
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j < n and text[j] in "}]":
                i += 1
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def sanitize_json(text: str) -> str:
    """Apply lenient cleanup for common AI-generated JSON defects."""
    text = text.translate(_TRANSLATION)
    text = _strip_comments(text)
    return _strip_trailing_commas(text)


def _load(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MalformedJSONError(
            f"Invalid JSON after sanitization: {e}",
            details={"length": len(text)},
        ) from e


# =============================================================================
# Normalization
# =============================================================================


def _first_present(obj: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = obj.get(key)
        if value is not None:
            return value
    return None


def _first_list(obj: dict[str, Any], keys: tuple[str, ...]) -> list[Any] | None:
    for key in keys:
        value = obj.get(key)
        if isinstance(value, list):
            return value
    return None


def _stringify(value: Any) -> str:
    """Render a JSON value as display text.

    Arrays are comma-joined with nulls as empty strings, integral floats drop
    their ".0" and objects are re-serialized.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, list):
        return ",".join(_stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)



def _locate_phases(data: Any) -> list[Any] | None:
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        return None
    phases = _first_list(data, PHASE_LIST_KEYS)
    if phases is not None:
        return phases
    for value in data.values():
        if isinstance(value, list):
            return value
    return None


def _normalize_task(raw: Any, ids: IdSequence) -> Task | None:
    if raw is None:
        return None
    done = False
    if isinstance(raw, dict):
        value = _first_present(raw, TASK_TEXT_KEYS)
        text = "" if value is None else _stringify(value)
        flag = _first_present(raw, TASK_DONE_KEYS)
        done = bool(flag)
    else:
        text = _stringify(raw)

    text = clean_text(text)
    if not text:
        return None
    return Task(id=ids.next("task"), text=text, done=done)


def _normalize_phase(raw: Any, ids: IdSequence) -> Phase | None:
    if not isinstance(raw, dict):
        return None

    name_value = _first_present(raw, PHASE_NAME_KEYS)
    name = clean_text(_stringify(name_value)) if name_value is not None else ""

    hours_value = _first_present(raw, PHASE_HOURS_KEYS)
    hours = _stringify(hours_value).strip() if hours_value is not None else ""

    phase = Phase(id=ids.next("phase"), name=name or DEFAULT_PHASE_NAME, hours=hours or None)
    for raw_task in _first_list(raw, PHASE_TASK_KEYS) or []:
        task = _normalize_task(raw_task, ids)
        if task is not None:
            phase.tasks.append(task)

    return phase if phase.tasks else None


# =============================================================================
# JSONGrammar
# =============================================================================


class JSONGrammar:
    """Grammar for JSON and JSON-like plan text.

    Example:
        >>> grammar = JSONGrammar()
        >>> phases = grammar.try_parse('{"phases":[{"name":"A","tasks":["x",]}]}', IdSequence())
        >>> phases[0].name, phases[0].tasks[0].text
        ('A', 'x')
    """

    name = "json"
    format = PlanFormat.JSON

    def try_parse(self, text: str, ids: IdSequence) -> list[Phase] | None:
        candidate = extract_json_text(text)
        if candidate is None:
            return None

        try:
            data = _load(sanitize_json(candidate))
        except MalformedJSONError as e:
            logger.debug("json_declined", reason=e.code, detail=e.message)
            return None

        raw_phases = _locate_phases(data)
        if not raw_phases:
            logger.debug("json_declined", reason="no_phase_array")
            return None

        phases: list[Phase] = []
        for raw in raw_phases:
            phase = _normalize_phase(raw, ids)
            if phase is not None:
                phases.append(phase)

        return phases or None
