"""Plan parser: format detection and dispatch across grammars.

This module is the entry point for turning free-form plan text into a
Phase/Task tree. Grammars are tried in priority order (JSON, Markdown,
AI text, bullets) and the first one that yields phases wins.

Parsing never raises. Every outcome, including empty input and unrecognised
text, comes back as a ParseResult.

Example:
    >>> result = smart_parse("- Buy milk\\n- Walk dog")
    >>> result.success, result.format.value
    (True, 'bullets')
    >>> [t.text for t in result.phases[0].tasks]
    ['Buy milk', 'Walk dog']
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from plan_ingest.errors import ConfigurationError, EmptyInputError, NoFormatMatchedError, error_for_code
from plan_ingest.grammars import GRAMMARS, Grammar
from plan_ingest.logging import get_logger
from plan_ingest.models import IdSequence, ParseResult, Phase, PlanFormat

__all__ = [
    "DEFAULT_GRAMMARS",
    "EMPTY_INPUT_MESSAGE",
    "NO_FORMAT_MESSAGE",
    "ParserConfig",
    "PlanParser",
    "format_hint",
    "smart_parse",
]

logger = get_logger("parser")

DEFAULT_GRAMMARS: tuple[str, ...] = ("json", "markdown", "ai-text", "bullets")

EMPTY_INPUT_MESSAGE = "Empty input"
NO_FORMAT_MESSAGE = "Could not detect a valid format. Supported formats: JSON, Markdown, bullet points"

GRAMMARS_ENV = "PLAN_INGEST_GRAMMARS"
MAX_INPUT_CHARS_ENV = "PLAN_INGEST_MAX_INPUT_CHARS"

FORMAT_HINTS: dict[PlanFormat, str] = {
    PlanFormat.JSON: "Paste your JSON plan directly or wrapped in ```json code blocks",
    PlanFormat.MARKDOWN: "Paste markdown with # headers and - [ ] checkboxes",
    PlanFormat.AI_TEXT: 'Paste AI output with "Phase 1:", "Step 1:", etc.',
    PlanFormat.BULLETS: "Paste a simple list of tasks (bullets or numbered)",
}
DEFAULT_HINT = "Paste in any format: JSON, Markdown, or plain text"


def format_hint(fmt: PlanFormat | str | None = None) -> str:
    """User-facing guidance for pasting a plan in the given format."""
    if fmt is None:
        return DEFAULT_HINT
    try:
        fmt = PlanFormat(fmt)
    except ValueError:
        return DEFAULT_HINT
    return FORMAT_HINTS.get(fmt, DEFAULT_HINT)


# =============================================================================
# Parser Configuration
# =============================================================================


@dataclass
class ParserConfig:
    """Configuration for plan parsing.

    Attributes:
        grammars: Grammar names to try, in priority order.
        strict: If True, parse_or_raise() raises on failure. parse() always
            returns a ParseResult regardless.
        max_input_chars: Truncate longer inputs before parsing. None for no limit.
    """

    grammars: tuple[str, ...] = field(default=DEFAULT_GRAMMARS)
    strict: bool = False
    max_input_chars: int | None = None

    def __post_init__(self) -> None:
        unknown = [name for name in self.grammars if name not in GRAMMARS]
        if unknown:
            raise ConfigurationError(
                f"Unknown grammar(s): {', '.join(unknown)}",
                config_key="grammars",
                hint=f"Available grammars: {', '.join(GRAMMARS)}",
            )
        if not self.grammars:
            raise ConfigurationError("At least one grammar is required", config_key="grammars")
        if self.max_input_chars is not None and self.max_input_chars <= 0:
            raise ConfigurationError("max_input_chars must be positive", config_key="max_input_chars")

    @classmethod
    def from_env(cls, **overrides: Any) -> ParserConfig:
        """Build a config from $PLAN_INGEST_GRAMMARS and $PLAN_INGEST_MAX_INPUT_CHARS.

        Keyword overrides take precedence over the environment.
        """
        values: dict[str, Any] = {}

        grammars = os.environ.get(GRAMMARS_ENV, "").strip()
        if grammars:
            values["grammars"] = tuple(g.strip() for g in grammars.split(",") if g.strip())

        max_chars = os.environ.get(MAX_INPUT_CHARS_ENV, "").strip()
        if max_chars:
            try:
                values["max_input_chars"] = int(max_chars)
            except ValueError as e:
                raise ConfigurationError(
                    f"{MAX_INPUT_CHARS_ENV} must be an integer, got {max_chars!r}",
                    config_key=MAX_INPUT_CHARS_ENV,
                ) from e

        values.update(overrides)
        return cls(**values)


# =============================================================================
# PlanParser
# =============================================================================


class PlanParser:
    """Parser for free-form development plans.

    Example:
        >>> parser = PlanParser()
        >>> result = parser.parse("### Phase 1: Setup (2-4 hours)\\n- [ ] Init repo")
        >>> result.phases[0].name, result.phases[0].hours
        ('Setup', '2-4 hours')

    Attributes:
        config: Parser configuration.
        grammars: Grammar instances in the order they are tried.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.grammars: list[Grammar] = [GRAMMARS[name]() for name in self.config.grammars]

    def parse(self, text: Any) -> ParseResult:
        """Parse plan text into phases.

        Args:
            text: Raw plan text. Non-string values are treated as empty.

        Returns:
            A successful ParseResult with at least one phase, or a failed one
            carrying a diagnostic.
        """
        if not isinstance(text, str):
            text = ""

        trimmed = text.strip()
        if not trimmed:
            logger.debug("parse_failed", error_code=EmptyInputError.code)
            return ParseResult.fail(EMPTY_INPUT_MESSAGE, EmptyInputError.code)

        limit = self.config.max_input_chars
        if limit is not None and len(trimmed) > limit:
            logger.warning("input_truncated", length=len(trimmed), limit=limit)
            trimmed = trimmed[:limit]

        for grammar in self.grammars:
            # Identifiers restart for each grammar attempt
            phases = self._try_grammar(grammar, trimmed, IdSequence())
            if phases:
                logger.debug(
                    "grammar_matched",
                    grammar=grammar.name,
                    phase_count=len(phases),
                    task_count=sum(p.total_count for p in phases),
                )
                return ParseResult.ok(phases, grammar.format)
            logger.debug("grammar_declined", grammar=grammar.name)

        logger.debug("parse_failed", error_code=NoFormatMatchedError.code)
        return ParseResult.fail(NO_FORMAT_MESSAGE, NoFormatMatchedError.code)

    def parse_or_raise(self, text: Any) -> ParseResult:
        """Parse like parse(), raising PlanParseError on failure when strict.

        Raises:
            EmptyInputError: If strict and the input is empty.
            NoFormatMatchedError: If strict and no grammar matched.
        """
        result = self.parse(text)
        if self.config.strict and not result.success:
            raise error_for_code(result.error_code)(result.error or "Parse failed", hint=format_hint())
        return result

    def _try_grammar(self, grammar: Grammar, text: str, ids: IdSequence) -> list[Phase] | None:
        try:
            return grammar.try_parse(text, ids)
        except Exception as e:
            # A raising grammar counts as a decline
            logger.warning("grammar_error", grammar=grammar.name, error=repr(e))
            return None


_default_parser = PlanParser()


def smart_parse(text: Any) -> ParseResult:
    """Parse plan text with the default grammar cascade.

    Safe to call concurrently: each call uses its own identifier sequence.
    """
    return _default_parser.parse(text)
