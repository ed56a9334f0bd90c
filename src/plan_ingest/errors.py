"""Error hierarchy for plan-ingest.

All errors derive from PlanIngestError, which carries a message, optional
structured details and an optional hint for the user.

The parser never raises these to its caller: parse failures are reported as
a failed ParseResult. The exceptions exist for the grammar internals (which
absorb them), for the import boundary (PlanSchemaError) and for callers that
prefer exceptions via ParseResult.raise_for_error().
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConfigurationError",
    "EmptyInputError",
    "MalformedJSONError",
    "NoFormatMatchedError",
    "PlanIngestError",
    "PlanParseError",
    "PlanSchemaError",
    "error_for_code",
]


class PlanIngestError(Exception):
    """Base exception for plan-ingest errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n  Hint: {self.hint}"
        return self.message


class PlanParseError(PlanIngestError):
    """No phase/task tree could be recovered from the input text."""

    code = "parse_error"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
        code: str | None = None,
    ):
        super().__init__(message, details, hint)
        if code is not None:
            self.code = code


class EmptyInputError(PlanParseError):
    """Input was empty or whitespace-only."""

    code = "empty_input"


class NoFormatMatchedError(PlanParseError):
    """Every grammar declined the input."""

    code = "no_format_matched"


class MalformedJSONError(PlanParseError):
    """JSON-shaped text failed to parse even after sanitization.

    Raised and absorbed inside the JSON grammar; it only causes fallthrough
    to the next grammar.
    """

    code = "malformed_json"


class PlanSchemaError(PlanIngestError):
    """An exported phase/task tree does not match the serialization schema."""


class ConfigurationError(PlanIngestError):
    """Invalid configuration value."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ):
        super().__init__(message, details, hint)
        self.config_key = config_key


_ERRORS_BY_CODE: dict[str, type[PlanParseError]] = {
    EmptyInputError.code: EmptyInputError,
    NoFormatMatchedError.code: NoFormatMatchedError,
    MalformedJSONError.code: MalformedJSONError,
}


def error_for_code(code: str | None) -> type[PlanParseError]:
    """Map a failure code to its exception class (PlanParseError if unknown)."""
    if code is None:
        return PlanParseError
    return _ERRORS_BY_CODE.get(code, PlanParseError)
