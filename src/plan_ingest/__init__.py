"""plan-ingest: turn free-form development plans into phases and tasks.

Accepts whatever an assistant hands back (JSON, fenced or prose-wrapped JSON,
markdown checklists, "Phase 1:" text, plain bullet lists) and returns a typed
Phase/Task tree or a diagnostic.

Example:
    >>> from plan_ingest import smart_parse
    >>> result = smart_parse("### Phase 1: Setup (2-4 hours)\\n- [ ] Init repo\\n- [x] Install deps")
    >>> phase = result.phases[0]
    >>> phase.name, phase.hours, [(t.text, t.done) for t in phase.tasks]
    ('Setup', '2-4 hours', [('Init repo', False), ('Install deps', True)])
"""

__version__ = "0.1.0"

from plan_ingest.detect import StructuralSignals, detect_signals
from plan_ingest.errors import (
    ConfigurationError,
    EmptyInputError,
    MalformedJSONError,
    NoFormatMatchedError,
    PlanIngestError,
    PlanParseError,
    PlanSchemaError,
)
from plan_ingest.grammars import (
    AITextGrammar,
    BulletGrammar,
    Grammar,
    JSONGrammar,
    MarkdownGrammar,
)
from plan_ingest.logging import configure_logging, get_logger
from plan_ingest.models import (
    IdSequence,
    ParseResult,
    Phase,
    PlanFormat,
    PlanProgress,
    Task,
    phases_from_json,
    phases_to_json,
    plan_progress,
    reassign_ids,
)
from plan_ingest.parser import ParserConfig, PlanParser, format_hint, smart_parse
from plan_ingest.patterns import clean_text
from plan_ingest.prompts import (
    PLAN_PROMPT_TEMPLATE,
    PROMPT_TEMPLATES,
    PromptTemplate,
    build_plan_prompt,
    get_template,
    list_templates,
)

__all__ = [
    "__version__",
    # Parsing
    "PlanParser",
    "ParserConfig",
    "smart_parse",
    "format_hint",
    "detect_signals",
    "StructuralSignals",
    "clean_text",
    # Grammars
    "Grammar",
    "JSONGrammar",
    "MarkdownGrammar",
    "AITextGrammar",
    "BulletGrammar",
    # Models
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
    # Prompts
    "PLAN_PROMPT_TEMPLATE",
    "PROMPT_TEMPLATES",
    "PromptTemplate",
    "build_plan_prompt",
    "get_template",
    "list_templates",
    # Errors
    "PlanIngestError",
    "PlanParseError",
    "EmptyInputError",
    "NoFormatMatchedError",
    "MalformedJSONError",
    "PlanSchemaError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
]
