"""Plan grammars, one per supported input shape.

GRAMMARS lists them in fallback priority order: the dispatcher tries each in
turn and keeps the first that returns phases.
"""

from plan_ingest.grammars.ai_text import AITextGrammar
from plan_ingest.grammars.base import Grammar, PhaseBuilder
from plan_ingest.grammars.bullets import BulletGrammar
from plan_ingest.grammars.json_grammar import JSONGrammar, extract_json_text, sanitize_json
from plan_ingest.grammars.markdown import MarkdownGrammar, parse_heading

GRAMMARS: dict[str, type[Grammar]] = {
    JSONGrammar.name: JSONGrammar,
    MarkdownGrammar.name: MarkdownGrammar,
    AITextGrammar.name: AITextGrammar,
    BulletGrammar.name: BulletGrammar,
}

__all__ = [
    "GRAMMARS",
    "AITextGrammar",
    "BulletGrammar",
    "Grammar",
    "JSONGrammar",
    "MarkdownGrammar",
    "PhaseBuilder",
    "extract_json_text",
    "parse_heading",
    "sanitize_json",
]
