"""
CLI commands for parsing plan text.

Usage:
    plan-ingest parse plan.md              # Parse a file and show the phase tree
    plan-ingest parse - < reply.txt        # Parse stdin
    plan-ingest parse plan.md --json       # Emit the ParseResult as JSON
    plan-ingest detect reply.txt           # Show structural signals only
    plan-ingest prompt "A todo app"        # Print the plan request prompt
    plan-ingest prompt -t markdown "A todo app"  # Use another prompt template
    plan-ingest prompt --list              # List prompt templates
    plan-ingest formats                    # List supported input formats
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer

from plan_ingest.cli.output import (
    print_cli_error,
    print_formats,
    print_phases,
    print_signals,
    print_templates,
)
from plan_ingest.detect import detect_signals
from plan_ingest.errors import PlanIngestError
from plan_ingest.parser import FORMAT_HINTS, ParserConfig, PlanParser, format_hint
from plan_ingest.prompts import DEFAULT_TEMPLATE_ID, build_plan_prompt, list_templates

app = typer.Typer(help="Parse free-form development plans")


def _read_source(source: str) -> str:
    """Read plan text from a path, or stdin when source is "-"."""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        print_cli_error(f"File not found: {source}", hint="Pass a file path or '-' for stdin")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8", errors="replace")


@app.command("parse")
def parse_cmd(
    source: str = typer.Argument("-", help="Plan file to parse, or '-' for stdin"),
    output_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON",
    ),
    grammar: list[str] | None = typer.Option(
        None,
        "--grammar",
        "-g",
        help="Restrict to these grammars (repeatable): json, markdown, ai-text, bullets",
    ),
):
    """Parse a plan into phases and tasks."""
    text = _read_source(source)

    try:
        overrides = {"grammars": tuple(grammar)} if grammar else {}
        config = ParserConfig.from_env(**overrides)
    except PlanIngestError as e:
        print_cli_error(e.message, hint=e.hint)
        raise typer.Exit(2)

    result = PlanParser(config).parse(text)

    if output_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        if not result.success:
            raise typer.Exit(1)
        return

    if not result.success:
        print_cli_error(result.error or "Parse failed", hint=format_hint())
        raise typer.Exit(1)

    print_phases(result)


@app.command("detect")
def detect_cmd(
    source: str = typer.Argument("-", help="Plan file to inspect, or '-' for stdin"),
    output_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON",
    ),
):
    """Show the structural signals found in plan text."""
    signals = detect_signals(_read_source(source))

    if output_json:
        data = {
            "has_braces": signals.has_braces,
            "has_code_fence": signals.has_code_fence,
            "has_headings": signals.has_headings,
            "has_checkboxes": signals.has_checkboxes,
            "has_phase_prefix": signals.has_phase_prefix,
            "has_numbered_list": signals.has_numbered_list,
            "line_count": signals.line_count,
            "bullet_count": signals.bullet_count,
            "bullet_ratio": signals.bullet_ratio,
            "likely_format": signals.likely_format.value,
        }
        typer.echo(json.dumps(data, indent=2))
        return

    print_signals(signals)


@app.command("prompt")
def prompt_cmd(
    description: str = typer.Argument("", help="Project description to embed"),
    phases: tuple[int, int] = typer.Option((3, 5), "--phases", help="Min and max phases"),
    tasks: tuple[int, int] = typer.Option((3, 6), "--tasks", help="Min and max tasks per phase"),
    template: str = typer.Option(
        DEFAULT_TEMPLATE_ID,
        "--template",
        "-t",
        help="Prompt template id (see --list)",
    ),
    list_only: bool = typer.Option(
        False,
        "--list",
        "-l",
        help="List prompt templates and exit",
    ),
    tag: str | None = typer.Option(
        None,
        "--tag",
        help="With --list, only show templates carrying this tag",
    ),
):
    """Print a prompt that asks an assistant for a build plan."""
    if list_only:
        print_templates(list_templates(tag))
        return

    try:
        prompt = build_plan_prompt(
            description,
            template=template,
            min_phases=phases[0],
            max_phases=phases[1],
            min_tasks=tasks[0],
            max_tasks=tasks[1],
        )
    except PlanIngestError as e:
        print_cli_error(e.message, hint=e.hint)
        raise typer.Exit(2)
    typer.echo(prompt)


@app.command("formats")
def formats_cmd():
    """List supported input formats."""
    print_formats(FORMAT_HINTS)


def register(parent: typer.Typer):
    """Register parse commands with the parent CLI app."""
    parent.command("parse", rich_help_panel="Plans")(parse_cmd)
    parent.command("detect", rich_help_panel="Plans")(detect_cmd)
    parent.command("prompt", rich_help_panel="Plans")(prompt_cmd)
    parent.command("formats", rich_help_panel="Plans")(formats_cmd)
