"""Rich console output for the plan-ingest CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from plan_ingest.detect import StructuralSignals
from plan_ingest.models import ParseResult, PlanFormat
from plan_ingest.prompts import PromptTemplate

console = Console()
err_console = Console(stderr=True)

__all__ = [
    "console",
    "err_console",
    "print_cli_error",
    "print_formats",
    "print_phases",
    "print_signals",
    "print_templates",
]


def print_cli_error(message: str, hint: str | None = None) -> None:
    """Print an error (and optional hint) to stderr."""
    err_console.print(f"[red]✗[/red] [bold]{escape(message)}[/bold]")
    if hint:
        err_console.print(f"  [dim]{escape(hint)}[/dim]")


def _progress_bar(percent: float, width: int = 20) -> str:
    filled = round(percent / 100 * width)
    return "█" * filled + "░" * (width - filled)


def print_phases(result: ParseResult) -> None:
    """Render parsed phases as a tree with per-phase progress."""
    progress = result.progress
    root = Tree(
        f"[bold]Plan[/bold] [dim]({result.format.value}, "
        f"{progress.completed}/{progress.total} tasks, {progress.percent}%)[/dim]"
    )
    for phase in result.phases:
        label = f"[bold #6366f1]{escape(phase.name)}[/bold #6366f1]"
        if phase.hours:
            label += f" [dim]({escape(phase.hours)})[/dim]"
        label += f"  [dim]{_progress_bar(phase.progress)} {phase.completed_count}/{phase.total_count}[/dim]"
        branch = root.add(label)
        for task in phase.tasks:
            mark = "[green]✓[/green]" if task.done else "[dim]○[/dim]"
            branch.add(f"{mark} {escape(task.text)}")
    console.print(root)


def print_signals(signals: StructuralSignals) -> None:
    """Render structural signals as a two-column table."""
    table = Table(title="Structural signals", show_header=True, header_style="bold")
    table.add_column("Signal")
    table.add_column("Value")

    rows = [
        ("braces", signals.has_braces),
        ("code fence", signals.has_code_fence),
        ("headings", signals.has_headings),
        ("checkboxes", signals.has_checkboxes),
        ("phase prefix", signals.has_phase_prefix),
        ("numbered list", signals.has_numbered_list),
        ("lines", signals.line_count),
        ("bullet lines", signals.bullet_count),
        ("bullet ratio", f"{signals.bullet_ratio:.2f}"),
    ]
    for name, value in rows:
        if isinstance(value, bool):
            value = "[green]yes[/green]" if value else "[dim]no[/dim]"
        table.add_row(name, str(value))

    console.print(table)
    console.print(f"Likely format: [bold]{signals.likely_format.value}[/bold]")


def print_formats(hints: dict[PlanFormat, str]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Format")
    table.add_column("How to paste")
    for fmt, hint in hints.items():
        table.add_row(fmt.value, hint)
    console.print(table)


def print_templates(templates: list[PromptTemplate]) -> None:
    """Render prompt templates as an id/name/tags/description table."""
    if not templates:
        console.print("[dim]No templates match[/dim]")
        return

    table = Table(title="Prompt templates", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Tags", style="dim")
    table.add_column("Description")
    for template in templates:
        table.add_row(template.id, template.name, ", ".join(template.tags), template.description)
    console.print(table)
