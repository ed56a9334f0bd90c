from __future__ import annotations

import typer
from dotenv import find_dotenv, load_dotenv

from plan_ingest import __version__
from plan_ingest.cli.cmds import register_parse
from plan_ingest.cli.output import console, print_cli_error
from plan_ingest.errors import ConfigurationError
from plan_ingest.logging import configure_logging

_TYPER_HELP = """Turn free-form development plans into phases and tasks.

**Quick start:**

* `plan-ingest parse plan.md`: Parse a plan file
* `plan-ingest parse - < reply.txt`: Parse an assistant reply from stdin
* `plan-ingest prompt "A todo app"`: Get a prompt that yields a parseable plan
"""

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=_TYPER_HELP,
    rich_markup_mode="markdown",
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"plan-ingest {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (default: $PLAN_INGEST_LOG_LEVEL or WARNING)",
    ),
    log_format: str | None = typer.Option(
        None,
        "--log-format",
        help="Log format: human or json (default: $PLAN_INGEST_LOG_FORMAT or human)",
    ),
):
    """plan-ingest: parse free-form development plans."""
    load_dotenv(find_dotenv(usecwd=True))
    try:
        configure_logging(level=log_level, format=log_format)
    except ConfigurationError as e:
        print_cli_error(e.message, hint=e.hint)
        raise typer.Exit(2)


register_parse(app)


def main():
    app()


if __name__ == "__main__":
    main()
