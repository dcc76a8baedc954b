"""Output helpers for CLI commands.

Answers go to stdout via machine_output; everything meant for a person
(errors, stderr passthrough, previews) goes to stderr.
"""

from typing import NoReturn

import click
from rich.console import Console
from rich.text import Text

from mcp_gemini_cli.core.errors import CliError

_stderr_console = Console(stderr=True, highlight=False)


def machine_output(message: str, *, nl: bool = True) -> None:
    click.echo(message, nl=nl)


def user_output(message: str, *, nl: bool = True) -> None:
    click.echo(message, nl=nl, err=True)


def fail(message: str, detail: str | None = None) -> NoReturn:
    """Print a red error line (and optional dimmed detail) and exit 1."""
    line = Text("Error: ", style="bold red")
    line.append(message, style="red")
    _stderr_console.print(line)
    if detail:
        _stderr_console.print(Text(detail.rstrip(), style="dim"))
    raise SystemExit(1)


def fail_with_cli_error(err: CliError) -> NoReturn:
    fail(err.message, f"Command: {err.command_string}")
