"""Options shared by the search and chat commands."""

from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])


def allow_npx_option(fn: F) -> F:
    return click.option(
        "--allow-npx",
        is_flag=True,
        help="Fall back to 'npx @google/gemini-cli' when 'gemini' is not on PATH.",
    )(fn)


def gemini_options(fn: F) -> F:
    """Attach the flags every Gemini CLI invocation accepts."""
    decorators = [
        click.option("--sandbox", "-s", is_flag=True, help="Run gemini-cli in sandbox mode."),
        click.option("--yolo", "-y", is_flag=True, help="Automatically accept all actions."),
        click.option("--model", "-m", default=None, help="Gemini model to use."),
        click.option(
            "--working-directory",
            "-C",
            default=None,
            type=click.Path(file_okay=False),
            help="Directory to run gemini-cli in.",
        ),
        click.option(
            "--api-key",
            default=None,
            help="Gemini API key (default: use the CLI's own login).",
        ),
        click.option(
            "--dry-run",
            is_flag=True,
            help="Print the command that would run and exit.",
        ),
        allow_npx_option,
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn
