"""Argument vectors for the Gemini CLI.

Pure functions mapping request parameters to the CLI's arguments for its two
verbs (web search and chat), post-processing of structured search output, and
parsing of raw ``gemini`` command lines.
"""

import json
import re
import shlex
from collections.abc import Sequence

from mcp_gemini_cli.integrations.cli_executor.types import ResolvedCommand

COMMAND_NAME = "gemini"

_CODE_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*[ \t]*\r?\n")
_CODE_FENCE_CLOSE = re.compile(r"\r?\n?```\s*$")


def _append_common_flags(
    cli_args: list[str],
    *,
    sandbox: bool,
    yolo: bool,
    model: str | None,
) -> list[str]:
    if sandbox:
        cli_args.append("-s")
    if yolo:
        cli_args.append("-y")
    if model:
        cli_args.extend(["-m", model])
    return cli_args


def build_search_prompt(query: str, limit: int | None = None, raw: bool = False) -> str:
    if raw:
        limit_text = f" Limit to {limit} sources." if limit else ""
        return (
            f'Perform a web search for "{query}". Synthesize the findings and provide a '
            "list of sources. Return the entire output as a single, valid JSON object with "
            'the following structure: { "summary": "...", "sources": [{ "url": "...", '
            f'"title": "...", "snippet": "..." }}] }}.{limit_text}'
        )

    prompt = f"Search for: {query}"
    if limit:
        prompt += f" (return up to {limit} results)"
    return prompt


def build_search_args(
    query: str,
    *,
    limit: int | None = None,
    raw: bool = False,
    sandbox: bool = False,
    yolo: bool = False,
    model: str | None = None,
) -> list[str]:
    """Build CLI arguments for a web search.

    Args:
        query: Search query string
        limit: Maximum number of results/sources to ask for
        raw: Ask for a single JSON object with summary and sources
        sandbox: Run the CLI in sandbox mode (-s)
        yolo: Auto-accept all actions (-y)
        model: Model name (-m)

    Returns:
        Argument vector, not including the executable or its initial args
    """
    cli_args = ["-p", build_search_prompt(query, limit=limit, raw=raw)]
    return _append_common_flags(cli_args, sandbox=sandbox, yolo=yolo, model=model)


def build_chat_args(
    prompt: str,
    *,
    sandbox: bool = False,
    yolo: bool = False,
    model: str | None = None,
) -> list[str]:
    """Build CLI arguments for a chat prompt."""
    return _append_common_flags(["-p", prompt], sandbox=sandbox, yolo=yolo, model=model)


def process_raw_search_result(result: str) -> str:
    """Pretty-print structured search output when it is valid JSON.

    The model sometimes wraps its JSON in a markdown code fence; the fence is
    stripped before parsing. If the text does not parse, it is returned
    unchanged. This function never raises.
    """
    candidate = result.strip()
    candidate = _CODE_FENCE_OPEN.sub("", candidate, count=1)
    candidate = _CODE_FENCE_CLOSE.sub("", candidate, count=1).strip()
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError):
        return result
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def preview_command(resolved: ResolvedCommand, args: Sequence[str]) -> str:
    """Render the shell command line that an invocation would run."""
    return shlex.join([resolved.command, *resolved.full_args(args)])


def parse_command_line(command_line: str) -> list[str]:
    """Split a ``gemini ...`` command line into the CLI's arguments.

    The line is split with shell quoting rules but never run through a shell.

    Raises:
        ValueError: If the line does not invoke ``gemini`` with at least one
            argument, or its quoting is unbalanced
    """
    parts = shlex.split(command_line)
    if len(parts) < 2 or parts[0] != COMMAND_NAME:
        raise ValueError(f"Invalid command. Only '{COMMAND_NAME}' commands are allowed.")
    return parts[1:]
