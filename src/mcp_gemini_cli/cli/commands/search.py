"""Search command - run a web search through the Gemini CLI."""

import asyncio

import click
from pydantic import ValidationError

from mcp_gemini_cli.cli.commands.options import gemini_options
from mcp_gemini_cli.cli.output import fail, fail_with_cli_error, machine_output
from mcp_gemini_cli.core.args import preview_command
from mcp_gemini_cli.core.context import AppContext
from mcp_gemini_cli.core.errors import CliError
from mcp_gemini_cli.core.schemas import SearchParameters


@click.command("search")
@click.argument("query")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Maximum results.")
@click.option("--raw", is_flag=True, help="Ask for a JSON object with summary and sources.")
@gemini_options
@click.pass_obj
def search_cmd(
    ctx: AppContext,
    query: str,
    limit: int | None,
    raw: bool,
    sandbox: bool,
    yolo: bool,
    model: str | None,
    working_directory: str | None,
    api_key: str | None,
    dry_run: bool,
    allow_npx: bool,
) -> None:
    """Search the web for QUERY and print the answer."""
    try:
        params = SearchParameters(
            query=query,
            limit=limit,
            raw=raw,
            sandbox=sandbox,
            yolo=yolo,
            model=model,
            working_directory=working_directory,
            api_key=api_key,
        )
    except ValidationError as err:
        fail(f"Invalid search request: {err.errors()[0]['msg']}")

    allow_fallback = allow_npx or ctx.allow_fallback
    service = ctx.service

    if dry_run:
        machine_output(preview_command(service.resolve(allow_fallback), service.search_args(params)))
        return

    try:
        result = asyncio.run(service.search(params, allow_fallback))
    except CliError as err:
        fail_with_cli_error(err)
    machine_output(result.rstrip("\n"))
