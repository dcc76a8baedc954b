"""Chat command - send a prompt to the Gemini CLI, optionally streaming."""

import asyncio
from contextlib import aclosing

import click
from pydantic import ValidationError

from mcp_gemini_cli.cli.commands.options import gemini_options
from mcp_gemini_cli.cli.output import fail, fail_with_cli_error, machine_output, user_output
from mcp_gemini_cli.core.args import preview_command
from mcp_gemini_cli.core.context import AppContext
from mcp_gemini_cli.core.errors import CliError
from mcp_gemini_cli.core.schemas import ChatParameters
from mcp_gemini_cli.core.service import GeminiService
from mcp_gemini_cli.core.stderr import is_info_message
from mcp_gemini_cli.integrations.cli_executor.types import StreamChunkKind


async def stream_chat(service: GeminiService, params: ChatParameters, allow_fallback: bool) -> int:
    """Echo a streaming chat as it arrives and return the exit code.

    Informational stderr (credential notices) is suppressed.
    """
    handle = await service.chat_stream(params, allow_fallback)
    exit_code: int | None = None
    try:
        async with aclosing(handle.chunks()) as chunks:
            async for chunk in chunks:
                match chunk.kind:
                    case StreamChunkKind.STDOUT:
                        machine_output(chunk.content, nl=False)
                    case StreamChunkKind.STDERR:
                        if not is_info_message(chunk.content):
                            user_output(chunk.content, nl=False)
                    case StreamChunkKind.CLOSE:
                        exit_code = int(chunk.content)
                    case StreamChunkKind.ERROR:
                        user_output(chunk.content)
    finally:
        if exit_code is None:
            handle.terminate()
    return exit_code if exit_code is not None else 1


@click.command("chat")
@click.argument("prompt")
@click.option("--stream", "stream", is_flag=True, help="Print output as it is produced.")
@gemini_options
@click.pass_obj
def chat_cmd(
    ctx: AppContext,
    prompt: str,
    stream: bool,
    sandbox: bool,
    yolo: bool,
    model: str | None,
    working_directory: str | None,
    api_key: str | None,
    dry_run: bool,
    allow_npx: bool,
) -> None:
    """Send PROMPT to Gemini and print the reply."""
    try:
        params = ChatParameters(
            prompt=prompt,
            sandbox=sandbox,
            yolo=yolo,
            model=model,
            working_directory=working_directory,
            api_key=api_key,
        )
    except ValidationError as err:
        fail(f"Invalid chat request: {err.errors()[0]['msg']}")

    allow_fallback = allow_npx or ctx.allow_fallback
    service = ctx.service

    if dry_run:
        machine_output(preview_command(service.resolve(allow_fallback), service.chat_args(params)))
        return

    if stream:
        try:
            exit_code = asyncio.run(stream_chat(service, params, allow_fallback))
        except CliError as err:
            fail_with_cli_error(err)
        if exit_code != 0:
            fail(f"gemini exited with code {exit_code}")
        return

    try:
        result = asyncio.run(service.chat(params, allow_fallback))
    except CliError as err:
        fail_with_cli_error(err)
    machine_output(result.rstrip("\n"))
