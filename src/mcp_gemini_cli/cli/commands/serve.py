"""Server commands - run the tool-calling server or the HTTP API."""

import dataclasses

import click

from mcp_gemini_cli.cli.commands.options import allow_npx_option
from mcp_gemini_cli.core.config import ServerConfig
from mcp_gemini_cli.core.context import AppContext
from mcp_gemini_cli.server.main import run
from mcp_gemini_cli.server.tool_server import run_stdio


def _with_fallback(ctx: AppContext, allow_npx: bool) -> AppContext:
    if allow_npx and not ctx.allow_fallback:
        return dataclasses.replace(ctx, allow_fallback=True)
    return ctx


@click.command("mcp")
@allow_npx_option
@click.pass_obj
def mcp_cmd(ctx: AppContext, allow_npx: bool) -> None:
    """Serve googleSearch and geminiChat tools over stdio."""
    run_stdio(_with_fallback(ctx, allow_npx))


@click.command("web")
@click.option("--host", default=None, help="Bind address (default: $MCP_GEMINI_HOST or 127.0.0.1).")
@click.option("--port", type=int, default=None, help="Port (default: $MCP_GEMINI_PORT or 8000).")
@allow_npx_option
@click.pass_obj
def web_cmd(ctx: AppContext, host: str | None, port: int | None, allow_npx: bool) -> None:
    """Serve the HTTP/SSE API with uvicorn."""
    config = ServerConfig.from_env()
    config = dataclasses.replace(
        config,
        host=host if host is not None else config.host,
        port=port if port is not None else config.port,
    )
    run(_with_fallback(ctx, allow_npx), config)
