import click

from mcp_gemini_cli.cli.commands.chat import chat_cmd
from mcp_gemini_cli.cli.commands.search import search_cmd
from mcp_gemini_cli.cli.commands.serve import mcp_cmd, web_cmd
from mcp_gemini_cli.core.config import LogConfig, ServerConfig
from mcp_gemini_cli.core.context import create_context
from mcp_gemini_cli.core.log import configure_logging

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="mcp-gemini-cli")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Expose the Gemini CLI as tools, an HTTP API, or direct commands."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        configure_logging(LogConfig.from_env())
        ctx.obj = create_context(allow_fallback=ServerConfig.from_env().allow_npx)


cli.add_command(mcp_cmd)
cli.add_command(web_cmd)
cli.add_command(search_cmd)
cli.add_command(chat_cmd)


def main() -> None:
    """CLI entry point used by the `mcp-gemini-cli` console script."""
    cli()
