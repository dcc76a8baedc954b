"""Tool-calling server exposing googleSearch and geminiChat over stdio."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import Field

from mcp_gemini_cli.core.context import AppContext
from mcp_gemini_cli.core.errors import CliError
from mcp_gemini_cli.core.log import get_logger
from mcp_gemini_cli.core.schemas import TOOL_DEFINITIONS, ChatParameters, SearchParameters

logger = get_logger("mcp-server")

SERVER_NAME = "mcp-gemini-cli"

SandboxArg = Annotated[bool, Field(description="Run gemini-cli in sandbox mode.")]
YoloArg = Annotated[bool, Field(description="Automatically accept all actions (aka YOLO mode).")]
ModelArg = Annotated[str | None, Field(description="The Gemini model to use.")]
WorkingDirectoryArg = Annotated[
    str | None, Field(description="Working directory path for gemini-cli execution (optional).")
]
ApiKeyArg = Annotated[str | None, Field(description="Gemini API key for authentication (optional).")]


def create_mcp_server(context: AppContext) -> FastMCP:
    """Build the tool server bound to ``context``."""
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(
        name=TOOL_DEFINITIONS["googleSearch"]["name"],
        description=TOOL_DEFINITIONS["googleSearch"]["description"],
        annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
    )
    async def google_search(
        query: Annotated[str, Field(min_length=1, description="The search query.")],
        limit: Annotated[
            int | None, Field(gt=0, description="Maximum number of results to return (optional).")
        ] = None,
        raw: Annotated[
            bool, Field(description="Return raw search results with URLs and snippets (optional).")
        ] = False,
        sandbox: SandboxArg = False,
        yolo: YoloArg = False,
        model: ModelArg = None,
        workingDirectory: WorkingDirectoryArg = None,  # noqa: N803
        apiKey: ApiKeyArg = None,  # noqa: N803
    ) -> str:
        params = SearchParameters(
            query=query,
            limit=limit,
            raw=raw,
            sandbox=sandbox,
            yolo=yolo,
            model=model,
            working_directory=workingDirectory,
            api_key=apiKey,
        )
        try:
            return await context.service.search(params, context.allow_fallback)
        except CliError as err:
            logger.error("googleSearch failed: %s", err.message)
            raise ToolError(err.message) from err

    @mcp.tool(
        name=TOOL_DEFINITIONS["geminiChat"]["name"],
        description=TOOL_DEFINITIONS["geminiChat"]["description"],
        annotations=ToolAnnotations(readOnlyHint=False, openWorldHint=True),
    )
    async def gemini_chat(
        prompt: Annotated[
            str, Field(min_length=1, description="The prompt for the chat conversation.")
        ],
        sandbox: SandboxArg = False,
        yolo: YoloArg = False,
        model: ModelArg = None,
        workingDirectory: WorkingDirectoryArg = None,  # noqa: N803
        apiKey: ApiKeyArg = None,  # noqa: N803
    ) -> str:
        params = ChatParameters(
            prompt=prompt,
            sandbox=sandbox,
            yolo=yolo,
            model=model,
            working_directory=workingDirectory,
            api_key=apiKey,
        )
        try:
            return await context.service.chat(params, context.allow_fallback)
        except CliError as err:
            logger.error("geminiChat failed: %s", err.message)
            raise ToolError(err.message) from err

    return mcp


def run_stdio(context: AppContext) -> None:
    """Serve the tools over stdio until the client disconnects."""
    logger.info("Starting %s over stdio", SERVER_NAME)
    create_mcp_server(context).run(transport="stdio")
