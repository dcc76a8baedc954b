"""HTTP route handlers for search and chat, plus raw command passthrough."""

import json
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import aclosing
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from pydantic import BaseModel, Field

from mcp_gemini_cli import __version__
from mcp_gemini_cli.core.args import parse_command_line
from mcp_gemini_cli.core.context import AppContext
from mcp_gemini_cli.core.errors import CliError
from mcp_gemini_cli.core.log import get_logger
from mcp_gemini_cli.core.schemas import ChatParameters, SearchParameters
from mcp_gemini_cli.integrations.cli_executor.abc import ProcessHandle
from mcp_gemini_cli.integrations.cli_executor.types import StreamChunkKind

logger = get_logger("routes")

router = APIRouter(prefix="/api", tags=["gemini"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


class SearchResponse(BaseModel):
    """Envelope returned by the search endpoint."""

    success: bool
    data: str | None = None
    error: str | None = None
    timestamp: str


class CommandRequest(BaseModel):
    """Body of the raw command endpoint."""

    command: str = Field(min_length=1)


class HealthResponse(BaseModel):
    status: str
    version: str


def _now() -> str:
    return datetime.now(UTC).isoformat()


def get_context(request: Request) -> AppContext:
    """Get AppContext from application state."""
    return request.app.state.context


def sse_message(kind: str, content: str) -> str:
    """Encode one server-sent event carrying a typed payload."""
    payload: dict[str, Any] = {"type": kind, "content": content}
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


async def process_events(
    start: Callable[[], Awaitable[ProcessHandle]],
) -> AsyncGenerator[str]:
    """Translate a streaming process into SSE messages.

    The process is terminated if the consumer goes away before it exits.
    """
    try:
        handle = await start()
    except CliError as err:
        logger.error("Failed to start stream: %s", err.message)
        yield sse_message(StreamChunkKind.ERROR.value, err.message)
        return

    finished = False
    try:
        async with aclosing(handle.chunks()) as chunks:
            async for chunk in chunks:
                yield sse_message(chunk.kind.value, chunk.content)
                if chunk.kind is StreamChunkKind.CLOSE:
                    finished = True
    finally:
        if not finished:
            logger.info("Client went away; terminating %s", handle.command)
            handle.terminate()


def chat_events(context: AppContext, params: ChatParameters) -> AsyncGenerator[str]:
    return process_events(lambda: context.service.chat_stream(params, context.allow_fallback))


def _stream(events: AsyncGenerator[str]) -> StreamingResponse:
    return StreamingResponse(
        events,
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/google-search", response_model=SearchResponse)
async def google_search(request: Request, body: SearchParameters) -> Any:
    """Run a web search through the Gemini CLI."""
    context = get_context(request)
    try:
        result = await context.service.search(body, context.allow_fallback)
    except CliError as err:
        return JSONResponse(
            status_code=500,
            content=SearchResponse(success=False, error=err.message, timestamp=_now()).model_dump(),
        )
    return SearchResponse(success=True, data=result, timestamp=_now())


@router.post("/gemini-chat")
async def gemini_chat(request: Request, body: ChatParameters) -> StreamingResponse:
    """Chat with the Gemini CLI, streaming output via SSE."""
    return _stream(chat_events(get_context(request), body))


@router.get("/gemini-chat")
async def gemini_chat_query(
    request: Request,
    prompt: Annotated[str, Query(min_length=1)],
    sandbox: bool = False,
    yolo: bool = False,
    model: str | None = None,
    working_directory: Annotated[str | None, Query(alias="workingDirectory")] = None,
    api_key: Annotated[str | None, Query(alias="apiKey")] = None,
) -> StreamingResponse:
    """Chat via query parameters, for EventSource clients."""
    params = ChatParameters(
        prompt=prompt,
        sandbox=sandbox,
        yolo=yolo,
        model=model,
        working_directory=working_directory,
        api_key=api_key,
    )
    return _stream(chat_events(get_context(request), params))


@router.post("/gemini-command", response_model=None)
async def gemini_command(request: Request, body: CommandRequest) -> Response:
    """Run a raw ``gemini ...`` command line, streaming output via SSE."""
    try:
        cli_args = parse_command_line(body.command)
    except ValueError as err:
        return JSONResponse(status_code=400, content={"success": False, "error": str(err)})

    context = get_context(request)
    return _stream(
        process_events(lambda: context.service.command_stream(cli_args, context.allow_fallback))
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)
