"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mcp_gemini_cli import __version__
from mcp_gemini_cli.core.config import ServerConfig
from mcp_gemini_cli.core.context import AppContext, create_context
from mcp_gemini_cli.server.routes import router

TITLE = "MCP Gemini CLI"
DESCRIPTION = "HTTP/SSE access to Gemini CLI search and chat"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create production context with real implementations on startup."""
    config = ServerConfig.from_env()
    app.state.context = create_context(allow_fallback=config.allow_npx)
    yield


def create_app(context: AppContext | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        context: Optional AppContext. If None, the lifespan handler creates
                 the production context.

    Returns:
        Configured FastAPI application
    """
    if context is not None:
        app = FastAPI(title=TITLE, description=DESCRIPTION, version=__version__)
        app.state.context = context
    else:
        app = FastAPI(
            title=TITLE,
            description=DESCRIPTION,
            version=__version__,
            lifespan=lifespan,
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


def run(context: AppContext | None = None, config: ServerConfig | None = None) -> None:
    """Serve the application with uvicorn."""
    server_config = config if config is not None else ServerConfig.from_env()
    uvicorn.run(
        create_app(context),
        host=server_config.host,
        port=server_config.port,
        log_level="debug" if server_config.debug else "info",
    )


if __name__ == "__main__":
    run()
