"""Integration tests for FastAPI routes."""

import json
from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from mcp_gemini_cli import __version__
from mcp_gemini_cli.core.context import AppContext
from mcp_gemini_cli.core.errors import CliExecutionError, CliSpawnError
from mcp_gemini_cli.core.schemas import ChatParameters
from mcp_gemini_cli.integrations.cli_executor.fake import FakeCliExecutor
from mcp_gemini_cli.integrations.cli_executor.types import StreamChunk, StreamChunkKind
from mcp_gemini_cli.server.main import create_app
from mcp_gemini_cli.server.routes import chat_events


def _events(body: str) -> list[dict[str, str]]:
    """Parse an SSE body into its JSON payloads."""
    return [
        json.loads(block.removeprefix("data: "))
        for block in body.split("\n\n")
        if block.startswith("data: ")
    ]


async def _client(context: AppContext) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=create_app(context=context))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestSearchRoute:
    """Tests for POST /api/google-search."""

    @pytest.fixture
    def context(self) -> AppContext:
        return AppContext.for_test(outputs=["Top results"], allow_fallback=True)

    @pytest.fixture
    async def client(self, context: AppContext) -> AsyncIterator[AsyncClient]:
        async for client in _client(context):
            yield client

    async def test_success_envelope(self, client: AsyncClient, context: AppContext) -> None:
        """A successful search returns data and a timestamp."""
        response = await client.post(
            "/api/google-search",
            json={"query": "fastapi", "limit": 2, "workingDirectory": "/repo"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"] == "Top results"
        assert data["error"] is None
        assert data["timestamp"]

        executor = context.service.executor
        assert isinstance(executor, FakeCliExecutor)
        assert executor.calls[0].options.working_directory == "/repo"

    async def test_validation_error(self, client: AsyncClient) -> None:
        """An empty query is rejected before any process runs."""
        response = await client.post("/api/google-search", json={"query": ""})

        assert response.status_code == 422

    async def test_cli_failure_returns_500_envelope(self) -> None:
        """Engine errors become a failure envelope."""
        error = CliExecutionError("gemini", ["-p", "x"], 1, "", "quota exceeded")
        context = AppContext.for_test(outputs=[error])

        async for client in _client(context):
            response = await client.post("/api/google-search", json={"query": "x"})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "CLI exited with code 1: quota exceeded"
        assert data["timestamp"]


class TestChatRoutes:
    """Tests for the SSE chat endpoints."""

    CHUNKS = [
        StreamChunk(StreamChunkKind.STDERR, "Loaded cached credentials."),
        StreamChunk(StreamChunkKind.STDOUT, "Hello"),
        StreamChunk(StreamChunkKind.STDOUT, ", world\n"),
    ]

    @pytest.fixture
    def context(self) -> AppContext:
        return AppContext.for_test(stream_chunks=self.CHUNKS)

    @pytest.fixture
    async def client(self, context: AppContext) -> AsyncIterator[AsyncClient]:
        async for client in _client(context):
            yield client

    async def test_post_streams_chunks(self, client: AsyncClient) -> None:
        """POST /api/gemini-chat streams every chunk and a close event."""
        response = await client.post("/api/gemini-chat", json={"prompt": "hi"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert _events(response.text) == [
            {"type": "stderr", "content": "Loaded cached credentials."},
            {"type": "stdout", "content": "Hello"},
            {"type": "stdout", "content": ", world\n"},
            {"type": "close", "content": "0"},
        ]

    async def test_get_streams_with_query_params(
        self, client: AsyncClient, context: AppContext
    ) -> None:
        """GET /api/gemini-chat accepts camelCase query parameters."""
        response = await client.get(
            "/api/gemini-chat",
            params={"prompt": "hi", "model": "flash", "workingDirectory": "/repo"},
        )

        assert response.status_code == 200
        assert _events(response.text)[-1] == {"type": "close", "content": "0"}
        executor = context.service.executor
        assert isinstance(executor, FakeCliExecutor)
        call = executor.calls[0]
        assert call.args == ["-p", "hi", "-m", "flash"]
        assert call.options.working_directory == "/repo"
        assert call.streaming is True

    async def test_get_requires_prompt(self, client: AsyncClient) -> None:
        response = await client.get("/api/gemini-chat")

        assert response.status_code == 422

    async def test_spawn_failure_is_an_error_event(self) -> None:
        """A process that cannot start yields a single error event."""
        error = CliSpawnError("gemini", ["-p", "hi"], FileNotFoundError("gemini"))
        context = AppContext.for_test(stream_error=error)

        async for client in _client(context):
            response = await client.post("/api/gemini-chat", json={"prompt": "hi"})

        events = _events(response.text)
        assert len(events) == 1
        assert events[0]["type"] == "error"
        assert events[0]["content"].startswith("Failed to start command gemini")

    async def test_client_leaving_early_terminates_process(self, context: AppContext) -> None:
        events = chat_events(context, ChatParameters(prompt="hi"))

        first = await anext(events)
        await events.aclose()

        assert json.loads(first.removeprefix("data: "))["content"] == "Loaded cached credentials."
        executor = context.service.executor
        assert isinstance(executor, FakeCliExecutor)
        assert executor.handles[0].terminated is True

    async def test_finished_stream_is_not_terminated(self, context: AppContext) -> None:
        events = chat_events(context, ChatParameters(prompt="hi"))

        messages = [message async for message in events]

        assert len(messages) == 4
        executor = context.service.executor
        assert isinstance(executor, FakeCliExecutor)
        assert executor.handles[0].terminated is False


class TestCommandRoute:
    """Tests for POST /api/gemini-command."""

    async def test_streams_raw_command(self) -> None:
        chunks = [StreamChunk(StreamChunkKind.STDOUT, "0.1.0\n")]
        context = AppContext.for_test(stream_chunks=chunks, working_dir_default="/work")

        async for client in _client(context):
            response = await client.post(
                "/api/gemini-command", json={"command": 'gemini -p "two words"'}
            )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert _events(response.text) == [
            {"type": "stdout", "content": "0.1.0\n"},
            {"type": "close", "content": "0"},
        ]
        executor = context.service.executor
        assert isinstance(executor, FakeCliExecutor)
        assert executor.calls[0].args == ["-p", "two words"]
        assert executor.calls[0].options.working_directory == "/work"

    @pytest.mark.parametrize("command", ["ls -la", "gemini", 'gemini -p "open'])
    async def test_rejects_invalid_command(self, command: str) -> None:
        context = AppContext.for_test()

        async for client in _client(context):
            response = await client.post("/api/gemini-command", json={"command": command})

        assert response.status_code == 400
        assert response.json()["success"] is False
        executor = context.service.executor
        assert isinstance(executor, FakeCliExecutor)
        assert executor.calls == []

    async def test_empty_command_is_a_validation_error(self) -> None:
        async for client in _client(AppContext.for_test()):
            response = await client.post("/api/gemini-command", json={"command": ""})

        assert response.status_code == 422


async def test_health() -> None:
    async for client in _client(AppContext.for_test()):
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}
