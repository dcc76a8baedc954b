"""Tests for FakeCliExecutor and FakeProcessHandle."""

import pytest

from mcp_gemini_cli.core.errors import CliTimeoutError
from mcp_gemini_cli.integrations.cli_executor.fake import FakeCliExecutor
from mcp_gemini_cli.integrations.cli_executor.types import (
    ExecutionOptions,
    ResolvedCommand,
    StreamChunk,
    StreamChunkKind,
)

GEMINI = ResolvedCommand("gemini")


class TestFakeCliExecutor:
    async def test_returns_queued_outputs_then_default(self) -> None:
        executor = FakeCliExecutor(outputs=["one", "two"], default_output="rest")

        results = [await executor.execute(GEMINI, ["-p", "x"]) for _ in range(3)]

        assert results == ["one", "two", "rest"]

    async def test_raises_queued_errors(self) -> None:
        error = CliTimeoutError("gemini", ["-p", "x"], 10)
        executor = FakeCliExecutor(outputs=[error, "after"])

        with pytest.raises(CliTimeoutError):
            await executor.execute(GEMINI, ["-p", "x"])
        assert await executor.execute(GEMINI, ["-p", "x"]) == "after"

    async def test_records_calls(self) -> None:
        executor = FakeCliExecutor()
        options = ExecutionOptions(timeout_ms=50, working_directory="/repo")

        await executor.execute(GEMINI, ["-p", "x"], options)
        await executor.stream(GEMINI, ["-p", "y"])

        assert [call.args for call in executor.calls] == [["-p", "x"], ["-p", "y"]]
        assert executor.calls[0].options is options
        assert executor.calls[1].streaming is True


class TestFakeProcessHandle:
    async def test_replays_chunks_then_close(self) -> None:
        chunks = [
            StreamChunk(StreamChunkKind.STDOUT, "a"),
            StreamChunk(StreamChunkKind.STDERR, "warn"),
        ]
        executor = FakeCliExecutor(stream_chunks=chunks, stream_exit_code=3)

        handle = await executor.stream(GEMINI, ["-p", "x"])
        received = [chunk async for chunk in handle.chunks()]

        assert received == [*chunks, StreamChunk(StreamChunkKind.CLOSE, "3")]
        assert handle.returncode == 3
        assert await handle.wait() == 3

    async def test_terminate_stops_replay(self) -> None:
        chunks = [StreamChunk(StreamChunkKind.STDOUT, str(i)) for i in range(5)]
        executor = FakeCliExecutor(stream_chunks=chunks)
        handle = await executor.stream(GEMINI, [])

        received = []
        async for chunk in handle.chunks():
            received.append(chunk)
            if len(received) == 2:
                handle.terminate()

        assert len(received) == 2
        assert executor.handles[0].terminated is True
        assert handle.returncode is None

    async def test_full_args_include_initial_args(self) -> None:
        executor = FakeCliExecutor()

        handle = await executor.stream(ResolvedCommand("npx", ("@google/gemini-cli",)), ["-p", "x"])

        assert handle.command == "npx"
        assert handle.args == ["@google/gemini-cli", "-p", "x"]
