"""Gemini CLI process execution."""

from mcp_gemini_cli.integrations.cli_executor.abc import CliExecutor, ProcessHandle
from mcp_gemini_cli.integrations.cli_executor.fake import FakeCliExecutor, FakeProcessHandle
from mcp_gemini_cli.integrations.cli_executor.real import RealCliExecutor, RealProcessHandle
from mcp_gemini_cli.integrations.cli_executor.types import (
    ExecutionOptions,
    ExecutionResult,
    ResolvedCommand,
    StreamChunk,
    StreamChunkKind,
)

__all__ = [
    "CliExecutor",
    "ExecutionOptions",
    "ExecutionResult",
    "FakeCliExecutor",
    "FakeProcessHandle",
    "ProcessHandle",
    "RealCliExecutor",
    "RealProcessHandle",
    "ResolvedCommand",
    "StreamChunk",
    "StreamChunkKind",
]
