"""Application context for dependency injection."""

from dataclasses import dataclass

from mcp_gemini_cli.core.config import TimeoutConfig
from mcp_gemini_cli.core.errors import CliError
from mcp_gemini_cli.core.service import GeminiService
from mcp_gemini_cli.integrations.cli_executor.fake import FakeCliExecutor
from mcp_gemini_cli.integrations.cli_executor.real import RealCliExecutor
from mcp_gemini_cli.integrations.cli_executor.types import ResolvedCommand, StreamChunk
from mcp_gemini_cli.integrations.cli_resolver.fake import FakeCliResolver
from mcp_gemini_cli.integrations.cli_resolver.real import RealCliResolver
from mcp_gemini_cli.integrations.time.real import RealTime


@dataclass(frozen=True)
class AppContext:
    """Context holding the service and request-independent settings.

    This is a frozen dataclass shared by every adapter. Use create_context()
    for production and for_test() for tests.
    """

    service: GeminiService
    allow_fallback: bool

    @classmethod
    def for_test(
        cls,
        *,
        outputs: list[str | CliError] | None = None,
        stream_chunks: list[StreamChunk] | None = None,
        stream_exit_code: int = 0,
        stream_error: CliError | None = None,
        resolved: ResolvedCommand | None = None,
        allow_fallback: bool = False,
        working_dir_default: str | None = None,
    ) -> "AppContext":
        """Create a test context with fake implementations.

        Args:
            outputs: Queued execute() outcomes for FakeCliExecutor
            stream_chunks: Chunks replayed by streamed handles
            stream_exit_code: Exit code reported by streamed handles
            stream_error: Error raised by stream() instead of returning
            resolved: Command returned by FakeCliResolver
            allow_fallback: Value threaded through to the resolver
            working_dir_default: Working directory default for the service

        Returns:
            AppContext with fake implementations
        """
        executor = FakeCliExecutor(
            outputs=outputs,
            stream_chunks=stream_chunks,
            stream_exit_code=stream_exit_code,
            stream_error=stream_error,
        )
        return cls(
            service=GeminiService(
                executor=executor,
                resolver=FakeCliResolver(resolved=resolved),
                working_dir_default=working_dir_default,
            ),
            allow_fallback=allow_fallback,
        )


def create_context(*, allow_fallback: bool, timeouts: TimeoutConfig | None = None) -> AppContext:
    """Create production context with real implementations."""
    resolved_timeouts = timeouts if timeouts is not None else TimeoutConfig.from_env()
    time = RealTime()
    executor = RealCliExecutor(time=time, default_timeout_ms=resolved_timeouts.default_ms)
    return AppContext(
        service=GeminiService(
            executor=executor,
            resolver=RealCliResolver(time=time),
            timeouts=resolved_timeouts,
        ),
        allow_fallback=allow_fallback,
    )
