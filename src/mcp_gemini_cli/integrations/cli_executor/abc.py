"""Abstract interface for Gemini CLI process execution."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from mcp_gemini_cli.integrations.cli_executor.types import (
    ExecutionOptions,
    ResolvedCommand,
    StreamChunk,
)


class ProcessHandle(ABC):
    """A live subprocess handed to the caller for streaming.

    The caller owns the handle once it is returned: it must consume the
    output and terminate the process if it stops consuming early.
    """

    command: str
    args: list[str]

    @property
    @abstractmethod
    def pid(self) -> int | None:
        """OS process id, or None when there is no real process."""
        ...

    @property
    @abstractmethod
    def returncode(self) -> int | None:
        """Exit code, or None while the process is still running."""
        ...

    @abstractmethod
    def chunks(self) -> AsyncIterator[StreamChunk]:
        """Yield stdout/stderr chunks as they arrive, then a final CLOSE chunk.

        Chunks of the same stream are yielded in emission order. There is no
        ordering guarantee between a stdout chunk and a stderr chunk.
        """
        ...

    @abstractmethod
    def terminate(self) -> None:
        """Ask the process to stop (SIGTERM). No-op once it has exited."""
        ...

    @abstractmethod
    def kill(self) -> None:
        """Forcibly stop the process (SIGKILL). No-op once it has exited."""
        ...

    @abstractmethod
    async def wait(self) -> int:
        """Wait for the process to exit and return its exit code."""
        ...


class CliExecutor(ABC):
    """Abstract interface for running the Gemini CLI.

    This abstraction enables testing without mock.patch by making CLI
    execution an injectable dependency.
    """

    @abstractmethod
    async def execute(
        self,
        command: ResolvedCommand,
        args: Sequence[str],
        options: ExecutionOptions | None = None,
    ) -> str:
        """Run the CLI to completion and return its stdout.

        The call is bounded by a deadline and retried according to the retry
        policy in effect.

        Args:
            command: Resolved executable and its initial arguments
            args: Caller arguments, appended after the initial arguments
            options: Timeout, working directory, environment, retry policy

        Returns:
            Captured stdout of the successful attempt

        Raises:
            CliTimeoutError: Deadline expired (never retried by default)
            CliExecutionError: Non-retryable non-zero exit
            CliSpawnError: Non-retryable spawn failure
            RetriesExhaustedError: Every attempt failed with a retryable error
        """
        ...

    @abstractmethod
    async def stream(
        self,
        command: ResolvedCommand,
        args: Sequence[str],
        options: ExecutionOptions | None = None,
    ) -> ProcessHandle:
        """Spawn the CLI and hand the live process to the caller.

        No timeout and no retry are applied. ``options.timeout_ms`` and
        ``options.retry`` are ignored.

        Raises:
            CliSpawnError: If the process could not be started
        """
        ...
