"""In-memory fake implementation of CliExecutor for testing."""

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

from mcp_gemini_cli.core.errors import CliError
from mcp_gemini_cli.integrations.cli_executor.abc import CliExecutor, ProcessHandle
from mcp_gemini_cli.integrations.cli_executor.types import (
    ExecutionOptions,
    ResolvedCommand,
    StreamChunk,
    StreamChunkKind,
)


@dataclass(frozen=True)
class ExecuteCall:
    """Record of a single call made to FakeCliExecutor."""

    command: ResolvedCommand
    args: list[str]
    options: ExecutionOptions
    streaming: bool


class FakeProcessHandle(ProcessHandle):
    """ProcessHandle that replays pre-configured chunks."""

    def __init__(
        self,
        *,
        command: str,
        args: list[str],
        chunks: list[StreamChunk],
        exit_code: int = 0,
    ) -> None:
        self.command = command
        self.args = args
        self._chunks = chunks
        self._exit_code = exit_code
        self._returncode: int | None = None
        self._terminated = False
        self._killed = False

    @property
    def terminated(self) -> bool:
        """Whether terminate() was called. For test assertions."""
        return self._terminated

    @property
    def killed(self) -> bool:
        """Whether kill() was called. For test assertions."""
        return self._killed

    @property
    def pid(self) -> int | None:
        return None

    @property
    def returncode(self) -> int | None:
        return self._returncode

    async def chunks(self) -> AsyncIterator[StreamChunk]:
        for chunk in self._chunks:
            if self._terminated or self._killed:
                return
            yield chunk
        self._returncode = self._exit_code
        yield StreamChunk(StreamChunkKind.CLOSE, str(self._exit_code))

    def terminate(self) -> None:
        self._terminated = True

    def kill(self) -> None:
        self._killed = True

    async def wait(self) -> int:
        if self._returncode is None:
            self._returncode = -15 if self._terminated or self._killed else self._exit_code
        return self._returncode


class FakeCliExecutor(CliExecutor):
    """In-memory fake implementation for testing.

    All behavior is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(
        self,
        *,
        outputs: list[str | CliError] | None = None,
        default_output: str = "",
        stream_chunks: list[StreamChunk] | None = None,
        stream_exit_code: int = 0,
        stream_error: CliError | None = None,
    ) -> None:
        """Create FakeCliExecutor with pre-configured behavior.

        Args:
            outputs: Outcomes for successive execute() calls. A string is
                returned as stdout; a CliError is raised.
            default_output: Stdout returned once ``outputs`` is used up
            stream_chunks: Chunks replayed by handles returned from stream()
            stream_exit_code: Exit code reported by streamed handles
            stream_error: If set, stream() raises it instead of returning
        """
        self._outputs = list(outputs) if outputs is not None else []
        self._default_output = default_output
        self._stream_chunks = stream_chunks if stream_chunks is not None else []
        self._stream_exit_code = stream_exit_code
        self._stream_error = stream_error
        self._calls: list[ExecuteCall] = []
        self._handles: list[FakeProcessHandle] = []

    @property
    def calls(self) -> list[ExecuteCall]:
        """Read-only access to recorded calls for test assertions."""
        return self._calls.copy()

    @property
    def handles(self) -> list[FakeProcessHandle]:
        """Handles returned by stream(), in call order."""
        return self._handles.copy()

    async def execute(
        self,
        command: ResolvedCommand,
        args: Sequence[str],
        options: ExecutionOptions | None = None,
    ) -> str:
        opts = options if options is not None else ExecutionOptions()
        self._calls.append(ExecuteCall(command, list(args), opts, streaming=False))

        if not self._outputs:
            return self._default_output
        outcome = self._outputs.pop(0)
        if isinstance(outcome, CliError):
            raise outcome
        return outcome

    async def stream(
        self,
        command: ResolvedCommand,
        args: Sequence[str],
        options: ExecutionOptions | None = None,
    ) -> ProcessHandle:
        opts = options if options is not None else ExecutionOptions()
        self._calls.append(ExecuteCall(command, list(args), opts, streaming=True))

        if self._stream_error is not None:
            raise self._stream_error

        handle = FakeProcessHandle(
            command=command.command,
            args=command.full_args(args),
            chunks=list(self._stream_chunks),
            exit_code=self._stream_exit_code,
        )
        self._handles.append(handle)
        return handle
