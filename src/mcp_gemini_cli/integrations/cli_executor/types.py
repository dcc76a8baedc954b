"""Value types shared by the CLI resolver and executor."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from mcp_gemini_cli.core.errors import RetryConfig


@dataclass(frozen=True)
class ResolvedCommand:
    """The concrete executable to invoke, plus arguments that precede caller args.

    Attributes:
        command: Executable name or path (e.g. "gemini" or "npx")
        initial_args: Arguments always passed first (e.g. ("@google/gemini-cli",))
    """

    command: str
    initial_args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.command in self.initial_args:
            raise ValueError(f"initial_args must not repeat the command {self.command!r}")

    def full_args(self, args: Sequence[str]) -> list[str]:
        """Concatenate initial args with caller args."""
        return [*self.initial_args, *args]

    def display(self) -> str:
        return " ".join([self.command, *self.initial_args])


@dataclass(frozen=True)
class ExecutionOptions:
    """Per-call execution options.

    Attributes:
        timeout_ms: Deadline for buffered execution (None: executor default)
        working_directory: Directory to run in (None: resolved fallback chain)
        env: Environment overrides; a None value unsets the variable
        retry: Retry policy (None: executor default)
    """

    timeout_ms: int | None = None
    working_directory: str | None = None
    env: Mapping[str, str | None] | None = None
    retry: RetryConfig | None = None

    def __post_init__(self) -> None:
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be > 0, got {self.timeout_ms}")


@dataclass(frozen=True)
class ExecutionResult:
    """Captured output of a completed subprocess."""

    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float


class StreamChunkKind(str, Enum):
    """Kinds of chunks delivered by a streaming process handle."""

    STDOUT = "stdout"
    STDERR = "stderr"
    CLOSE = "close"
    ERROR = "error"


@dataclass(frozen=True)
class StreamChunk:
    """A piece of streamed subprocess output.

    For CLOSE chunks, content is the exit code as a string.
    """

    kind: StreamChunkKind
    content: str
