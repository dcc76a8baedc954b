"""Error taxonomy for Gemini CLI invocations.

Every failure of a subprocess invocation is one of four kinds. Each error
carries the command and the full argument vector that failed, so callers can
report an actionable message without re-running the subprocess.

Each error is tagged with a CliErrorKind; the retry policy dispatches on the tag.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

# Exit codes that indicate a permanent failure: timeout(1) wrapper, retry
# sentinel, permission denied, command not found.
PERMANENT_EXIT_CODES: frozenset[int] = frozenset({124, 125, 126, 127})


class CliErrorKind(str, Enum):
    """Closed set of CLI failure kinds."""

    TIMEOUT = "timeout"
    EXECUTION = "execution"
    SPAWN = "spawn"
    RETRIES_EXHAUSTED = "retries_exhausted"


class CliError(Exception):
    """Base exception for all CLI invocation failures.

    Attributes:
        kind: Which member of the taxonomy this error is
        command: Executable that was (or would have been) invoked
        cli_args: Full argument vector, including any initial args
        message: Human-readable description
    """

    kind: CliErrorKind

    def __init__(self, message: str, command: str, args: Sequence[str]) -> None:
        super().__init__(message)
        self.message = message
        self.command = command
        self.cli_args = list(args)

    @property
    def command_string(self) -> str:
        """Space-joined rendering of the failing invocation."""
        return " ".join([self.command, *self.cli_args])


class CliTimeoutError(CliError):
    """The subprocess did not exit before its deadline and was killed."""

    kind = CliErrorKind.TIMEOUT

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        timeout_ms: int,
        elapsed_ms: float | None = None,
    ) -> None:
        super().__init__(
            f"CLI operation timed out after {timeout_ms}ms: {' '.join([command, *args])}",
            command,
            args,
        )
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms if elapsed_ms is not None else float(timeout_ms)


class CliExecutionError(CliError):
    """The subprocess exited with a non-zero exit code."""

    kind = CliErrorKind.EXECUTION

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        exit_code: int,
        stdout: str,
        stderr: str,
    ) -> None:
        super().__init__(f"CLI exited with code {exit_code}: {stderr}", command, args)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class CliSpawnError(CliError):
    """The subprocess could not be started at all."""

    kind = CliErrorKind.SPAWN

    def __init__(self, command: str, args: Sequence[str], cause: BaseException) -> None:
        super().__init__(
            f"Failed to start command {' '.join([command, *args])}: {cause}",
            command,
            args,
        )
        self.cause = cause


class RetriesExhaustedError(CliError):
    """Every allowed attempt failed with a retryable error."""

    kind = CliErrorKind.RETRIES_EXHAUSTED

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        attempts: int,
        last_error: CliError,
    ) -> None:
        super().__init__(
            f"Maximum retry attempts ({attempts}) exceeded for "
            f"{' '.join([command, *args])}: {last_error.message}",
            command,
            args,
        )
        self.attempts = attempts
        self.last_error = last_error


def default_is_retryable(error: CliError) -> bool:
    """Decide whether a failed attempt is worth repeating.

    Timeouts are never retried. Spawn failures are always retried. Non-zero
    exits are retried unless the exit code is in PERMANENT_EXIT_CODES.
    """
    match error.kind:
        case CliErrorKind.TIMEOUT:
            return False
        case CliErrorKind.EXECUTION:
            assert isinstance(error, CliExecutionError)
            return error.exit_code not in PERMANENT_EXIT_CODES
        case CliErrorKind.SPAWN:
            return True
        case CliErrorKind.RETRIES_EXHAUSTED:
            return False


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy for buffered executions.

    Attributes:
        max_attempts: Total attempts including the first one
        initial_delay_ms: Delay before the first retry
        backoff_multiplier: Growth factor applied per retry
        max_delay_ms: Upper bound on any single delay
        is_retryable: Predicate consulted after each failure
    """

    max_attempts: int = 3
    initial_delay_ms: int = 1000
    backoff_multiplier: float = 2.0
    max_delay_ms: int = 30000
    is_retryable: Callable[[CliError], bool] = field(default=default_is_retryable)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.initial_delay_ms <= 0:
            raise ValueError(f"initial_delay_ms must be > 0, got {self.initial_delay_ms}")
        if self.backoff_multiplier < 1:
            raise ValueError(
                f"backoff_multiplier must be >= 1, got {self.backoff_multiplier}"
            )
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError(
                f"max_delay_ms ({self.max_delay_ms}) must be >= "
                f"initial_delay_ms ({self.initial_delay_ms})"
            )


DEFAULT_RETRY_CONFIG = RetryConfig()


def calculate_backoff_delay(attempt: int, config: RetryConfig) -> float:
    """Return the delay in milliseconds before retry number ``attempt + 1``.

    Args:
        attempt: Zero-based retry index (0 for the first retry)
        config: Retry policy supplying the delay parameters

    Returns:
        min(initial_delay_ms * backoff_multiplier ** attempt, max_delay_ms)
    """
    delay = config.initial_delay_ms * config.backoff_multiplier**attempt
    return min(delay, config.max_delay_ms)


def is_cli_error(error: object) -> bool:
    """Check whether an object belongs to the CLI error taxonomy."""
    return isinstance(error, CliError)


def root_cause(error: CliError) -> CliError:
    """Unwrap a RetriesExhaustedError down to the failure that caused it."""
    if error.kind is CliErrorKind.RETRIES_EXHAUSTED:
        assert isinstance(error, RetriesExhaustedError)
        return root_cause(error.last_error)
    return error
