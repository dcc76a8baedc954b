"""Exponential-backoff retry loop for buffered CLI executions."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from mcp_gemini_cli.core.errors import (
    CliError,
    RetriesExhaustedError,
    RetryConfig,
    calculate_backoff_delay,
)
from mcp_gemini_cli.integrations.time.abc import Time

T = TypeVar("T")


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    command: str,
    args: Sequence[str],
    config: RetryConfig,
    time: Time,
    logger: logging.Logger,
) -> T:
    """Run ``operation`` until it succeeds or the retry policy gives up.

    Only CliError failures are considered; anything else propagates from the
    attempt that raised it.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        command: Executable, for error context
        args: Full argument vector, for error context
        config: Attempt budget, delays, and retryability predicate
        time: Clock used for the delay between attempts
        logger: Destination for attempt logging

    Returns:
        The first successful result.

    Raises:
        CliError: The original error, when the policy says it is not retryable
        RetriesExhaustedError: After max_attempts retryable failures
    """
    last_error: CliError | None = None

    for attempt in range(config.max_attempts):
        if attempt > 0:
            delay_ms = calculate_backoff_delay(attempt - 1, config)
            logger.info(
                "Retry attempt %d/%d after %dms delay",
                attempt + 1,
                config.max_attempts,
                delay_ms,
            )
            await time.sleep(delay_ms / 1000)

        try:
            return await operation()
        except CliError as err:
            last_error = err

            if not config.is_retryable(err):
                logger.warning("Error is not retryable, failing immediately: %s", err.message)
                raise

            if attempt < config.max_attempts - 1:
                logger.warning("Attempt %d failed: %s. Will retry...", attempt + 1, err.message)
            else:
                logger.error("All %d attempts failed. Giving up.", config.max_attempts)

    assert last_error is not None
    raise RetriesExhaustedError(command, args, config.max_attempts, last_error) from last_error
