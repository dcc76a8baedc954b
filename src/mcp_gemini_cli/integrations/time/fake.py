"""Fake Time implementation for testing.

FakeTime is an in-memory clock that tracks sleep() calls without actually
sleeping. Sleeping advances the clock, so code that measures elapsed time
sees a consistent view.
"""

from mcp_gemini_cli.integrations.time.abc import Time


class FakeTime(Time):
    """In-memory fake implementation that tracks calls without sleeping.

    The starting clock value is provided via constructor. advance() exists so
    tests can simulate time passing between calls (e.g. cache expiry).
    """

    def __init__(self, *, start: float = 0.0) -> None:
        """Create FakeTime with empty call tracking.

        Args:
            start: Initial monotonic reading in seconds
        """
        self._now = start
        self._sleep_calls: list[float] = []

    @property
    def sleep_calls(self) -> list[float]:
        """Get the list of sleep() calls that were made.

        Returns list of seconds values passed to sleep().

        This property is for test assertions only.
        """
        return self._sleep_calls

    def monotonic(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        """Move the clock forward without recording a sleep call."""
        self._now += seconds

    async def sleep(self, seconds: float) -> None:
        """Track sleep call and advance the clock without actually sleeping.

        Args:
            seconds: Number of seconds that would have been slept
        """
        self._sleep_calls.append(seconds)
        self._now += seconds
