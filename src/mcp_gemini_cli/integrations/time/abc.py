"""Time operations abstraction for testing.

This module provides an ABC for clock reads and sleeping so that resolver
cache expiry and retry backoff can be tested deterministically, without
wall-clock sleeps.
"""

from abc import ABC, abstractmethod


class Time(ABC):
    """Abstract time operations for dependency injection."""

    @abstractmethod
    def monotonic(self) -> float:
        """Return a monotonic clock reading in seconds.

        Only differences between two readings are meaningful.
        """
        ...

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Suspend the calling task for the specified number of seconds.

        Args:
            seconds: Number of seconds to sleep
        """
        ...
