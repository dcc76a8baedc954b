"""Real time implementation using the event loop and time.monotonic()."""

import asyncio
import time

from mcp_gemini_cli.integrations.time.abc import Time


class RealTime(Time):
    """Production implementation using actual clocks and asyncio.sleep()."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        """Sleep for specified number of seconds using asyncio.sleep().

        Args:
            seconds: Number of seconds to sleep
        """
        await asyncio.sleep(seconds)
