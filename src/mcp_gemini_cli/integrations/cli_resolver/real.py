"""Real resolver probing PATH for the Gemini CLI."""

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from mcp_gemini_cli.core.log import get_logger
from mcp_gemini_cli.integrations.cli_executor.types import ResolvedCommand
from mcp_gemini_cli.integrations.cli_resolver.abc import CliResolver
from mcp_gemini_cli.integrations.time.abc import Time
from mcp_gemini_cli.integrations.time.real import RealTime

logger = get_logger("gemini-cli-resolver")

DEFAULT_EXECUTABLE = "gemini"
DEFAULT_FALLBACK = ResolvedCommand("npx", ("@google/gemini-cli",))
DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    """A resolution and the monotonic time it was made."""

    resolved: ResolvedCommand
    resolved_at: float


class RealCliResolver(CliResolver):
    """Production resolver with a time-boxed cache.

    The cache is a single entry replaced as a whole. Concurrent cold-cache
    calls may each probe; the last writer wins.
    """

    def __init__(
        self,
        *,
        time: Time | None = None,
        probe: Callable[[str], str | None] = shutil.which,
        executable: str = DEFAULT_EXECUTABLE,
        fallback: ResolvedCommand = DEFAULT_FALLBACK,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
    ) -> None:
        """Create resolver.

        Args:
            time: Clock used for cache expiry
            probe: PATH lookup returning the executable's path or None
            executable: Name of the direct executable
            fallback: Command used when the executable is not found
            ttl_seconds: How long a resolution stays fresh
        """
        self._time = time if time is not None else RealTime()
        self._probe = probe
        self._executable = executable
        self._fallback = fallback
        self._ttl_seconds = ttl_seconds
        self._entry: CacheEntry | None = None

    def resolve(self, allow_fallback: bool, use_cache: bool = True) -> ResolvedCommand:
        if use_cache and self._entry is not None:
            age = self._time.monotonic() - self._entry.resolved_at
            if age < self._ttl_seconds:
                logger.debug(
                    "Using cached CLI command (age: %ds): %s",
                    round(age),
                    self._entry.resolved.command,
                )
                return self._entry.resolved
            logger.debug("Cache expired, re-resolving CLI command")

        resolved = self._probe_once(allow_fallback)
        self._entry = CacheEntry(resolved=resolved, resolved_at=self._time.monotonic())
        logger.debug("CLI command resolved and cached")
        return resolved

    def _probe_once(self, allow_fallback: bool) -> ResolvedCommand:
        logger.info("Attempting to find '%s' executable...", self._executable)
        try:
            location = self._probe(self._executable)
        except Exception as err:
            logger.error("Error probing for '%s': %s", self._executable, err)
            location = None

        if location:
            logger.info("'%s' found at: %s", self._executable, location)
            return ResolvedCommand(self._executable)

        if not allow_fallback:
            logger.warning(
                "'%s' not found in PATH and fallback was not requested; using '%s' anyway",
                self._executable,
                self._fallback.display(),
            )
        else:
            logger.info(
                "Falling back to '%s' as '%s' was not found in PATH",
                self._fallback.display(),
                self._executable,
            )
        return self._fallback

    def cached(self) -> ResolvedCommand | None:
        if self._entry is None:
            return None
        if self._time.monotonic() - self._entry.resolved_at >= self._ttl_seconds:
            return None
        return self._entry.resolved

    def invalidate(self) -> None:
        logger.debug("Clearing CLI command cache")
        self._entry = None
