"""Fake resolver for testing."""

from mcp_gemini_cli.integrations.cli_executor.types import ResolvedCommand
from mcp_gemini_cli.integrations.cli_resolver.abc import CliResolver


class FakeCliResolver(CliResolver):
    """Returns a fixed command and records how it was asked for it.

    All behavior is provided via constructor using keyword arguments.
    """

    def __init__(
        self,
        *,
        resolved: ResolvedCommand | None = None,
    ) -> None:
        self._resolved = resolved if resolved is not None else ResolvedCommand("gemini")
        self._cached: ResolvedCommand | None = None
        self._resolve_calls: list[tuple[bool, bool]] = []
        self._invalidate_calls = 0

    @property
    def resolve_calls(self) -> list[tuple[bool, bool]]:
        """(allow_fallback, use_cache) for each resolve() call."""
        return self._resolve_calls.copy()

    @property
    def invalidate_calls(self) -> int:
        return self._invalidate_calls

    def resolve(self, allow_fallback: bool, use_cache: bool = True) -> ResolvedCommand:
        self._resolve_calls.append((allow_fallback, use_cache))
        self._cached = self._resolved
        return self._resolved

    def cached(self) -> ResolvedCommand | None:
        return self._cached

    def invalidate(self) -> None:
        self._invalidate_calls += 1
        self._cached = None
