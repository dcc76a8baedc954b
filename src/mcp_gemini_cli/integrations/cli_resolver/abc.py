"""Abstract interface for locating the Gemini CLI executable."""

from abc import ABC, abstractmethod

from mcp_gemini_cli.integrations.cli_executor.types import ResolvedCommand


class CliResolver(ABC):
    """Decides which concrete command runs the Gemini CLI.

    Resolution never fails: when the direct executable cannot be found the
    resolver degrades to a package-runner invocation.
    """

    @abstractmethod
    def resolve(self, allow_fallback: bool, use_cache: bool = True) -> ResolvedCommand:
        """Return the command to invoke.

        Args:
            allow_fallback: Whether the caller opted into the package runner
            use_cache: Reuse a fresh cached resolution when one exists

        Returns:
            The direct executable, or the fallback runner invocation
        """
        ...

    @abstractmethod
    def cached(self) -> ResolvedCommand | None:
        """Return the cached resolution if present and not expired."""
        ...

    @abstractmethod
    def invalidate(self) -> None:
        """Drop any cached resolution so the next call probes again."""
        ...
