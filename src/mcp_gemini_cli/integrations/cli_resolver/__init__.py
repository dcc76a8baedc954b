"""Gemini CLI executable resolution."""

from mcp_gemini_cli.integrations.cli_resolver.abc import CliResolver
from mcp_gemini_cli.integrations.cli_resolver.fake import FakeCliResolver
from mcp_gemini_cli.integrations.cli_resolver.real import CacheEntry, RealCliResolver

__all__ = [
    "CacheEntry",
    "CliResolver",
    "FakeCliResolver",
    "RealCliResolver",
]
