"""Tests for informational stderr classification."""

import pytest

from mcp_gemini_cli.core.stderr import is_info_message


@pytest.mark.parametrize(
    "text",
    [
        "Loaded cached credentials",
        "Loaded cached credentials.\n",
        "  Using cached credentials for user@example.com",
        "[2024-01-01] Using token",
        "[12:00:00] Authenticated via OAuth",
    ],
)
def test_informational(text: str) -> None:
    assert is_info_message(text) is True


@pytest.mark.parametrize(
    "text",
    ["Error: boom", "", "   \n", "Using token", "[warn] quota exceeded"],
)
def test_not_informational(text: str) -> None:
    assert is_info_message(text) is False
