"""Pytest configuration and fixtures."""

import pytest

from mcp_gemini_cli.core.context import AppContext
from mcp_gemini_cli.integrations.cli_executor.fake import FakeCliExecutor
from mcp_gemini_cli.integrations.cli_resolver.fake import FakeCliResolver
from mcp_gemini_cli.integrations.time.fake import FakeTime


@pytest.fixture
def fake_time() -> FakeTime:
    """Create a fresh FakeTime."""
    return FakeTime()


@pytest.fixture
def fake_executor() -> FakeCliExecutor:
    """Create a FakeCliExecutor returning an empty answer."""
    return FakeCliExecutor()


@pytest.fixture
def fake_resolver() -> FakeCliResolver:
    """Create a FakeCliResolver resolving to 'gemini'."""
    return FakeCliResolver()


@pytest.fixture
def app_context() -> AppContext:
    """Create an AppContext with fake implementations."""
    return AppContext.for_test(outputs=["The answer."], working_dir_default="/work")
