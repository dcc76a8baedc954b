"""Tests for request models."""

import pytest
from pydantic import ValidationError

from mcp_gemini_cli.core.schemas import TOOL_DEFINITIONS, ChatParameters, SearchParameters


class TestSearchParameters:
    def test_accepts_camel_case_aliases(self) -> None:
        params = SearchParameters.model_validate(
            {"query": "q", "workingDirectory": "/repo", "apiKey": "k", "limit": 2}
        )

        assert params.working_directory == "/repo"
        assert params.api_key == "k"
        assert params.limit == 2

    def test_accepts_field_names(self) -> None:
        params = SearchParameters(query="q", working_directory="/repo")

        assert params.working_directory == "/repo"

    def test_defaults(self) -> None:
        params = SearchParameters(query="q")

        assert params.raw is False
        assert params.sandbox is False
        assert params.yolo is False
        assert params.model is None
        assert params.limit is None

    def test_rejects_empty_query(self) -> None:
        with pytest.raises(ValidationError):
            SearchParameters(query="")

    def test_rejects_non_positive_limit(self) -> None:
        with pytest.raises(ValidationError):
            SearchParameters(query="q", limit=0)


class TestChatParameters:
    def test_requires_prompt(self) -> None:
        with pytest.raises(ValidationError):
            ChatParameters.model_validate({})

    def test_dump_by_alias(self) -> None:
        params = ChatParameters(prompt="hi", api_key="k")

        assert params.model_dump(by_alias=True)["apiKey"] == "k"


def test_tool_definitions_names() -> None:
    assert set(TOOL_DEFINITIONS) == {"googleSearch", "geminiChat"}
    for key, definition in TOOL_DEFINITIONS.items():
        assert definition["name"] == key
        assert definition["description"]
