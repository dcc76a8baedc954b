"""Request models for Gemini CLI operations.

Field names are snake_case in Python and camelCase on the wire, so the same
models validate HTTP bodies, tool-call arguments, and keyword construction.
"""

from pydantic import BaseModel, ConfigDict, Field


class BaseGeminiParameters(BaseModel):
    """Parameters common to every Gemini CLI operation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sandbox: bool = Field(default=False, description="Run gemini-cli in sandbox mode.")
    yolo: bool = Field(
        default=False,
        description="Automatically accept all actions (aka YOLO mode).",
    )
    model: str | None = Field(
        default=None,
        description='The Gemini model to use, e.g. "gemini-2.5-pro" or "gemini-2.5-flash".',
    )
    working_directory: str | None = Field(
        default=None,
        alias="workingDirectory",
        description="Working directory path for gemini-cli execution (optional).",
    )
    api_key: str | None = Field(
        default=None,
        alias="apiKey",
        description="Gemini API key for authentication (optional).",
    )


class SearchParameters(BaseGeminiParameters):
    """Parameters for a web search."""

    query: str = Field(min_length=1, description="The search query.")
    limit: int | None = Field(
        default=None,
        gt=0,
        description="Maximum number of results to return (optional).",
    )
    raw: bool = Field(
        default=False,
        description="Return raw search results with URLs and snippets (optional).",
    )


class ChatParameters(BaseGeminiParameters):
    """Parameters for a chat prompt."""

    prompt: str = Field(min_length=1, description="The prompt for the chat conversation.")


TOOL_DEFINITIONS: dict[str, dict[str, str]] = {
    "googleSearch": {
        "name": "googleSearch",
        "description": "Performs a Google search using gemini-cli and returns structured results.",
    },
    "geminiChat": {
        "name": "geminiChat",
        "description": "Engages in a chat conversation with gemini-cli.",
    },
}
