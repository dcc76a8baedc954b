from mcp_gemini_cli.integrations.time.abc import Time
from mcp_gemini_cli.integrations.time.fake import FakeTime
from mcp_gemini_cli.integrations.time.real import RealTime

__all__ = [
    "FakeTime",
    "RealTime",
    "Time",
]
