"""Classification of Gemini CLI stderr output.

The CLI writes credential-cache notices to stderr on every run. Those lines
are logged at debug level instead of being escalated as warnings. The
classification affects log severity only, never success or failure.
"""

import re

_TIMESTAMPED_NOTICE = re.compile(r"^\[.*\]\s*(Loaded|Using|Authenticated)")


def is_info_message(text: str) -> bool:
    """Return True if a stderr chunk is a known benign notice."""
    trimmed = text.strip()
    if not trimmed:
        return False
    return (
        trimmed.startswith("Loaded cached credentials")
        or "Using cached credentials" in trimmed
        or _TIMESTAMPED_NOTICE.match(trimmed) is not None
    )
