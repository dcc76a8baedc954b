"""Configuration loaded from environment variables.

Every setting has a hard-coded fallback, so an empty environment yields a
working configuration.
"""

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_TIMEOUT_MS = 60_000
DEFAULT_SEARCH_TIMEOUT_MS = 60_000
DEFAULT_CHAT_TIMEOUT_MS = 600_000

WORKING_DIR_ENV_VAR = "GEMINI_CLI_WORKING_DIR"

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip().isdigit():
        return default
    value = int(raw.strip())
    if value <= 0:
        return default
    return value


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() not in ("false", "0", "no", "off")


@dataclass(frozen=True)
class TimeoutConfig:
    """Subprocess deadlines in milliseconds."""

    default_ms: int = DEFAULT_TIMEOUT_MS
    search_ms: int = DEFAULT_SEARCH_TIMEOUT_MS
    chat_ms: int = DEFAULT_CHAT_TIMEOUT_MS

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "TimeoutConfig":
        """Load timeouts, ignoring values that are not positive integers."""
        env = os.environ if environ is None else environ
        return TimeoutConfig(
            default_ms=_positive_int(env, "GEMINI_CLI_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            search_ms=_positive_int(env, "GEMINI_CLI_SEARCH_TIMEOUT_MS", DEFAULT_SEARCH_TIMEOUT_MS),
            chat_ms=_positive_int(env, "GEMINI_CLI_CHAT_TIMEOUT_MS", DEFAULT_CHAT_TIMEOUT_MS),
        )


@dataclass(frozen=True)
class LogConfig:
    """Log verbosity and output format."""

    level: int = logging.INFO
    format: str = "text"
    timestamps: bool = True
    colors: bool = False

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "LogConfig":
        env = os.environ if environ is None else environ
        level_name = env.get("LOG_LEVEL", "info").strip().lower()
        log_format = env.get("LOG_FORMAT", "text").strip().lower()
        return LogConfig(
            level=_LOG_LEVELS.get(level_name, logging.INFO),
            format=log_format if log_format in ("text", "json") else "text",
            timestamps=_flag(env, "LOG_TIMESTAMPS", True),
            colors=_flag(env, "LOG_COLORS", sys.stderr.isatty()),
        )


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration loaded from environment variables."""

    host: str
    port: int
    debug: bool
    allow_npx: bool

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Load configuration from environment variables."""
        env = os.environ if environ is None else environ
        return ServerConfig(
            host=env.get("MCP_GEMINI_HOST", "127.0.0.1"),
            port=_positive_int(env, "MCP_GEMINI_PORT", 8000),
            debug=_flag(env, "MCP_GEMINI_DEBUG", False),
            allow_npx=_flag(env, "MCP_GEMINI_ALLOW_NPX", False),
        )
