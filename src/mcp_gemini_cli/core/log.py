"""Diagnostic logging for mcp-gemini-cli.

Every module logs through a stdlib logger under the ``mcp_gemini_cli``
namespace. configure_logging() installs a single handler on that namespace
that writes either human-readable lines (rich when colors are on) or JSON
lines, always to stderr so stdout stays reserved for the stdio transport.

Structured metadata is passed with ``extra={"metadata": {...}}``. Messages use
%-style arguments so formatting only happens for records that pass the level
filter.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any

from rich.console import Console
from rich.logging import RichHandler

from mcp_gemini_cli.core.config import LogConfig

LOGGER_NAMESPACE = "mcp_gemini_cli"

_HANDLER_NAME = "mcp_gemini_cli.handler"


def get_logger(module_name: str) -> logging.Logger:
    """Return the logger for a module, scoped under the package namespace.

    Use ``logger.getChild("sub")`` for per-component scoping below a module.

    Args:
        module_name: Short module name, e.g. "cli-executor"
    """
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{module_name}")


def module_name_for(record: logging.LogRecord) -> str:
    """Strip the package namespace from a record's logger name."""
    prefix = f"{LOGGER_NAMESPACE}."
    if record.name.startswith(prefix):
        return record.name[len(prefix) :]
    return record.name


def metadata_for(record: logging.LogRecord) -> dict[str, Any] | None:
    metadata = getattr(record, "metadata", None)
    if isinstance(metadata, dict) and metadata:
        return metadata
    return None


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, UTC).isoformat()


class TextFormatter(logging.Formatter):
    """Format records as ``[ts] LEVEL [module] message {metadata}``."""

    def __init__(self, *, timestamps: bool = True) -> None:
        super().__init__()
        self._timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        parts: list[str] = []
        if self._timestamps:
            parts.append(f"[{_timestamp(record)}]")
        parts.append(record.levelname.ljust(7))
        parts.append(f"[{module_name_for(record)}]")
        parts.append(record.getMessage())

        metadata = metadata_for(record)
        if metadata is not None:
            parts.append(json.dumps(metadata, default=str))

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class RichMessageFormatter(logging.Formatter):
    """Message formatter for RichHandler, which renders time and level itself."""

    def format(self, record: logging.LogRecord) -> str:
        message = f"[{module_name_for(record)}] {record.getMessage()}"
        metadata = metadata_for(record)
        if metadata is not None:
            message += " " + json.dumps(metadata, default=str)
        return message


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": record.levelname.lower(),
            "module": module_name_for(record),
            "message": record.getMessage(),
        }

        metadata = metadata_for(record)
        if metadata is not None:
            log_data["metadata"] = metadata

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def _build_handler(config: LogConfig, stream: IO[str]) -> logging.Handler:
    if config.format == "json":
        handler: logging.Handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonFormatter())
    elif config.colors:
        handler = RichHandler(
            console=Console(file=stream),
            show_time=config.timestamps,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(RichMessageFormatter())
    else:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(TextFormatter(timestamps=config.timestamps))
    handler.set_name(_HANDLER_NAME)
    return handler


def configure_logging(config: LogConfig, stream: IO[str] | None = None) -> logging.Logger:
    """Install the package log handler, replacing one installed earlier.

    Args:
        config: Level and output format
        stream: Destination stream (default: sys.stderr at call time)

    Returns:
        The namespace logger
    """
    root = logging.getLogger(LOGGER_NAMESPACE)
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    root.addHandler(_build_handler(config, stream if stream is not None else sys.stderr))
    root.setLevel(config.level)
    return root
