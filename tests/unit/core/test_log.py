"""Tests for log formatting and handler installation."""

import io
import json
import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from mcp_gemini_cli.core.config import LogConfig
from mcp_gemini_cli.core.log import (
    LOGGER_NAMESPACE,
    JsonFormatter,
    TextFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_namespace_logger() -> Iterator[None]:
    root = logging.getLogger(LOGGER_NAMESPACE)
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str, *args: object, metadata: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord(
        name=f"{LOGGER_NAMESPACE}.cli-executor",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    if metadata is not None:
        record.metadata = metadata
    return record


def test_get_logger_is_namespaced() -> None:
    logger = get_logger("cli-executor")

    assert logger.name == "mcp_gemini_cli.cli-executor"
    assert logger.getChild("stream").name == "mcp_gemini_cli.cli-executor.stream"


class TestTextFormatter:
    def test_line_shape_without_timestamp(self) -> None:
        line = TextFormatter(timestamps=False).format(_record("exit %d", 3))

        assert line == "WARNING [cli-executor] exit 3"

    def test_metadata_is_appended_as_json(self) -> None:
        line = TextFormatter(timestamps=False).format(_record("spawn", metadata={"pid": 7}))

        assert line.endswith('spawn {"pid": 7}')

    def test_timestamp_prefix(self) -> None:
        line = TextFormatter(timestamps=True).format(_record("hi"))

        assert line.startswith("[")
        assert "] WARNING [cli-executor] hi" in line


class TestJsonFormatter:
    def test_fields(self) -> None:
        payload = json.loads(JsonFormatter().format(_record("exit %d", 1, metadata={"a": 1})))

        assert payload["level"] == "warning"
        assert payload["module"] == "cli-executor"
        assert payload["message"] == "exit 1"
        assert payload["metadata"] == {"a": 1}
        assert "timestamp" in payload

    def test_metadata_omitted_when_absent(self) -> None:
        payload = json.loads(JsonFormatter().format(_record("plain")))

        assert "metadata" not in payload


@pytest.mark.usefixtures("restore_namespace_logger")
class TestConfigureLogging:
    def test_writes_filtered_text_lines(self) -> None:
        stream = io.StringIO()
        configure_logging(
            LogConfig(level=logging.WARNING, timestamps=False, colors=False), stream=stream
        )
        logger = get_logger("resolver")

        logger.info("hidden")
        logger.warning("shown %s", "here")

        assert stream.getvalue() == "WARNING [resolver] shown here\n"

    def test_json_format(self) -> None:
        stream = io.StringIO()
        configure_logging(LogConfig(level=logging.DEBUG, format="json"), stream=stream)

        get_logger("service").debug("probe", extra={"metadata": {"n": 2}})

        payload = json.loads(stream.getvalue().strip())
        assert payload["module"] == "service"
        assert payload["metadata"] == {"n": 2}

    def test_repeat_calls_keep_one_handler(self) -> None:
        configure_logging(LogConfig(), stream=io.StringIO())
        root = configure_logging(LogConfig(), stream=io.StringIO())

        installed = [h for h in root.handlers if h.get_name() == "mcp_gemini_cli.handler"]
        assert len(installed) == 1

    def test_colors_use_rich_handler(self) -> None:
        root = configure_logging(LogConfig(colors=True), stream=io.StringIO())

        assert any(isinstance(handler, RichHandler) for handler in root.handlers)
