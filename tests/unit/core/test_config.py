"""Tests for environment-driven configuration."""

import logging

from mcp_gemini_cli.core.config import LogConfig, ServerConfig, TimeoutConfig


class TestTimeoutConfig:
    def test_defaults_when_unset(self) -> None:
        config = TimeoutConfig.from_env({})

        assert config == TimeoutConfig(default_ms=60_000, search_ms=60_000, chat_ms=600_000)

    def test_reads_values(self) -> None:
        config = TimeoutConfig.from_env(
            {
                "GEMINI_CLI_TIMEOUT_MS": "1000",
                "GEMINI_CLI_SEARCH_TIMEOUT_MS": "2000",
                "GEMINI_CLI_CHAT_TIMEOUT_MS": "3000",
            }
        )

        assert (config.default_ms, config.search_ms, config.chat_ms) == (1000, 2000, 3000)

    def test_invalid_values_fall_back(self) -> None:
        config = TimeoutConfig.from_env(
            {"GEMINI_CLI_TIMEOUT_MS": "soon", "GEMINI_CLI_SEARCH_TIMEOUT_MS": "0"}
        )

        assert config.default_ms == 60_000
        assert config.search_ms == 60_000


class TestLogConfig:
    def test_level_and_format(self) -> None:
        config = LogConfig.from_env({"LOG_LEVEL": "WARN", "LOG_FORMAT": "json", "LOG_COLORS": "0"})

        assert config.level == logging.WARNING
        assert config.format == "json"
        assert config.colors is False
        assert config.timestamps is True

    def test_unknown_values_fall_back(self) -> None:
        config = LogConfig.from_env({"LOG_LEVEL": "loud", "LOG_FORMAT": "xml"})

        assert config.level == logging.INFO
        assert config.format == "text"

    def test_timestamps_can_be_disabled(self) -> None:
        assert LogConfig.from_env({"LOG_TIMESTAMPS": "false"}).timestamps is False


class TestServerConfig:
    def test_defaults(self) -> None:
        config = ServerConfig.from_env({})

        assert config == ServerConfig(host="127.0.0.1", port=8000, debug=False, allow_npx=False)

    def test_overrides(self) -> None:
        config = ServerConfig.from_env(
            {
                "MCP_GEMINI_HOST": "0.0.0.0",
                "MCP_GEMINI_PORT": "9000",
                "MCP_GEMINI_DEBUG": "1",
                "MCP_GEMINI_ALLOW_NPX": "true",
            }
        )

        assert config == ServerConfig(host="0.0.0.0", port=9000, debug=True, allow_npx=True)
