"""High-level Gemini operations built on the resolver and executor."""

import os
from collections.abc import Sequence

from mcp_gemini_cli.core.args import build_chat_args, build_search_args, process_raw_search_result
from mcp_gemini_cli.core.config import WORKING_DIR_ENV_VAR, TimeoutConfig
from mcp_gemini_cli.core.env import env_from_tool_args, resolve_working_directory
from mcp_gemini_cli.core.errors import CliError, CliErrorKind, root_cause
from mcp_gemini_cli.core.log import get_logger
from mcp_gemini_cli.core.schemas import BaseGeminiParameters, ChatParameters, SearchParameters
from mcp_gemini_cli.integrations.cli_executor.abc import CliExecutor, ProcessHandle
from mcp_gemini_cli.integrations.cli_executor.types import ExecutionOptions, ResolvedCommand
from mcp_gemini_cli.integrations.cli_resolver.abc import CliResolver

logger = get_logger("gemini-service")


class GeminiService:
    """Entry point for search, chat, and streaming chat.

    Each call resolves the executable, builds arguments and options from the
    request, and delegates to the executor. A spawn failure invalidates the
    resolver's cache so the next call probes again.
    """

    def __init__(
        self,
        *,
        executor: CliExecutor,
        resolver: CliResolver,
        timeouts: TimeoutConfig | None = None,
        working_dir_default: str | None = None,
    ) -> None:
        self._executor = executor
        self._resolver = resolver
        self._timeouts = timeouts if timeouts is not None else TimeoutConfig()
        self._working_dir_default = (
            working_dir_default
            if working_dir_default is not None
            else os.environ.get(WORKING_DIR_ENV_VAR)
        )

    @property
    def executor(self) -> CliExecutor:
        return self._executor

    @property
    def resolver(self) -> CliResolver:
        return self._resolver

    def _options(
        self, params: BaseGeminiParameters, timeout_ms: int | None
    ) -> ExecutionOptions:
        return ExecutionOptions(
            timeout_ms=timeout_ms,
            working_directory=resolve_working_directory(
                params.working_directory, self._working_dir_default
            ),
            env=env_from_tool_args(api_key=params.api_key),
        )

    def _forget_missing_executable(self, err: CliError) -> None:
        if root_cause(err).kind is CliErrorKind.SPAWN:
            logger.warning("Spawn failed for %s; clearing resolver cache", err.command)
            self._resolver.invalidate()

    def search_args(self, params: SearchParameters) -> list[str]:
        return build_search_args(
            params.query,
            limit=params.limit,
            raw=params.raw,
            sandbox=params.sandbox,
            yolo=params.yolo,
            model=params.model,
        )

    def chat_args(self, params: ChatParameters) -> list[str]:
        return build_chat_args(
            params.prompt,
            sandbox=params.sandbox,
            yolo=params.yolo,
            model=params.model,
        )

    def resolve(self, allow_fallback: bool = False) -> ResolvedCommand:
        return self._resolver.resolve(allow_fallback)

    async def search(self, params: SearchParameters, allow_fallback: bool = False) -> str:
        """Run a web search and return the CLI's answer.

        When ``params.raw`` is set the answer is pretty-printed if it is JSON.
        """
        command = self.resolve(allow_fallback)
        try:
            result = await self._executor.execute(
                command,
                self.search_args(params),
                self._options(params, self._timeouts.search_ms),
            )
        except CliError as err:
            self._forget_missing_executable(err)
            raise

        if params.raw:
            return process_raw_search_result(result)
        return result

    async def chat(self, params: ChatParameters, allow_fallback: bool = False) -> str:
        command = self.resolve(allow_fallback)
        try:
            return await self._executor.execute(
                command,
                self.chat_args(params),
                self._options(params, self._timeouts.chat_ms),
            )
        except CliError as err:
            self._forget_missing_executable(err)
            raise

    async def chat_stream(
        self, params: ChatParameters, allow_fallback: bool = False
    ) -> ProcessHandle:
        """Start a chat and return the live process.

        The caller must consume the handle and terminate it if it stops early.
        """
        command = self.resolve(allow_fallback)
        try:
            return await self._executor.stream(
                command,
                self.chat_args(params),
                self._options(params, None),
            )
        except CliError as err:
            self._forget_missing_executable(err)
            raise

    async def command_stream(
        self, cli_args: Sequence[str], allow_fallback: bool = False
    ) -> ProcessHandle:
        """Start the CLI with caller-supplied arguments and return the live process."""
        command = self.resolve(allow_fallback)
        options = ExecutionOptions(
            working_directory=resolve_working_directory(None, self._working_dir_default),
        )
        try:
            return await self._executor.stream(command, list(cli_args), options)
        except CliError as err:
            self._forget_missing_executable(err)
            raise
