"""Real Gemini CLI executor using asyncio subprocesses."""

import asyncio
import codecs
import contextlib
import logging
import os
import signal
from collections.abc import AsyncIterator, Sequence

from mcp_gemini_cli.core.env import mask_sensitive_data, prepare_env, resolve_working_directory
from mcp_gemini_cli.core.errors import (
    DEFAULT_RETRY_CONFIG,
    CliExecutionError,
    CliSpawnError,
    CliTimeoutError,
    RetryConfig,
)
from mcp_gemini_cli.core.log import get_logger
from mcp_gemini_cli.core.retry import run_with_retry
from mcp_gemini_cli.core.stderr import is_info_message
from mcp_gemini_cli.integrations.cli_executor.abc import CliExecutor, ProcessHandle
from mcp_gemini_cli.integrations.cli_executor.types import (
    ExecutionOptions,
    ExecutionResult,
    ResolvedCommand,
    StreamChunk,
    StreamChunkKind,
)
from mcp_gemini_cli.integrations.time.abc import Time
from mcp_gemini_cli.integrations.time.real import RealTime

logger = get_logger("cli-executor")

READ_CHUNK_SIZE = 4096


def _signal_group(process: asyncio.subprocess.Process, sig: int) -> None:
    """Send a signal to the process group the child leads."""
    with contextlib.suppress(ProcessLookupError, PermissionError):
        os.killpg(process.pid, sig)


async def _reap(process: asyncio.subprocess.Process) -> None:
    """Kill the child and everything it started, then wait for it to exit.

    Descendants inherit the output pipes, so wait() would block on them.
    """
    _signal_group(process, signal.SIGKILL)
    await process.wait()


class RealProcessHandle(ProcessHandle):
    """ProcessHandle backed by an asyncio subprocess.

    The underlying process is available as ``.process`` for callers that want
    to read ``process.stdout`` / ``process.stderr`` directly instead of using
    chunks().
    """

    def __init__(
        self,
        process: asyncio.subprocess.Process,
        command: str,
        args: list[str],
    ) -> None:
        self.process = process
        self.command = command
        self.args = args

    @property
    def pid(self) -> int | None:
        return self.process.pid

    @property
    def returncode(self) -> int | None:
        return self.process.returncode

    async def chunks(self) -> AsyncIterator[StreamChunk]:
        """Yield decoded output from both pipes as it arrives.

        Each pipe is pumped by its own task into a shared queue. Decoding is
        incremental, so a multi-byte character split across reads is not
        mangled.
        """
        queue: asyncio.Queue[StreamChunk | None] = asyncio.Queue()

        async def pump(stream: asyncio.StreamReader | None, kind: StreamChunkKind) -> None:
            if stream is not None:
                decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
                while data := await stream.read(READ_CHUNK_SIZE):
                    text = decoder.decode(data)
                    if text:
                        await queue.put(StreamChunk(kind, text))
                tail = decoder.decode(b"", final=True)
                if tail:
                    await queue.put(StreamChunk(kind, tail))
            await queue.put(None)

        pumps = [
            asyncio.create_task(pump(self.process.stdout, StreamChunkKind.STDOUT)),
            asyncio.create_task(pump(self.process.stderr, StreamChunkKind.STDERR)),
        ]
        try:
            open_streams = len(pumps)
            while open_streams:
                item = await queue.get()
                if item is None:
                    open_streams -= 1
                    continue
                yield item

            returncode = await self.process.wait()
            logger.info("Streaming command exited with code %d: %s", returncode, self.command)
            yield StreamChunk(StreamChunkKind.CLOSE, str(returncode))
        finally:
            for task in pumps:
                task.cancel()
            await asyncio.gather(*pumps, return_exceptions=True)

    def terminate(self) -> None:
        if self.process.returncode is None:
            _signal_group(self.process, signal.SIGTERM)

    def kill(self) -> None:
        if self.process.returncode is None:
            _signal_group(self.process, signal.SIGKILL)

    async def wait(self) -> int:
        return await self.process.wait()


class RealCliExecutor(CliExecutor):
    """Production implementation spawning one subprocess per call."""

    def __init__(
        self,
        *,
        time: Time | None = None,
        default_timeout_ms: int = 60_000,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
    ) -> None:
        """Create executor.

        Args:
            time: Clock used for elapsed-time reporting and retry delays
            default_timeout_ms: Deadline when options.timeout_ms is unset
            retry_config: Retry policy when options.retry is unset
        """
        self._time = time if time is not None else RealTime()
        self._default_timeout_ms = default_timeout_ms
        self._retry_config = retry_config

    async def execute(
        self,
        command: ResolvedCommand,
        args: Sequence[str],
        options: ExecutionOptions | None = None,
    ) -> str:
        opts = options if options is not None else ExecutionOptions()
        full_args = command.full_args(args)
        timeout_ms = opts.timeout_ms or self._default_timeout_ms
        retry_config = opts.retry if opts.retry is not None else self._retry_config

        result = await run_with_retry(
            lambda: self._execute_once(command, full_args, opts, timeout_ms),
            command=command.command,
            args=full_args,
            config=retry_config,
            time=self._time,
            logger=logger,
        )
        return result.stdout

    async def stream(
        self,
        command: ResolvedCommand,
        args: Sequence[str],
        options: ExecutionOptions | None = None,
    ) -> ProcessHandle:
        opts = options if options is not None else ExecutionOptions()
        full_args = command.full_args(args)
        process = await self._spawn("Streaming", command, full_args, opts)
        return RealProcessHandle(process, command.command, full_args)

    async def _spawn(
        self,
        label: str,
        command: ResolvedCommand,
        full_args: list[str],
        options: ExecutionOptions,
    ) -> asyncio.subprocess.Process:
        """Start the subprocess with all three pipes and close its stdin."""
        cwd = resolve_working_directory(options.working_directory)
        env = prepare_env(options.env)

        logger.info("%s: %s %s", label, command.command, " ".join(full_args))
        logger.debug("Working directory: %s", cwd)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Environment variables",
                extra={"metadata": {"env": dict(mask_sensitive_data(env))}},
            )

        try:
            process = await asyncio.create_subprocess_exec(
                command.command,
                *full_args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
                start_new_session=True,
            )
        except OSError as err:
            logger.error(
                "Failed to start command %s %s: %s", command.command, " ".join(full_args), err
            )
            raise CliSpawnError(command.command, full_args, err) from err

        if process.stdin is not None:
            process.stdin.close()
        return process

    async def _execute_once(
        self,
        command: ResolvedCommand,
        full_args: list[str],
        options: ExecutionOptions,
        timeout_ms: int,
    ) -> ExecutionResult:
        """Perform a single buffered attempt."""
        start = self._time.monotonic()
        process = await self._spawn("Executing", command, full_args, options)

        stdout_parts: list[bytes] = []
        stderr_parts: list[bytes] = []

        async def read_stdout() -> None:
            assert process.stdout is not None
            while data := await process.stdout.read(READ_CHUNK_SIZE):
                stdout_parts.append(data)
                if logger.isEnabledFor(logging.DEBUG):
                    text = data.decode("utf-8", errors="replace").strip()
                    if text:
                        logger.debug("STDOUT: %s", text)

        async def read_stderr() -> None:
            assert process.stderr is not None
            while data := await process.stderr.read(READ_CHUNK_SIZE):
                stderr_parts.append(data)
                text = data.decode("utf-8", errors="replace")
                if is_info_message(text):
                    logger.debug("STDERR: %s", text.strip())
                elif text.strip():
                    logger.warning("STDERR: %s", text.strip())

        async def communicate() -> int:
            await asyncio.gather(read_stdout(), read_stderr())
            return await process.wait()

        try:
            exit_code = await asyncio.wait_for(communicate(), timeout=timeout_ms / 1000)
        except TimeoutError:
            await _reap(process)
            elapsed_ms = (self._time.monotonic() - start) * 1000
            logger.error(
                "Command timed out after %dms: %s %s",
                timeout_ms,
                command.command,
                " ".join(full_args),
            )
            raise CliTimeoutError(command.command, full_args, timeout_ms, elapsed_ms) from None
        except asyncio.CancelledError:
            await _reap(process)
            raise

        stdout = b"".join(stdout_parts).decode("utf-8", errors="replace")
        stderr = b"".join(stderr_parts).decode("utf-8", errors="replace")
        duration_ms = (self._time.monotonic() - start) * 1000

        logger.info(
            "Command exited with code %d: %s %s", exit_code, command.command, " ".join(full_args)
        )

        if exit_code != 0:
            raise CliExecutionError(command.command, full_args, exit_code, stdout, stderr)

        return ExecutionResult(
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )
