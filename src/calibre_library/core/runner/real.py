"""Production CalibreRunner using asyncio subprocesses."""

import asyncio
import logging
import shlex

from calibre_library.core.errors import CalibreError, CalibreNotFoundError
from calibre_library.core.invocation import Invocation
from calibre_library.core.runner.abc import CalibreRunner, StreamingProcess, raise_for_exit

logger = logging.getLogger(__name__)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class RealStreamingProcess(StreamingProcess):
    """StreamingProcess backed by an asyncio.subprocess.Process."""

    def __init__(self, invocation: Invocation, process: asyncio.subprocess.Process) -> None:
        super().__init__(invocation)
        if process.stdout is None or process.stderr is None:
            raise CalibreError("Failed to open calibredb output pipes", invocation.command)
        self._process = process
        self._stdout = process.stdout
        self._stderr = process.stderr

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def stdout(self) -> asyncio.StreamReader:
        return self._stdout

    @property
    def stderr(self) -> asyncio.StreamReader:
        return self._stderr

    @property
    def returncode(self) -> int | None:
        return self._process.returncode

    async def wait(self) -> int:
        return await self._process.wait()

    def terminate(self) -> None:
        if self._process.returncode is None:
            self._process.terminate()

    def kill(self) -> None:
        if self._process.returncode is None:
            self._process.kill()


class RealCalibreRunner(CalibreRunner):
    """Production implementation launching the calibredb binary.

    Each call spawns one child process with piped stdout/stderr. Buffered runs
    always reap the child before returning or raising.
    """

    async def _spawn(self, invocation: Invocation) -> asyncio.subprocess.Process:
        argv = invocation.argv()
        level = logging.INFO if invocation.config.debug else logging.DEBUG
        logger.log(level, "Running: %s", shlex.join(argv))
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise CalibreNotFoundError(
                f"calibredb executable not found: {invocation.config.executable}",
                command=invocation.command,
                output=str(e),
            ) from e
        except OSError as e:
            raise CalibreError(
                f"Failed to launch calibredb {invocation.command}: {e}",
                invocation.command,
                str(e),
            ) from e

    async def run(self, invocation: Invocation) -> str:
        process = await self._spawn(invocation)
        try:
            stdout_bytes, stderr_bytes = await process.communicate()
        except asyncio.CancelledError:
            # Reap the child before letting the cancellation through
            if process.returncode is None:
                process.kill()
            await process.wait()
            raise

        stdout = _decode(stdout_bytes)
        stderr = _decode(stderr_bytes)
        returncode = process.returncode if process.returncode is not None else 0
        if returncode != 0:
            logger.debug("calibredb %s exited with status %d", invocation.command, returncode)
        raise_for_exit(invocation, returncode, stdout, stderr)
        return stdout

    async def stream(self, invocation: Invocation) -> StreamingProcess:
        process = await self._spawn(invocation)
        return RealStreamingProcess(invocation, process)
