"""Abstract interface for launching calibredb.

Architecture:
- CalibreRunner: abstract interface (buffered run + streaming launch)
- RealCalibreRunner: production implementation using asyncio subprocesses
- FakeCalibreRunner: in-memory implementation for tests

Both implementations share raise_for_exit() so a failed exit is classified
identically whether the process was real or simulated.
"""

import asyncio
import subprocess
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from calibre_library.core.classifier import classify_failure
from calibre_library.core.errors import NO_OUTPUT_PLACEHOLDER
from calibre_library.core.invocation import Invocation


def select_error_output(stdout: str, stderr: str) -> str:
    """Pick the text handed to the classifier: stderr, else stdout, else a placeholder."""
    if stderr.strip():
        return stderr
    if stdout.strip():
        return stdout
    return NO_OUTPUT_PLACEHOLDER


def raise_for_exit(invocation: Invocation, returncode: int, stdout: str, stderr: str) -> None:
    """Raise the classified error for a non-zero exit; do nothing on success.

    The classified error is chained from a CalledProcessError so the exit code
    and full argv stay available for diagnostics.
    """
    if returncode == 0:
        return
    underlying = subprocess.CalledProcessError(
        returncode, invocation.argv(), output=stdout, stderr=stderr
    )
    raise classify_failure(invocation.command, select_error_output(stdout, stderr)) from underlying


class StreamingProcess(ABC):
    """Live handle on a calibredb process whose output is consumed incrementally.

    The caller owns the process: it must drain stdout (iter_lines()) and await
    wait_checked() (or terminate/kill it) so the child is reaped.
    """

    def __init__(self, invocation: Invocation) -> None:
        self.invocation = invocation
        self._stderr_task: asyncio.Task[bytes] | None = None

    @property
    @abstractmethod
    def stdout(self) -> asyncio.StreamReader:
        """Raw stdout stream, iterable line by line."""
        ...

    @property
    @abstractmethod
    def stderr(self) -> asyncio.StreamReader:
        """Raw stderr stream. iter_lines() and wait_checked() read it in the background."""
        ...

    @property
    @abstractmethod
    def returncode(self) -> int | None:
        """Exit status, or None while the process is still running."""
        ...

    @abstractmethod
    async def wait(self) -> int:
        """Wait for the process to exit and return its exit status."""
        ...

    @abstractmethod
    def terminate(self) -> None:
        """Ask the process to stop (SIGTERM)."""
        ...

    @abstractmethod
    def kill(self) -> None:
        """Stop the process immediately (SIGKILL)."""
        ...

    def _drain_stderr(self) -> asyncio.Task[bytes]:
        # One stderr reader per process, started on first use
        if self._stderr_task is None:
            self._stderr_task = asyncio.create_task(self.stderr.read())
        return self._stderr_task

    async def iter_lines(self) -> AsyncIterator[str]:
        """Yield decoded stdout lines without their line terminators.

        Starts collecting stderr in the background; wait_checked() returns it.
        """
        self._drain_stderr()
        async for line in self.stdout:
            yield line.decode("utf-8", errors="replace").rstrip("\r\n")

    async def wait_checked(self) -> str:
        """Wait for exit, draining stderr; raise the classified error on failure.

        Call this after stdout has been consumed (e.g. via iter_lines()),
        otherwise a full stdout pipe can block the child. stderr is collected
        concurrently, so large progress output does not block it.

        Returns:
            Captured stderr text (calibredb reports progress there)
        """
        stderr_bytes = await self._drain_stderr()
        returncode = await self.wait()
        stderr = stderr_bytes.decode("utf-8", errors="replace")
        raise_for_exit(self.invocation, returncode, "", stderr)
        return stderr


class CalibreRunner(ABC):
    """Abstract interface for executing calibredb.

    All implementations (real and fake) must implement this interface.
    Every call launches exactly one process; nothing is retried or pooled.
    """

    @abstractmethod
    async def run(self, invocation: Invocation) -> str:
        """Run calibredb to completion and return its stdout.

        Args:
            invocation: Fully-formed invocation to execute

        Returns:
            Complete stdout text, untrimmed

        Raises:
            CalibreNotFoundError: If the executable cannot be launched
            CalibreError: Classified error for any non-zero exit
        """
        ...

    @abstractmethod
    async def stream(self, invocation: Invocation) -> StreamingProcess:
        """Start calibredb and return immediately with a live handle.

        Args:
            invocation: Fully-formed invocation to execute

        Returns:
            StreamingProcess whose pipes and exit the caller must consume

        Raises:
            CalibreNotFoundError: If the executable cannot be launched
        """
        ...
