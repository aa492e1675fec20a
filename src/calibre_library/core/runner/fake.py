"""In-memory fake implementation of CalibreRunner for testing."""

import asyncio
from dataclasses import dataclass

from calibre_library.core.errors import CalibreNotFoundError
from calibre_library.core.invocation import Invocation
from calibre_library.core.runner.abc import CalibreRunner, StreamingProcess, raise_for_exit


@dataclass(frozen=True)
class FakeResult:
    """Canned outcome of one simulated calibredb process."""

    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


def _reader_with(data: str) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    if data:
        reader.feed_data(data.encode("utf-8"))
    reader.feed_eof()
    return reader


class FakeStreamingProcess(StreamingProcess):
    """StreamingProcess that replays a FakeResult through real StreamReaders."""

    def __init__(self, invocation: Invocation, result: FakeResult) -> None:
        super().__init__(invocation)
        self._result = result
        self._stdout = _reader_with(result.stdout)
        self._stderr = _reader_with(result.stderr)
        self._returncode: int | None = None
        self.terminated = False
        self.killed = False

    @property
    def stdout(self) -> asyncio.StreamReader:
        return self._stdout

    @property
    def stderr(self) -> asyncio.StreamReader:
        return self._stderr

    @property
    def returncode(self) -> int | None:
        return self._returncode

    async def wait(self) -> int:
        if self._returncode is None:
            self._returncode = self._result.returncode
        return self._returncode

    def terminate(self) -> None:
        self.terminated = True
        if self._returncode is None:
            self._returncode = -15

    def kill(self) -> None:
        self.killed = True
        if self._returncode is None:
            self._returncode = -9


class FakeCalibreRunner(CalibreRunner):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments.
    Results are consumed in order per calibredb command; once a command's
    queue is empty, default_result is used.
    """

    def __init__(
        self,
        *,
        results: dict[str, list[FakeResult]] | None = None,
        default_result: FakeResult | None = None,
        executable_available: bool = True,
    ) -> None:
        """Create FakeCalibreRunner with pre-configured results.

        Args:
            results: Mapping of command name -> queue of results to replay
            default_result: Result used when a command has no queued result
                (default: empty stdout, exit code 0)
            executable_available: If False, every call raises CalibreNotFoundError
                as if calibredb were not installed
        """
        self._results = {command: list(queue) for command, queue in (results or {}).items()}
        self._default_result = default_result or FakeResult()
        self._executable_available = executable_available
        self._invocations: list[Invocation] = []
        self._streams: list[FakeStreamingProcess] = []

    @property
    def invocations(self) -> list[Invocation]:
        """Read-only access to every invocation, in call order."""
        return self._invocations.copy()

    @property
    def argvs(self) -> list[list[str]]:
        """Argument vectors of every invocation, in call order."""
        return [invocation.argv() for invocation in self._invocations]

    @property
    def streams(self) -> list[FakeStreamingProcess]:
        """Read-only access to the handles returned by stream()."""
        return self._streams.copy()

    def _next_result(self, invocation: Invocation) -> FakeResult:
        self._invocations.append(invocation)
        if not self._executable_available:
            raise CalibreNotFoundError(
                f"calibredb executable not found: {invocation.config.executable}",
                command=invocation.command,
            )
        queue = self._results.get(invocation.command)
        if queue:
            return queue.pop(0)
        return self._default_result

    async def run(self, invocation: Invocation) -> str:
        result = self._next_result(invocation)
        raise_for_exit(invocation, result.returncode, result.stdout, result.stderr)
        return result.stdout

    async def stream(self, invocation: Invocation) -> StreamingProcess:
        result = self._next_result(invocation)
        process = FakeStreamingProcess(invocation, result)
        self._streams.append(process)
        return process
