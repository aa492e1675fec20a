"""A single, fully-formed calibredb invocation."""

from dataclasses import dataclass
from enum import Enum

from calibre_library.core.config import CalibreConfig


class ExecutionMode(Enum):
    """How the output of an invocation is consumed."""

    TEXT = "text"
    JSON = "json"
    STREAM = "stream"


@dataclass(frozen=True)
class Invocation:
    """Immutable description of one calibredb process launch.

    Attributes:
        command: calibredb subcommand (e.g. "list", "add", "remove")
        args: Command-specific flags and positionals, in the order the
            adapter built them
        config: Shared options (library path, executable, for-machine)
        mode: Buffered text, buffered JSON, or streaming
    """

    command: str
    args: tuple[str, ...]
    config: CalibreConfig
    mode: ExecutionMode = ExecutionMode.TEXT

    @property
    def requests_machine_output(self) -> bool:
        return self.config.for_machine or self.mode is ExecutionMode.JSON

    def argv(self) -> list[str]:
        """Build the argument vector passed to the operating system.

        Layout: executable, command, [--library-path PATH], [--for-machine],
        then args unchanged.
        """
        argv = [self.config.executable, self.command]
        if self.config.library_path:
            argv.extend(["--library-path", str(self.config.library_path)])
        if self.requests_machine_output:
            argv.append("--for-machine")
        argv.extend(self.args)
        return argv
