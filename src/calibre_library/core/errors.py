"""Exception taxonomy for calibredb failures.

Every failed calibredb invocation surfaces as exactly one of these types so
callers can branch on the failure without parsing calibre's output:

- CalibreError: generic failure (base class of all the others)
- BookNotFoundError: a requested book id does not exist
- LibraryNotFoundError: the library path is missing or unreadable
- CalibreNotFoundError: the calibredb executable could not be launched
- CalibreOutputError: calibredb succeeded but its output could not be decoded

CalibreOptionsError is separate: it reports invalid arguments detected before
any process is started.
"""

NO_OUTPUT_PLACEHOLDER = "No error output available"


class CalibreError(Exception):
    """Base error for a failed calibredb invocation.

    Attributes:
        command: The calibredb subcommand that was executed (e.g. "list")
        output: Raw stderr (or stdout) text captured from calibredb
    """

    def __init__(self, message: str, command: str = "", output: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.command = command
        self.output = output

    def __str__(self) -> str:
        lines = [self.message]
        if self.command:
            lines.append(f"Command: {self.command}")
        if self.output:
            lines.append(f"Output: {self.output.strip()}")
        return "\n".join(lines)


class BookNotFoundError(CalibreError):
    """A book id referenced by the command does not exist in the library."""

    def __init__(self, book_id: int | str, command: str, output: str) -> None:
        super().__init__(f"Book with ID {book_id} not found", command, output)
        self.book_id = book_id


class LibraryNotFoundError(CalibreError):
    """The library path does not exist or is not a calibre library."""

    def __init__(self, library_path: str, command: str, output: str) -> None:
        super().__init__(f"Library not found at path: {library_path}", command, output)
        self.library_path = library_path


class CalibreNotFoundError(CalibreError):
    """The calibredb executable is not installed or not on PATH."""

    def __init__(
        self,
        message: str = "calibredb executable not found",
        command: str = "",
        output: str = "",
    ) -> None:
        super().__init__(message, command, output)


class CalibreOutputError(CalibreError):
    """calibredb exited successfully but its output could not be decoded."""

    def __init__(self, command: str, output: str) -> None:
        super().__init__(f"Failed to parse JSON output from calibredb {command}", command, output)


class CalibreOptionsError(ValueError):
    """Invalid options detected before calibredb is invoked."""
