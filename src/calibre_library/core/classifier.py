"""Map calibredb error output onto the exception taxonomy.

Classification is deterministic and text based. Phrases are checked in a
fixed order and the first match wins:

1. book not found
2. library not found
3. calibredb executable missing
4. anything else -> generic CalibreError

Detail extraction (book id, library path) is best-effort; when it fails the
sentinel "unknown" is used. classify_failure never raises.
"""

import re

from calibre_library.core.errors import (
    BookNotFoundError,
    CalibreError,
    CalibreNotFoundError,
    LibraryNotFoundError,
)

UNKNOWN = "unknown"

BOOK_NOT_FOUND_PHRASES = ["no book with id", "book not found"]
LIBRARY_NOT_FOUND_PHRASES = ["library not found", "cannot find library", "no library found"]
EXECUTABLE_MISSING_PHRASES = [
    "command not found",
    "calibredb: not found",
    "no such file or directory: 'calibredb'",
]

_BOOK_ID_PATTERN = re.compile(r"\bid[:\s#]+(\d+)", re.IGNORECASE)
_LIBRARY_PATH_PATTERN = re.compile(r"path[:\s]+(\S+)", re.IGNORECASE)


def _contains_any(haystack: str, needles: list[str]) -> bool:
    return any(n in haystack for n in needles)


def _extract_book_id(output: str) -> int | str:
    match = _BOOK_ID_PATTERN.search(output)
    if match is None:
        return UNKNOWN
    return int(match.group(1))


def _extract_library_path(output: str) -> str:
    match = _LIBRARY_PATH_PATTERN.search(output)
    if match is None:
        return UNKNOWN
    return match.group(1)


def classify_failure(command: str, output: str) -> CalibreError:
    """Classify calibredb error output into exactly one CalibreError subtype.

    Args:
        command: The calibredb subcommand that failed
        output: Raw error text (stderr, or stdout when stderr was empty)

    Returns:
        The most specific CalibreError for the output. The raw text is kept
        on the returned error unchanged.
    """
    lowered = output.lower()

    if _contains_any(lowered, BOOK_NOT_FOUND_PHRASES):
        return BookNotFoundError(_extract_book_id(output), command, output)

    if _contains_any(lowered, LIBRARY_NOT_FOUND_PHRASES):
        return LibraryNotFoundError(_extract_library_path(output), command, output)

    if _contains_any(lowered, EXECUTABLE_MISSING_PHRASES):
        return CalibreNotFoundError(command=command, output=output)

    return CalibreError(f"Error executing calibredb {command}", command, output)
