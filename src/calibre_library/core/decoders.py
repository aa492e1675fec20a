"""Decode calibredb output into typed values.

Two strategies sit on top of CalibreRunner.run():

- JSON: used whenever calibredb offers --for-machine output. The text is
  validated against a caller-supplied shape with a pydantic TypeAdapter.
- Text pattern: used only where calibredb prints nothing structured on
  success (the `add` summary line). All free-text matching lives here.
"""

import re
from dataclasses import replace
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from calibre_library.core.config import CalibreConfig
from calibre_library.core.errors import CalibreOutputError
from calibre_library.core.invocation import ExecutionMode, Invocation
from calibre_library.core.runner.abc import CalibreRunner

T = TypeVar("T")

_ADDED_IDS_PATTERN = re.compile(
    r"^[ \t]*added book ids?:[ \t]*(\d[\d, \t]*)\r?$", re.IGNORECASE | re.MULTILINE
)
_MERGED_IDS_PATTERN = re.compile(
    r"^[ \t]*merged book ids?:[ \t]*(\d[\d, \t]*)\r?$", re.IGNORECASE | re.MULTILINE
)


@lru_cache(maxsize=32)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def decode_json(command: str, text: str, shape: type[T]) -> T:
    """Validate calibredb JSON output against shape.

    Args:
        command: calibredb subcommand that produced the text (for errors)
        text: Raw stdout
        shape: Target type, e.g. list[Book]

    Returns:
        The validated value

    Raises:
        CalibreOutputError: If the text is not valid JSON or does not match shape.
            The raw text is kept on the error.
    """
    try:
        return _adapter(shape).validate_json(text)
    except ValidationError as e:
        raise CalibreOutputError(command, text) from e


def _ids_from(pattern: re.Pattern[str], text: str) -> list[int]:
    match = pattern.search(text)
    if match is None:
        return []
    return [int(value) for value in re.findall(r"\d+", match.group(1))]


def parse_added_ids(text: str) -> list[int]:
    """Extract ids from calibredb's "Added book ids: 1, 2, 3" line.

    A missing line is not an error: calibredb omits it when every file was
    skipped as a duplicate.
    """
    return _ids_from(_ADDED_IDS_PATTERN, text)


def parse_merged_ids(text: str) -> list[int]:
    """Extract ids from calibredb's "Merged book ids: ..." line (automerge)."""
    return _ids_from(_MERGED_IDS_PATTERN, text)


async def run_text(
    runner: CalibreRunner, command: str, args: list[str], config: CalibreConfig
) -> str:
    """Run a command and return its stdout unmodified."""
    invocation = Invocation(command=command, args=tuple(args), config=config)
    return await runner.run(invocation)


async def run_json(
    runner: CalibreRunner,
    command: str,
    args: list[str],
    config: CalibreConfig,
    shape: type[T],
) -> T:
    """Run a command with --for-machine and decode its stdout into shape.

    --for-machine is forced regardless of config.
    """
    invocation = Invocation(
        command=command,
        args=tuple(args),
        config=replace(config, for_machine=True),
        mode=ExecutionMode.JSON,
    )
    stdout = await runner.run(invocation)
    return decode_json(command, stdout, shape)
