"""Adapter for `calibredb add`.

calibredb add has no machine-readable success payload, so the ids of new
records come from its "Added book ids: ..." summary line (calibre 5.0+).
"""

import logging
from collections.abc import Sequence

from calibre_library.core.config import CalibreConfig
from calibre_library.core.decoders import parse_added_ids, run_text
from calibre_library.core.errors import CalibreOptionsError
from calibre_library.core.invocation import ExecutionMode, Invocation
from calibre_library.core.runner.abc import CalibreRunner, StreamingProcess
from calibre_library.types.book import AUTHOR_SEPARATOR
from calibre_library.types.options import AddOptions

logger = logging.getLogger(__name__)

ADD_COMMAND = "add"


def _format_series_index(value: float) -> str:
    """Render an index without losing precision ("2" for 2.0, "1.5" stays "1.5")."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def build_add_args(paths: Sequence[str], options: AddOptions) -> list[str]:
    """Translate AddOptions into `calibredb add` flags, followed by the paths.

    Raises:
        CalibreOptionsError: If there is nothing to add
    """
    if not paths and not options.empty:
        raise CalibreOptionsError("At least one path is required unless adding an empty book")

    args: list[str] = []

    if options.duplicates:
        args.append("--duplicates")
    if options.automerge is not None:
        args.extend(["--automerge", str(options.automerge)])
    if options.empty:
        args.append("--empty")
    if options.title:
        args.extend(["--title", options.title])
    if options.authors:
        args.extend(["--authors", AUTHOR_SEPARATOR.join(options.authors)])
    if options.isbn:
        args.extend(["--isbn", options.isbn])
    for id_type, value in options.identifiers.items():
        args.extend(["--identifier", f"{id_type}:{value}"])
    if options.tags:
        args.extend(["--tags", ",".join(options.tags)])
    if options.series:
        args.extend(["--series", options.series])
    if options.series_index is not None:
        args.extend(["--series-index", _format_series_index(options.series_index)])
    if options.languages:
        args.extend(["--languages", ",".join(options.languages)])
    if options.cover:
        args.extend(["--cover", options.cover])
    if options.recurse:
        args.append("--recurse")
    if options.one_book_per_directory:
        args.append("--one-book-per-directory")

    args.extend(str(p) for p in paths)
    return args


async def add_books(
    runner: CalibreRunner, config: CalibreConfig, paths: Sequence[str], options: AddOptions
) -> list[int]:
    """Run `calibredb add` and return the ids of the records it created.

    An empty list means nothing was added (e.g. every file was a duplicate).
    """
    args = build_add_args(paths, options)
    stdout = await run_text(runner, ADD_COMMAND, args, config)
    book_ids = parse_added_ids(stdout)
    if not book_ids:
        logger.debug("calibredb add reported no new book ids")
    return book_ids


async def add_books_streaming(
    runner: CalibreRunner, config: CalibreConfig, paths: Sequence[str], options: AddOptions
) -> StreamingProcess:
    """Start `calibredb add` and return the live process handle."""
    args = build_add_args(paths, options)
    invocation = Invocation(
        command=ADD_COMMAND, args=tuple(args), config=config, mode=ExecutionMode.STREAM
    )
    return await runner.stream(invocation)
