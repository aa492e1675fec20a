"""Adapter for `calibredb list`.

Listing always uses --for-machine JSON output; the human-readable table is
column-width dependent and not parseable reliably.
"""

from calibre_library.core.config import CalibreConfig
from calibre_library.core.decoders import run_json
from calibre_library.core.errors import CalibreOptionsError
from calibre_library.core.runner.abc import CalibreRunner
from calibre_library.types.book import Book
from calibre_library.types.options import ListOptions, SortOrder

LIST_COMMAND = "list"


def build_list_args(options: ListOptions) -> list[str]:
    """Translate ListOptions into `calibredb list` flags."""
    args: list[str] = []

    if options.fields:
        args.extend(["--fields", ",".join(str(f) for f in options.fields)])

    if options.sort_by:
        if isinstance(options.sort_by, str):
            sort_by = options.sort_by
        else:
            sort_by = ",".join(options.sort_by)
        args.extend(["--sort-by", sort_by])

    if options.sort_order == SortOrder.ASC:
        args.append("--ascending")

    if options.search:
        args.extend(["--search", options.search])

    if options.limit is not None:
        if options.limit < 0:
            raise CalibreOptionsError(f"limit must be non-negative, got {options.limit}")
        args.extend(["--limit", str(options.limit)])

    return args


async def list_books(
    runner: CalibreRunner, config: CalibreConfig, options: ListOptions
) -> list[Book]:
    """Run `calibredb list` and decode the matching records."""
    args = build_list_args(options)
    return await run_json(runner, LIST_COMMAND, args, config, list[Book])
