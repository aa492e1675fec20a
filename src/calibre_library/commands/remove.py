"""Adapter for `calibredb remove`.

calibredb silently ignores ids that do not exist, so removal is idempotent.
"""

from collections.abc import Sequence

from calibre_library.core.config import CalibreConfig
from calibre_library.core.decoders import run_text
from calibre_library.core.runner.abc import CalibreRunner
from calibre_library.types.options import RemoveOptions

REMOVE_COMMAND = "remove"


def build_remove_args(book_ids: Sequence[int], options: RemoveOptions) -> list[str]:
    args = [",".join(str(book_id) for book_id in book_ids)]
    if options.permanent:
        args.append("--permanent")
    return args


async def remove_books(
    runner: CalibreRunner, config: CalibreConfig, book_ids: Sequence[int], options: RemoveOptions
) -> None:
    """Run `calibredb remove`. An empty id list does nothing."""
    if not book_ids:
        return
    await run_text(runner, REMOVE_COMMAND, build_remove_args(book_ids, options), config)
