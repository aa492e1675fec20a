"""Command to remove books from the library."""

import asyncio

import click

from calibre_library.cli.error_boundary import cli_error_boundary
from calibre_library.cli.output import user_output
from calibre_library.library import CalibreLibrary
from calibre_library.types.options import RemoveOptions


@click.command("remove")
@click.argument("book_ids", nargs=-1, type=click.IntRange(min=1), required=True)
@click.option("--permanent", is_flag=True, help="Delete files instead of using the recycle bin.")
@click.pass_obj
@cli_error_boundary
def remove_cmd(library: CalibreLibrary, book_ids: tuple[int, ...], permanent: bool) -> None:
    """Remove books by id. Unknown ids are ignored."""
    asyncio.run(library.remove(list(book_ids), RemoveOptions(permanent=permanent)))
    user_output(click.style(f"Removed {len(book_ids)} book id(s)", fg="green"))
