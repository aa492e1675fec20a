"""Command to add books to the library."""

import asyncio

import click

from calibre_library.cli.error_boundary import cli_error_boundary
from calibre_library.cli.json_output import emit_json, json_error_boundary
from calibre_library.cli.output import machine_output, user_output
from calibre_library.core.errors import CalibreOptionsError
from calibre_library.library import CalibreLibrary
from calibre_library.types.options import AddOptions, Automerge


def _parse_identifiers(values: tuple[str, ...]) -> dict[str, str]:
    identifiers: dict[str, str] = {}
    for value in values:
        id_type, sep, id_value = value.partition(":")
        if not sep or not id_type or not id_value:
            raise CalibreOptionsError(f"Identifier must look like type:value, got '{value}'")
        identifiers[id_type] = id_value
    return identifiers


@click.command("add")
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("--duplicates", "-d", is_flag=True, help="Add books even if they already exist.")
@click.option(
    "--automerge",
    type=click.Choice([m.value for m in Automerge]),
    help="Merge formats of duplicate books into the existing records.",
)
@click.option("--empty", "-e", is_flag=True, help="Add an empty book (no formats).")
@click.option("--title", "-t", help="Title for the added books.")
@click.option("--authors", "-a", multiple=True, help="Author (repeatable).")
@click.option("--isbn", "-i", help="ISBN for the added books.")
@click.option("--identifier", "-I", multiple=True, help="Identifier as type:value (repeatable).")
@click.option("--tags", "-T", multiple=True, help="Tag (repeatable).")
@click.option("--series", "-s", help="Series name.")
@click.option("--series-index", "-S", type=float, help="Position in the series.")
@click.option("--languages", "-l", multiple=True, help="Language code (repeatable).")
@click.option(
    "--cover", "-c", type=click.Path(exists=True, dir_okay=False), help="Cover image to use."
)
@click.option("--recurse", "-r", is_flag=True, help="Search directories recursively.")
@click.option(
    "--one-book-per-directory",
    "-1",
    is_flag=True,
    help="Treat each directory as one book with several formats.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.pass_obj
@cli_error_boundary
@json_error_boundary
def add_cmd(
    library: CalibreLibrary,
    paths: tuple[str, ...],
    duplicates: bool,
    automerge: str | None,
    empty: bool,
    title: str | None,
    authors: tuple[str, ...],
    isbn: str | None,
    identifier: tuple[str, ...],
    tags: tuple[str, ...],
    series: str | None,
    series_index: float | None,
    languages: tuple[str, ...],
    cover: str | None,
    recurse: bool,
    one_book_per_directory: bool,
    output_format: str,
) -> None:
    """Add e-book files (or an empty record) to the library."""
    options = AddOptions(
        duplicates=duplicates,
        automerge=Automerge(automerge) if automerge else None,
        title=title,
        authors=authors,
        isbn=isbn,
        identifiers=_parse_identifiers(identifier),
        tags=tags,
        series=series,
        series_index=series_index,
        languages=languages,
        cover=cover,
        recurse=recurse,
        one_book_per_directory=one_book_per_directory,
    )
    if empty:
        book_id = asyncio.run(library.add_empty_book(options))
        book_ids = [book_id] if book_id is not None else []
    else:
        book_ids = asyncio.run(library.add(list(paths), options))

    if output_format == "json":
        emit_json({"book_ids": book_ids})
        return

    if not book_ids:
        user_output("No books were added (duplicates are skipped unless --duplicates is given).")
        return
    user_output(click.style(f"Added {len(book_ids)} book(s)", fg="green"))
    machine_output(",".join(str(book_id) for book_id in book_ids))
