"""Command to list and search books."""

import asyncio

import click

from calibre_library.cli.error_boundary import cli_error_boundary
from calibre_library.cli.json_output import emit_json, json_error_boundary
from calibre_library.cli.output import user_output
from calibre_library.cli.rendering import render_books
from calibre_library.library import CalibreLibrary
from calibre_library.types.options import ListOptions, SortOrder


def _split_csv(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


@click.command("list")
@click.option("--fields", "-f", help="Comma-separated fields to show (or 'all').")
@click.option("--search", "-s", help="Calibre search expression, passed through unchanged.")
@click.option("--sort-by", help="Field to sort by.")
@click.option("--ascending", is_flag=True, help="Sort ascending instead of descending.")
@click.option("--limit", type=click.IntRange(min=0), help="Maximum number of books.")
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
def list_cmd(
    library: CalibreLibrary,
    fields: str | None,
    search: str | None,
    sort_by: str | None,
    ascending: bool,
    limit: int | None,
    output_format: str,
) -> None:
    """List books in the library."""
    requested = _split_csv(fields)
    options = ListOptions(
        fields=requested,
        sort_by=sort_by,
        sort_order=SortOrder.ASC if ascending else SortOrder.DESC,
        search=search,
        limit=limit,
    )
    books = asyncio.run(library.list(options))

    if output_format == "json":
        emit_json({"books": books, "count": len(books)})
        return

    if not books:
        user_output("No books found.")
        return
    render_books(books, requested)
