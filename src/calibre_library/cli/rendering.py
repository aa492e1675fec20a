"""Rich rendering of book records for the terminal."""

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from calibre_library.types.book import Book

DEFAULT_COLUMNS = ["id", "title", "authors"]


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        return ", ".join(f"{key}:{item}" for key, item in value.items())
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def columns_for(books: Sequence[Book], requested: Sequence[str] | None) -> list[str]:
    """Columns to display: id first, then the requested fields in order.

    For "all" (or no request) the columns are taken from the decoded records.
    """
    if requested and "all" not in requested:
        return ["id", *[field for field in requested if field != "id"]]
    seen = ["id"]
    for book in books:
        for key, value in book.model_dump(exclude_none=True).items():
            if key not in seen and value is not None:
                seen.append(key)
    return seen if len(seen) > 1 else DEFAULT_COLUMNS


def render_books(
    books: Sequence[Book], requested: Sequence[str] | None, console: Console | None = None
) -> None:
    """Print books as a table."""
    if console is None:
        console = Console()

    table = Table(show_header=True, header_style="bold", box=None)
    columns = columns_for(books, requested)
    for column in columns:
        table.add_column(column, no_wrap=column == "id", style="cyan" if column == "id" else None)

    for book in books:
        values = book.model_dump()
        table.add_row(*[_format_value(values.get(column)) for column in columns])

    console.print(table)
