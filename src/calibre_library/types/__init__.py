"""Typed records and option objects for calibredb commands."""

from calibre_library.types.book import Book, BookField
from calibre_library.types.options import (
    AddOptions,
    Automerge,
    ListOptions,
    RemoveOptions,
    SortOrder,
)

__all__ = [
    "AddOptions",
    "Automerge",
    "Book",
    "BookField",
    "ListOptions",
    "RemoveOptions",
    "SortOrder",
]
