"""Option objects for the list, add and remove commands."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from calibre_library.types.book import BookField


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class Automerge(StrEnum):
    """How `calibredb add --automerge` treats books matching an existing record.

    IGNORE discards duplicate formats, OVERWRITE replaces them in the library,
    NEW_RECORD puts them into a new book record.
    """

    IGNORE = "ignore"
    OVERWRITE = "overwrite"
    NEW_RECORD = "new_record"


@dataclass(frozen=True)
class ListOptions:
    """Options for `calibredb list`.

    Attributes:
        fields: Fields to include; None uses calibredb's default (title, authors).
            BookField.ALL selects every field.
        sort_by: Field (or fields) to sort by
        sort_order: calibredb sorts descending unless --ascending is given
        search: Search expression, passed to calibredb verbatim
        limit: Maximum number of records
    """

    fields: Sequence[BookField | str] | None = None
    sort_by: str | Sequence[str] | None = None
    sort_order: SortOrder = SortOrder.DESC
    search: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class AddOptions:
    """Options for `calibredb add`.

    Without `duplicates` or `automerge`, calibredb skips any file whose title
    and authors match an existing record; skipped files are not an error.
    """

    duplicates: bool = False
    automerge: Automerge | None = None
    empty: bool = False
    title: str | None = None
    authors: Sequence[str] = ()
    isbn: str | None = None
    identifiers: Mapping[str, str] = field(default_factory=dict)
    tags: Sequence[str] = ()
    series: str | None = None
    series_index: float | None = None
    languages: Sequence[str] = ()
    cover: str | None = None
    recurse: bool = False
    one_book_per_directory: bool = False


@dataclass(frozen=True)
class RemoveOptions:
    permanent: bool = False
