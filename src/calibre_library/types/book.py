"""Book records decoded from `calibredb list --for-machine`."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

AUTHOR_SEPARATOR = " & "


class BookField(StrEnum):
    """Fields that can be requested from `calibredb list --fields`."""

    ID = "id"
    TITLE = "title"
    AUTHORS = "authors"
    AUTHOR_SORT = "author_sort"
    SERIES = "series"
    SERIES_INDEX = "series_index"
    PUBLISHER = "publisher"
    TAGS = "tags"
    LANGUAGES = "languages"
    IDENTIFIERS = "identifiers"
    ISBN = "isbn"
    TIMESTAMP = "timestamp"
    LAST_MODIFIED = "last_modified"
    PUBDATE = "pubdate"
    COMMENTS = "comments"
    RATING = "rating"
    UUID = "uuid"
    FORMATS = "formats"
    SIZE = "size"
    COVER = "cover"
    ALL = "all"


class Book(BaseModel):
    """One library record, projected onto the requested fields.

    Only `id` is always present; every other attribute is None unless its
    field was requested. Custom columns (reported by calibre as "*name") are
    kept as extra attributes and appear in model_extra.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    title: str | None = None
    authors: list[str] | None = None
    author_sort: str | None = None
    formats: list[str] | None = None
    uuid: str | None = None
    timestamp: str | None = None
    last_modified: str | None = None
    pubdate: str | None = None
    tags: list[str] | None = None
    comments: str | None = None
    series: str | None = None
    series_index: float | None = None
    cover: str | None = None
    publisher: str | None = None
    languages: list[str] | None = None
    identifiers: dict[str, str] | None = None
    isbn: str | None = None
    size: int | None = None
    rating: float | None = None

    @field_validator("authors", mode="before")
    @classmethod
    def split_authors(cls, v: Any) -> Any:
        """calibredb reports authors as one "A & B" string, even with --for-machine."""
        if isinstance(v, str):
            return [author.strip() for author in v.split(AUTHOR_SEPARATOR) if author.strip()]
        return v
