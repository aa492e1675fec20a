"""End-to-end tests against a real calibredb installation.

Skipped unless calibredb is on PATH. Each test works in a fresh library
created in a temporary directory.
"""

import shutil
from pathlib import Path

import pytest

from calibre_library.core.config import CalibreConfig
from calibre_library.library import CalibreLibrary
from calibre_library.types.book import BookField
from calibre_library.types.options import AddOptions, ListOptions, SortOrder

pytestmark = [
    pytest.mark.calibredb,
    pytest.mark.skipif(shutil.which("calibredb") is None, reason="calibredb not installed"),
]


def _write_book(directory: Path, name: str) -> str:
    path = directory / f"{name}.html"
    path.write_text(
        f"<html><head><title>{name}</title></head><body><p>{name}</p></body></html>",
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def calibre(tmp_path: Path) -> CalibreLibrary:
    library_dir = tmp_path / "library"
    library_dir.mkdir()
    return CalibreLibrary(CalibreConfig(library_path=library_dir))


@pytest.fixture
def books_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "incoming"
    directory.mkdir()
    return directory


async def test_new_library_is_empty(calibre: CalibreLibrary) -> None:
    assert await calibre.list() == []


async def test_add_distinct_books(calibre: CalibreLibrary, books_dir: Path) -> None:
    paths = [_write_book(books_dir, name) for name in ("A-Book", "B-Book", "C-Book")]

    book_ids = await calibre.add(paths, AddOptions(duplicates=True))

    assert len(book_ids) == 3
    assert len(set(book_ids)) == 3
    for book_id in book_ids:
        assert len(await calibre.search(f"id:{book_id}")) == 1


async def test_duplicate_add_is_skipped(calibre: CalibreLibrary, books_dir: Path) -> None:
    path = _write_book(books_dir, "A-Book")
    options = AddOptions(title="A-Book", authors=["Ann Author"])

    first = await calibre.add([path], options)
    second = await calibre.add([path], options)

    assert len(first) == 1
    assert second == []
    assert len(await calibre.list()) == 1

    third = await calibre.add([path], AddOptions(title="A-Book", duplicates=True))

    assert len(third) == 1
    assert len(await calibre.list()) == 2


async def test_remove_is_idempotent(calibre: CalibreLibrary, books_dir: Path) -> None:
    book_id = await calibre.add_book(_write_book(books_dir, "A-Book"))
    assert book_id is not None

    await calibre.remove_book(book_id)
    await calibre.remove_book(book_id)

    assert await calibre.get_book_by_id(book_id) is None


async def test_metadata_round_trip(calibre: CalibreLibrary, books_dir: Path) -> None:
    options = AddOptions(
        title="Round Trip",
        authors=["Ann Author"],
        tags=["alpha", "beta"],
        series="Saga",
        series_index=2,
        identifiers={"goodreads": "12345"},
    )
    book_id = await calibre.add_book(_write_book(books_dir, "round-trip"), options)
    assert book_id is not None

    book = await calibre.get_book_by_id(book_id, ListOptions(fields=[BookField.ALL]))

    assert book is not None
    assert book.title == "Round Trip"
    assert book.authors == ["Ann Author"]
    assert sorted(book.tags or []) == ["alpha", "beta"]
    assert book.series == "Saga"
    assert book.series_index == 2.0
    assert (book.identifiers or {}).get("goodreads") == "12345"


async def test_sorting(calibre: CalibreLibrary, books_dir: Path) -> None:
    for name in ("B-Book", "C-Book", "A-Book"):
        await calibre.add_book(_write_book(books_dir, name), AddOptions(title=name))

    ascending = await calibre.list(
        ListOptions(fields=[BookField.TITLE], sort_by="title", sort_order=SortOrder.ASC)
    )
    descending = await calibre.list(ListOptions(fields=[BookField.TITLE], sort_by="title"))

    assert [book.title for book in ascending] == ["A-Book", "B-Book", "C-Book"]
    assert [book.title for book in descending] == ["C-Book", "B-Book", "A-Book"]


async def test_search_by_title(calibre: CalibreLibrary, books_dir: Path) -> None:
    await calibre.add_book(_write_book(books_dir, "A-Book"), AddOptions(title="A-Book"))
    await calibre.add_book(_write_book(books_dir, "B-Book"), AddOptions(title="B-Book"))

    books = await calibre.get_books_by_title("B-Book")

    assert [book.title for book in books] == ["B-Book"]
