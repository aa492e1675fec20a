"""Async client for a calibre library, backed by calibredb.

Example:
    >>> library = CalibreLibrary(CalibreConfig(library_path="/books"))
    >>> book_ids = await library.add(["novel.epub"], AddOptions(tags=["fiction"]))
    >>> books = await library.search("tags:fiction", ListOptions(fields=["title"]))

Calls against the same library directory must not overlap: calibredb only
supports one running instance per library, and this client does not lock.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace

from calibre_library.commands.add import add_books, add_books_streaming
from calibre_library.commands.list_cmd import list_books
from calibre_library.commands.remove import remove_books
from calibre_library.commands.search import exact_match, id_match
from calibre_library.core.config import CalibreConfig
from calibre_library.core.errors import CalibreOptionsError
from calibre_library.core.runner.abc import CalibreRunner, StreamingProcess
from calibre_library.core.runner.real import RealCalibreRunner
from calibre_library.types.book import Book, BookField
from calibre_library.types.options import AddOptions, ListOptions, RemoveOptions

logger = logging.getLogger(__name__)


class CalibreLibrary:
    """Typed async operations on one calibre library.

    Args:
        config: Library path and calibredb executable (default: calibre's
            default library and `calibredb` on PATH)
        runner: Process runner; inject FakeCalibreRunner in tests
    """

    def __init__(
        self,
        config: CalibreConfig | None = None,
        runner: CalibreRunner | None = None,
    ) -> None:
        self.config = config or CalibreConfig()
        self.runner = runner or RealCalibreRunner()

    # ------------------------------------------------------------------
    # list / search
    # ------------------------------------------------------------------

    async def list_all(self, options: ListOptions | None = None) -> list[Book]:
        """List every book, ignoring any search expression in options."""
        return await self.list(replace(options or ListOptions(), search=None))

    async def search(self, expression: str, options: ListOptions | None = None) -> list[Book]:
        """List books matching a calibre search expression (passed verbatim)."""
        return await self.list(replace(options or ListOptions(), search=expression))

    async def get_book_by_id(
        self, book_id: int, options: ListOptions | None = None
    ) -> Book | None:
        """Fetch one book by id, or None if the library has no such book."""
        books = await self.search(id_match(book_id), options)
        return books[0] if books else None

    async def get_books_by_author(
        self, author: str, options: ListOptions | None = None
    ) -> list[Book]:
        return await self.search(exact_match("authors", author), options)

    async def get_books_by_title(
        self, title: str, options: ListOptions | None = None
    ) -> list[Book]:
        return await self.search(exact_match("title", title), options)

    async def get_books_by_tag(self, tag: str, options: ListOptions | None = None) -> list[Book]:
        return await self.search(exact_match("tags", tag), options)

    async def get_books_by_series(
        self, series: str, options: ListOptions | None = None
    ) -> list[Book]:
        return await self.search(exact_match("series", series), options)

    async def get_books_by_format(
        self, book_format: str, options: ListOptions | None = None
    ) -> list[Book]:
        """Books having a format such as "EPUB" or "PDF"."""
        return await self.search(exact_match("formats", book_format.upper()), options)

    # ------------------------------------------------------------------
    # add
    # ------------------------------------------------------------------

    async def add(self, paths: Sequence[str], options: AddOptions | None = None) -> list[int]:
        """Add files to the library and return the ids of the new records.

        Files skipped as duplicates produce no id, so the result can be shorter
        than paths (or empty).
        """
        return await add_books(self.runner, self.config, paths, options or AddOptions())

    async def add_book(self, path: str, options: AddOptions | None = None) -> int | None:
        """Add a single file; returns its id, or None if it was not added."""
        book_ids = await self.add([path], options)
        return book_ids[0] if book_ids else None

    async def add_empty_book(self, options: AddOptions) -> int | None:
        """Create a record without any format files.

        Raises:
            CalibreOptionsError: If options has no title (no process is started)
        """
        if not options.title:
            raise CalibreOptionsError("Title is required for an empty book")
        book_ids = await self.add([], replace(options, empty=True))
        return book_ids[0] if book_ids else None

    async def add_directory(self, directory: str, options: AddOptions | None = None) -> list[int]:
        """Add every e-book found under directory, recursing into subdirectories."""
        return await self.add([directory], replace(options or AddOptions(), recurse=True))

    async def add_streaming(
        self, paths: Sequence[str], options: AddOptions | None = None
    ) -> StreamingProcess:
        """Start adding files and return the live calibredb process.

        The caller must consume stdout/stderr and await the process; use
        parse_added_ids() on the collected stdout to recover the new ids.
        """
        return await add_books_streaming(self.runner, self.config, paths, options or AddOptions())

    # ------------------------------------------------------------------
    # remove
    # ------------------------------------------------------------------

    async def remove(self, book_ids: Sequence[int], options: RemoveOptions | None = None) -> None:
        """Remove books by id. Ids that do not exist are ignored."""
        await remove_books(self.runner, self.config, book_ids, options or RemoveOptions())

    async def remove_book(self, book_id: int, options: RemoveOptions | None = None) -> None:
        await self.remove([book_id], options)

    async def remove_permanently(self, book_ids: Sequence[int]) -> None:
        """Remove books and delete their files instead of using the recycle bin."""
        await self.remove(book_ids, RemoveOptions(permanent=True))

    async def remove_by_search(
        self, expression: str, options: RemoveOptions | None = None
    ) -> list[int]:
        """Remove every book matching a search expression.

        Returns:
            Ids of the removed books (empty when nothing matched)
        """
        books = await self.search(expression, ListOptions(fields=[BookField.TITLE]))
        book_ids = [book.id for book in books]
        logger.debug("Search %r matched %d book(s) for removal", expression, len(book_ids))
        await self.remove(book_ids, options)
        return book_ids

    # Defined last: inside the class body this name shadows the builtin list.
    async def list(self, options: ListOptions | None = None) -> list[Book]:
        """List books matching options (all books when no search is given)."""
        return await list_books(self.runner, self.config, options or ListOptions())
