"""Typed async client for calibre's calibredb command line tool."""

from calibre_library.core.config import DEFAULT_EXECUTABLE, CalibreConfig
from calibre_library.core.decoders import parse_added_ids, parse_merged_ids
from calibre_library.core.errors import (
    BookNotFoundError,
    CalibreError,
    CalibreNotFoundError,
    CalibreOptionsError,
    CalibreOutputError,
    LibraryNotFoundError,
)
from calibre_library.core.runner import (
    CalibreRunner,
    FakeCalibreRunner,
    FakeResult,
    RealCalibreRunner,
    StreamingProcess,
)
from calibre_library.library import CalibreLibrary
from calibre_library.types import (
    AddOptions,
    Automerge,
    Book,
    BookField,
    ListOptions,
    RemoveOptions,
    SortOrder,
)

__all__ = [
    "DEFAULT_EXECUTABLE",
    "AddOptions",
    "Automerge",
    "Book",
    "BookField",
    "BookNotFoundError",
    "CalibreConfig",
    "CalibreError",
    "CalibreLibrary",
    "CalibreNotFoundError",
    "CalibreOptionsError",
    "CalibreOutputError",
    "CalibreRunner",
    "FakeCalibreRunner",
    "FakeResult",
    "LibraryNotFoundError",
    "ListOptions",
    "RealCalibreRunner",
    "RemoveOptions",
    "SortOrder",
    "StreamingProcess",
    "parse_added_ids",
    "parse_merged_ids",
]
