"""Tests for Invocation.argv() construction."""

from pathlib import Path

from calibre_library.core.config import CalibreConfig
from calibre_library.core.invocation import ExecutionMode, Invocation


def test_minimal_argv_uses_default_executable() -> None:
    invocation = Invocation(command="list", args=(), config=CalibreConfig())

    assert invocation.argv() == ["calibredb", "list"]


def test_library_path_follows_command() -> None:
    config = CalibreConfig(library_path=Path("/books"))
    invocation = Invocation(command="remove", args=("1,2",), config=config)

    assert invocation.argv() == ["calibredb", "remove", "--library-path", "/books", "1,2"]


def test_for_machine_comes_before_command_args() -> None:
    config = CalibreConfig(library_path="/books", for_machine=True)
    invocation = Invocation(command="list", args=("--fields", "title"), config=config)

    assert invocation.argv() == [
        "calibredb",
        "list",
        "--library-path",
        "/books",
        "--for-machine",
        "--fields",
        "title",
    ]


def test_json_mode_implies_for_machine() -> None:
    invocation = Invocation(
        command="list", args=(), config=CalibreConfig(), mode=ExecutionMode.JSON
    )

    assert invocation.requests_machine_output
    assert invocation.argv() == ["calibredb", "list", "--for-machine"]


def test_custom_executable() -> None:
    config = CalibreConfig(executable="/opt/calibre/calibredb")
    invocation = Invocation(command="add", args=("book.epub",), config=config)

    assert invocation.argv() == ["/opt/calibre/calibredb", "add", "book.epub"]


def test_args_order_is_preserved() -> None:
    args = ("--title", "T", "b.epub", "--duplicates", "a.epub")
    invocation = Invocation(command="add", args=args, config=CalibreConfig())

    assert invocation.argv()[2:] == list(args)
