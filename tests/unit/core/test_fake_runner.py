"""Tests for FakeCalibreRunner and the shared exit handling."""

import subprocess

import pytest

from calibre_library.core.config import CalibreConfig
from calibre_library.core.errors import (
    NO_OUTPUT_PLACEHOLDER,
    CalibreError,
    CalibreNotFoundError,
    LibraryNotFoundError,
)
from calibre_library.core.invocation import ExecutionMode, Invocation
from calibre_library.core.runner.abc import select_error_output
from calibre_library.core.runner.fake import FakeCalibreRunner, FakeResult


def _invocation(command: str = "list") -> Invocation:
    return Invocation(command=command, args=(), config=CalibreConfig())


def test_select_error_output_prefers_stderr() -> None:
    assert select_error_output("out", "err") == "err"


def test_select_error_output_falls_back_to_stdout() -> None:
    assert select_error_output("out", "  \n") == "out"


def test_select_error_output_placeholder_when_both_empty() -> None:
    assert select_error_output("", "") == NO_OUTPUT_PLACEHOLDER


async def test_results_are_consumed_in_order_then_default() -> None:
    runner = FakeCalibreRunner(
        results={"list": [FakeResult(stdout="first"), FakeResult(stdout="second")]},
        default_result=FakeResult(stdout="default"),
    )

    outputs = [await runner.run(_invocation()) for _ in range(3)]

    assert outputs == ["first", "second", "default"]
    assert len(runner.invocations) == 3


async def test_failure_is_classified_and_chained() -> None:
    runner = FakeCalibreRunner(
        results={"list": [FakeResult(stderr="Library not found at path: /nope", returncode=1)]}
    )

    with pytest.raises(LibraryNotFoundError) as exc_info:
        await runner.run(_invocation())

    assert exc_info.value.library_path == "/nope"
    cause = exc_info.value.__cause__
    assert isinstance(cause, subprocess.CalledProcessError)
    assert cause.returncode == 1


async def test_failure_without_output_uses_placeholder() -> None:
    runner = FakeCalibreRunner(default_result=FakeResult(returncode=2))

    with pytest.raises(CalibreError) as exc_info:
        await runner.run(_invocation("remove"))

    assert exc_info.value.output == NO_OUTPUT_PLACEHOLDER
    assert exc_info.value.command == "remove"


async def test_missing_executable() -> None:
    runner = FakeCalibreRunner(executable_available=False)

    with pytest.raises(CalibreNotFoundError):
        await runner.run(_invocation())


async def test_stream_replays_output() -> None:
    runner = FakeCalibreRunner(
        default_result=FakeResult(stdout="line one\nline two\n", stderr="progress\n")
    )
    invocation = Invocation(
        command="add", args=("a.epub",), config=CalibreConfig(), mode=ExecutionMode.STREAM
    )

    process = await runner.stream(invocation)
    lines = [line async for line in process.iter_lines()]
    stderr = await process.wait_checked()

    assert lines == ["line one", "line two"]
    assert stderr == "progress\n"
    assert process.returncode == 0
    assert runner.streams == [process]


async def test_stream_wait_checked_raises_classified_error() -> None:
    runner = FakeCalibreRunner(
        default_result=FakeResult(stderr="calibredb: not found", returncode=127)
    )

    process = await runner.stream(_invocation("add"))

    with pytest.raises(CalibreNotFoundError):
        await process.wait_checked()


async def test_stream_terminate_sets_returncode() -> None:
    runner = FakeCalibreRunner()

    process = await runner.stream(_invocation("add"))
    process.terminate()

    assert process.terminated
    assert await process.wait() == -15
