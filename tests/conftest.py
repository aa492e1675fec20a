"""Pytest configuration and fixtures."""

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from calibre_library.core.config import CalibreConfig
from calibre_library.core.runner.fake import FakeCalibreRunner, FakeResult
from calibre_library.library import CalibreLibrary


@pytest.fixture
def fake_runner() -> FakeCalibreRunner:
    """Create a FakeCalibreRunner whose calls succeed with an empty JSON array."""
    return FakeCalibreRunner(default_result=FakeResult(stdout="[]"))


@pytest.fixture
def config() -> CalibreConfig:
    return CalibreConfig(library_path="/books")


@pytest.fixture
def library(config: CalibreConfig, fake_runner: FakeCalibreRunner) -> CalibreLibrary:
    """Create a CalibreLibrary wired to the fake runner."""
    return CalibreLibrary(config, fake_runner)


@pytest.fixture
def make_executable(tmp_path: Path) -> Callable[[str, str], str]:
    """Factory writing a /bin/sh script that stands in for calibredb.

    Returns the absolute path of the script, usable as CalibreConfig.executable.
    """

    def _make(name: str, body: str) -> str:
        script = tmp_path / name
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _make
