"""calibredb process runners."""

from calibre_library.core.runner.abc import CalibreRunner, StreamingProcess
from calibre_library.core.runner.fake import FakeCalibreRunner, FakeResult
from calibre_library.core.runner.real import RealCalibreRunner

__all__ = [
    "CalibreRunner",
    "FakeCalibreRunner",
    "FakeResult",
    "RealCalibreRunner",
    "StreamingProcess",
]
