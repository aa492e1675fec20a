"""Configuration for calibredb invocations.

CalibreConfig is an explicit, immutable value passed to every call. There is
no module-level mutable default: two libraries (or two test suites) in one
process each carry their own configuration.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path

DEFAULT_EXECUTABLE = "calibredb"


@dataclass(frozen=True)
class CalibreConfig:
    """Immutable options shared by all calibredb commands.

    Attributes:
        library_path: Library directory passed as --library-path. When None,
            calibredb resolves its own default library.
        executable: Name or path of the calibredb binary to launch.
        for_machine: Request machine-readable (JSON) output with --for-machine.
        debug: Log every command line at INFO instead of DEBUG.
    """

    library_path: Path | str | None = None
    executable: str = DEFAULT_EXECUTABLE
    for_machine: bool = False
    debug: bool = False

    @staticmethod
    def from_toml(path: Path) -> "CalibreConfig":
        """Load configuration from the [calibre] table of a TOML file.

        Recognized keys: library_path, executable, debug. Missing keys keep
        their defaults.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not valid TOML or a key has the wrong type
        """
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

        section = data.get("calibre", {})
        if not isinstance(section, dict):
            raise ValueError(f"[calibre] in {path} must be a table")

        library_path = section.get("library_path")
        if library_path is not None and not isinstance(library_path, str):
            raise ValueError(f"calibre.library_path in {path} must be a string")

        executable = section.get("executable", DEFAULT_EXECUTABLE)
        if not isinstance(executable, str) or not executable:
            raise ValueError(f"calibre.executable in {path} must be a non-empty string")

        debug = section.get("debug", False)
        if not isinstance(debug, bool):
            raise ValueError(f"calibre.debug in {path} must be a boolean")

        return CalibreConfig(
            library_path=Path(library_path).expanduser() if library_path else None,
            executable=executable,
            debug=debug,
        )
