"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from calibre_library.cli.output import machine_output
from calibre_library.core.errors import CalibreError


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Error message
        error_type: Error class name (e.g., "BookNotFoundError")
        command: calibredb subcommand that failed, if any
        output: Raw calibredb output attached to the error, if any
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str
    command: str | None = None
    output: str | None = None
    exit_code: int = Field(default=1, ge=0, le=255)


def _serialize_for_json(obj: Any) -> Any:
    """Recursively serialize special types for JSON.

    Pydantic models are dumped in JSON mode; Path objects become strings.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", exclude_none=True)
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, dict):
        return {key: _serialize_for_json(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize_for_json(item) for item in obj]
    return obj


def emit_json(data: Any) -> None:
    """Output JSON data to stdout for machine consumption."""
    serialized = _serialize_for_json(data)
    machine_output(json.dumps(serialized, indent=2))


def emit_json_error(
    error: str,
    error_type: str,
    command: str | None = None,
    output: str | None = None,
    exit_code: int = 1,
) -> None:
    """Output error as JSON and exit.

    Raises:
        SystemExit: Always raises to terminate with specified exit code
    """
    error_response = ErrorResponse(
        error=error,
        error_type=error_type,
        command=command,
        output=output,
        exit_code=exit_code,
    )
    emit_json(error_response)
    raise SystemExit(exit_code)


def json_error_boundary(func: Callable) -> Callable:
    """Decorator to catch exceptions and emit JSON errors when in JSON mode.

    Inspects function kwargs for 'output_format'. If it is "json", exceptions
    are reported as an ErrorResponse on stdout. Otherwise they bubble up for
    normal error handling.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except Exception as e:
            if kwargs.get("output_format", "text") != "json":
                raise
            if isinstance(e, CalibreError):
                emit_json_error(
                    e.message,
                    type(e).__name__,
                    command=e.command or None,
                    output=e.output or None,
                )
            else:
                emit_json_error(str(e), type(e).__name__)

    return wrapper
