"""Error boundary handling for CLI commands.

Catches the well-known failures of the library at command entry points and
displays a clean error message instead of a stack trace.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from calibre_library.cli.output import user_output
from calibre_library.core.errors import CalibreError, CalibreOptionsError

T = TypeVar("T", bound=Callable[..., Any])


def cli_error_boundary(func: T) -> T:
    """Decorator turning classified calibredb errors into exit code 1.

    Catches:
        - CalibreError (and every classified subtype): calibredb failed
        - CalibreOptionsError: invalid arguments, rejected before running calibredb

    All other exceptions bubble up normally with full stack traces.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except CalibreError as e:
            user_output(click.style("Error: ", fg="red") + e.message)
            if e.output:
                user_output(click.style(e.output.strip(), dim=True))
            raise SystemExit(1) from None
        except CalibreOptionsError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
