"""Output routing for CLI commands.

Human-facing messages go to stderr so stdout stays clean for machine output
(e.g. `calibre-library list --format json | jq`).
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a message for humans to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Write data meant to be consumed by other programs to stdout."""
    click.echo(message, nl=nl)
