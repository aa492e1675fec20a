import logging
import os
from pathlib import Path

import click

from calibre_library.cli.commands.add_cmd import add_cmd
from calibre_library.cli.commands.list_cmd import list_cmd
from calibre_library.cli.commands.remove_cmd import remove_cmd
from calibre_library.core.config import DEFAULT_EXECUTABLE, CalibreConfig
from calibre_library.library import CalibreLibrary

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "CALIBRE_LIBRARY_DEBUG"


def configure_logging(debug: bool) -> None:
    if debug or os.environ.get(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


def build_config(
    config_path: Path | None, library_path: Path | None, executable: str | None, debug: bool
) -> CalibreConfig:
    """Combine the optional TOML file with command-line overrides."""
    config = CalibreConfig.from_toml(config_path) if config_path else CalibreConfig()
    return CalibreConfig(
        library_path=library_path or config.library_path,
        executable=executable or config.executable,
        debug=debug or config.debug,
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="calibre-library")
@click.option(
    "--library-path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Calibre library directory (default: calibre's configured library).",
)
@click.option("--calibredb", "executable", help=f"calibredb executable [{DEFAULT_EXECUTABLE}].")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML file with a [calibre] table.",
)
@click.option("--debug", is_flag=True, help="Log every calibredb command line.")
@click.pass_context
def cli(
    ctx: click.Context,
    library_path: Path | None,
    executable: str | None,
    config_path: Path | None,
    debug: bool,
) -> None:
    """Manage a calibre library through calibredb."""
    # Only create the library if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            config = build_config(config_path, library_path, executable, debug)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--config") from e
        ctx.obj = CalibreLibrary(config)
    configure_logging(debug or ctx.obj.config.debug)


cli.add_command(list_cmd)
cli.add_command(add_cmd)
cli.add_command(remove_cmd)


def main() -> None:
    """CLI entry point used by the `calibre-library` console script."""
    cli()
