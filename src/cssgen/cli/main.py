"""cssgen CLI entry point: Click group with subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from cssgen import __version__
from cssgen.config import CONFIG_FILENAME, load_config_file

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group(context_settings={"auto_envvar_prefix": "CSSGEN"})
@click.version_option(version=__version__, prog_name="cssgen")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILENAME,
    show_default=True,
    help="Config file to read (missing file is fine).",
)
@click.option("-v", "--verbose", is_flag=True, default=None, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, verbose: bool | None) -> None:
    """cssgen - generate a class registry from stylesheets and lint class usage."""
    try:
        payload = load_config_file(config_path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if verbose is None:
        verbose = bool(payload.get("verbose", False))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )
    ctx.obj = {"payload": payload, "config_path": config_path}


@click.command()
def version() -> None:
    """Print the cssgen version."""
    click.echo(f"cssgen {__version__}")


# Import and register subcommands
from cssgen.cli.generate import generate  # noqa: E402
from cssgen.cli.init import init  # noqa: E402
from cssgen.cli.lint import lint  # noqa: E402

cli.add_command(generate)
cli.add_command(lint)
cli.add_command(init)
cli.add_command(version)