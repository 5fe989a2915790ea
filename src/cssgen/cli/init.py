"""CLI command: cssgen init -- write a default config file."""

from __future__ import annotations

from pathlib import Path

import click

from cssgen.config import DEFAULT_CONFIG_TOML


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_obj
def init(obj: dict, force: bool) -> None:
    """Write a commented default config file."""
    path: Path = obj["config_path"]
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    path.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    click.echo(f"Wrote {path}")
