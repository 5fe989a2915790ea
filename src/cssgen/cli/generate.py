"""CLI command: cssgen generate -- write the class registry module."""

from __future__ import annotations

from pathlib import Path

import click

from cssgen.cli.lint import run_lint
from cssgen.config import build_generate_config, build_lint_config
from cssgen.errors import CssgenError
from cssgen.runner import generate as run_generate


@click.command()
@click.option(
    "--source",
    type=click.Path(file_okay=False, path_type=Path),
    help="Stylesheet directory.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for styles_gen.py.",
)
@click.option(
    "--include",
    "includes",
    multiple=True,
    help="Glob for stylesheets, relative to --source (repeatable).",
)
@click.option("--package", help="Registry name used in suggestions (ui.Btn).")
@click.option(
    "--format",
    "comment_format",
    type=click.Choice(["markdown", "compact"]),
    help="Comment style.",
)
@click.option("--property-limit", type=int, help="Max properties shown per category (0 = all).")
@click.option("--show-internal/--hide-internal", default=None, help="Show -webkit-* properties.")
@click.option("--extract-intent/--no-extract-intent", default=None, help="Read @intent comments.")
@click.option("--infer-layer/--no-infer-layer", default=None, help="Infer layers from file paths.")
@click.option("--lint", "then_lint", is_flag=True, help="Run the linter after generating.")
@click.pass_obj
def generate(
    obj: dict,
    source: Path | None,
    output_dir: Path | None,
    includes: tuple[str, ...],
    package: str | None,
    comment_format: str | None,
    property_limit: int | None,
    show_internal: bool | None,
    extract_intent: bool | None,
    infer_layer: bool | None,
    then_lint: bool,
) -> None:
    """Generate the class registry from stylesheets."""
    payload = obj["payload"]
    try:
        config = build_generate_config(
            payload,
            source_dir=source,
            output_dir=output_dir,
            includes=includes or None,
            package=package,
            comment_format=comment_format,
            property_limit=property_limit,
            show_internal=show_internal,
            extract_intent=extract_intent,
            infer_layer=infer_layer,
        )
        result = run_generate(config)
    except (CssgenError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    for warning in result.warnings:
        click.echo(f"warning: {warning}", err=True)
    click.echo(
        f"Generated {result.classes_generated} constants from {result.files_scanned} "
        f"file(s) -> {result.registry_path}"
    )
    if result.intents_extracted:
        click.echo(f"Extracted {result.intents_extracted} @intent annotation(s)")

    if then_lint:
        try:
            lint_config = build_lint_config(
                payload,
                registry_path=config.registry_path,
                package=config.package,
            )
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        run_lint(lint_config)
