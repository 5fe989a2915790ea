"""CLI command: cssgen lint -- check class usage against the registry."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cssgen.config import OUTPUT_FORMATS, REGISTRY_FILENAME, LintConfig, build_lint_config
from cssgen.errors import CssgenError
from cssgen.report import write_report
from cssgen.runner import gate_failure
from cssgen.runner import lint as run_lint_pipeline


def run_lint(config: LintConfig) -> None:
    """Run the linter, print the report and exit 1 when the gate fails."""
    try:
        result = run_lint_pipeline(config)
    except CssgenError as e:
        raise click.ClickException(str(e)) from e

    if not config.quiet:
        write_report(result, config)

    reason = gate_failure(result, config)
    if reason is not None:
        if not config.quiet:
            click.echo(f"\nFAILED: {reason}", err=True)
        sys.exit(1)


@click.command()
@click.option("--paths", multiple=True, help="Glob of files to scan (repeatable).")
@click.option("--exclude", multiple=True, help="Glob of files to skip (repeatable).")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory globs are relative to.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory containing styles_gen.py.",
)
@click.option("--package", help="Registry name used in source code (ui.Btn).")
@click.option("--strict/--no-strict", default=None, help="Fail on any issue.")
@click.option("--threshold", type=float, help="Minimum adoption percentage in strict mode.")
@click.option("--output-format", type=click.Choice(OUTPUT_FORMATS), help="Report format.")
@click.option("--max-issues-per-linter", type=int, help="Max issues per linter (0 = all).")
@click.option("--max-same-issues", type=int, help="Max repeats of one message (0 = all).")
@click.option("--print-lines/--no-print-lines", default=None, help="Show source lines.")
@click.option(
    "--print-linter-name/--no-print-linter-name",
    default=None,
    help="Show the (csslint) suffix.",
)
@click.option("--color/--no-color", default=None, help="Force colored output on or off.")
@click.option("-q", "--quiet", is_flag=True, default=None, help="No output; exit code only.")
@click.pass_obj
def lint(
    obj: dict,
    paths: tuple[str, ...],
    exclude: tuple[str, ...],
    root: Path | None,
    output_dir: Path | None,
    package: str | None,
    strict: bool | None,
    threshold: float | None,
    output_format: str | None,
    max_issues_per_linter: int | None,
    max_same_issues: int | None,
    print_lines: bool | None,
    print_linter_name: bool | None,
    color: bool | None,
    quiet: bool | None,
) -> None:
    """Lint class references in source files.

    Exits with code 1 when an invalid class is referenced, or in strict
    mode when any issue is found or adoption is below --threshold.
    """
    try:
        config = build_lint_config(
            obj["payload"],
            paths=paths or None,
            exclude=exclude or None,
            root=root,
            registry_path=output_dir / REGISTRY_FILENAME if output_dir else None,
            package=package,
            strict=strict,
            threshold=threshold,
            output_format=output_format,
            max_issues_per_linter=max_issues_per_linter,
            max_same_issues=max_same_issues,
            print_lines=print_lines,
            print_linter_name=print_linter_name,
            color=color,
            quiet=quiet,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    run_lint(config)
