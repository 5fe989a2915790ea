"""Lint report rendering in the supported output formats."""

from __future__ import annotations

import os
import sys
from typing import TextIO

import click

from cssgen.config import LintConfig
from cssgen.lint.analyzer import LintResult
from cssgen.report.json_report import build_report, render_json
from cssgen.report.markdown import render_markdown
from cssgen.report.text import (
    render_issue_summary,
    render_issues,
    render_statistics,
)

__all__ = ["build_report", "render_report", "should_use_color", "write_report"]


def should_use_color(config: LintConfig, stream: TextIO | None = None) -> bool:
    """Explicit setting first, then FORCE_COLOR, GitHub Actions, and a TTY."""
    if config.color is not None:
        return config.color
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("GITHUB_ACTIONS") == "true":
        return True
    stream = stream or sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)())


def render_report(result: LintResult, config: LintConfig, use_color: bool = False) -> str:
    """Render *result* in ``config.output_format``."""
    fmt = config.output_format
    if fmt == "json":
        return render_json(result)
    if fmt == "markdown":
        return render_markdown(result)

    parts: list[str] = []
    if fmt in ("issues", "full"):
        issues = render_issues(
            result.findings,
            print_lines=config.print_lines,
            print_linter_name=config.print_linter_name,
            use_color=use_color,
        )
        if issues:
            parts.append(issues)
        parts.append(render_issue_summary(result, use_color))
    if fmt in ("summary", "full"):
        parts.append(render_statistics(result, use_color))
    return "\n".join(parts)


def write_report(result: LintResult, config: LintConfig, stream: TextIO | None = None) -> None:
    use_color = should_use_color(config, stream)
    click.echo(render_report(result, config, use_color), file=stream, color=use_color)
