"""The two pipelines: stylesheets to registry, and source tree to findings.

Both are plain functions of their config. Soft failures (unreadable or
malformed files, merge conflicts) end up in the result's warnings; only a
missing registry or an invalid glob pattern raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cssgen.analysis.lineage import AnalysisResult, analyze
from cssgen.config import GenerateConfig, LintConfig
from cssgen.lint.analyzer import LintResult, analyze_usage, limit_findings
from cssgen.lint.lookup import build_lookup
from cssgen.registry.emit import write_registry
from cssgen.registry.load import load_registry
from cssgen.scanner.discovery import discover_files
from cssgen.scanner.matchers import build_matchers
from cssgen.scanner.scan import scan_files
from cssgen.stylesheet.layers import infer_layer
from cssgen.stylesheet.parser import ParseResult, parse_stylesheet

__all__ = ["GenerateResult", "gate_failure", "generate", "lint", "parse_files"]

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    analysis: AnalysisResult
    registry_path: Path
    files_scanned: int = 0
    classes_generated: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def intents_extracted(self) -> int:
        return self.analysis.intents_extracted


def parse_files(
    paths: list[Path], config: GenerateConfig
) -> tuple[list[ParseResult], list[str]]:
    """Parse each stylesheet; unreadable files become warnings."""
    results: list[ParseResult] = []
    warnings: list[str] = []
    for path in paths:
        try:
            name = path.relative_to(config.source_dir).as_posix()
        except ValueError:
            name = path.as_posix()
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            message = f"Failed to read {name}: {e}"
            logger.warning(message)
            warnings.append(message)
            continue
        logger.debug("Parsing %s", name)
        layer_hint = infer_layer(name) if config.infer_layer else ""
        results.append(
            parse_stylesheet(
                source,
                filename=name,
                layer_hint=layer_hint,
                extract_intents=config.extract_intent,
            )
        )
    return results, warnings


def generate(config: GenerateConfig) -> GenerateResult:
    """Parse the stylesheets, analyze them and write the registry module."""
    paths = discover_files(
        config.source_dir, config.includes, skip_generated=False, use_gitignore=False
    )
    logger.debug("Found %d stylesheets under %s", len(paths), config.source_dir)

    results, warnings = parse_files(paths, config)
    analysis = analyze(results)
    rendered = write_registry(analysis, config)

    public = len(analysis.public_records())
    logger.debug(
        "Generated %d constants (%d internal classes filtered)",
        rendered.constants,
        len(analysis.records) - public,
    )
    return GenerateResult(
        analysis=analysis,
        registry_path=config.registry_path,
        files_scanned=len(paths),
        classes_generated=rendered.constants,
        warnings=warnings + analysis.warnings + rendered.skipped,
    )


def lint(config: LintConfig) -> LintResult:
    """Scan the configured files and check every class reference."""
    registry = load_registry(config.registry_path)
    lookup = build_lookup(registry.constants, registry.known_classes)

    paths = discover_files(config.root, config.paths, config.exclude)
    logger.debug("Scanning %d files", len(paths))
    scan = scan_files(paths, build_matchers(config.package), root=config.root)

    result = analyze_usage(scan.references, lookup, package=config.package)
    result.warnings.extend(scan.warnings)
    result.findings, result.truncated = limit_findings(
        result.findings, config.max_issues_per_linter, config.max_same_issues
    )
    return result


def gate_failure(result: LintResult, config: LintConfig) -> str | None:
    """Why the run should fail, or None when it passes.

    By default only invalid classes fail. Strict mode fails on any finding,
    and on adoption below the configured threshold.
    """
    stats = result.stats
    if config.strict:
        total = stats.error_count + stats.warning_count
        if total:
            return f"strict mode: {total} issue(s) found"
        if config.threshold > 0 and stats.usage_percentage < config.threshold:
            return (
                f"strict mode: usage percentage {stats.usage_percentage:.1f}% "
                f"is below threshold {config.threshold:.1f}%"
            )
        return None
    if stats.error_count:
        return f"{stats.error_count} invalid class reference(s)"
    return None
