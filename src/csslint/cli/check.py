"""CLI command: csslint check -- lint one or more stylesheets."""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import click

from csslint.analyzer import analyze
from csslint.config import ConfigError, LintConfig, load_config
from csslint.model.finding import Finding
from csslint.report import format_json, format_summary, format_text, has_errors
from csslint.rules.engine import resolve_checks

logger = logging.getLogger(__name__)


def collect_files(paths: tuple[str, ...]) -> list[Path]:
    """Expand directories into their ``*.css`` files, keeping argument order."""
    files: list[Path] = []
    seen: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        candidates = sorted(path.rglob("*.css")) if path.is_dir() else [path]
        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                files.append(candidate)
    return files


def _lint_file(path: Path, config: LintConfig) -> tuple[Finding, ...]:
    source = path.read_text(encoding="utf-8")
    result = analyze(source, config)
    if result.config_error is not None:  # pragma: no cover - validated up front
        raise result.config_error
    logger.debug("%s: %d finding(s)", path, len(result.findings))
    return result.findings


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON configuration file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=4, help="Files linted in parallel")
@click.option("--strict", is_flag=True, help="Exit non-zero on warnings too")
def check(
    paths: tuple[str, ...],
    config_file: str | None,
    output_format: str,
    jobs: int,
    strict: bool,
) -> None:
    """Lint CSS files (directories are searched for *.css).

    Exits with code 0 if no errors are found, 1 if there are errors (or any
    finding with --strict), and 2 if the configuration is invalid.
    """
    # Configuration
    try:
        config = load_config(config_file) if config_file else LintConfig()
        resolve_checks(config)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(2)

    files = collect_files(paths)

    # Lint, one task per file; results keep input order.
    results: dict[str, tuple[Finding, ...]] = {}
    failed = False
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        futures = [(path, pool.submit(_lint_file, path, config)) for path in files]
        for path, future in futures:
            try:
                results[str(path)] = future.result()
            except (OSError, UnicodeDecodeError) as exc:
                click.echo(f"Cannot read {path}: {exc}", err=True)
                failed = True

    all_findings = [f for findings in results.values() for f in findings]

    if output_format == "json":
        click.echo(format_json(results))
    elif not all_findings:
        click.echo(f"OK: {len(results)} file(s) checked (0 findings)")
    else:
        for path, findings in results.items():
            for line in format_text(findings, path):
                click.echo(line)
        click.echo()
        click.echo(format_summary(all_findings))

    if failed or has_errors(all_findings) or (strict and all_findings):
        sys.exit(1)
    sys.exit(0)
