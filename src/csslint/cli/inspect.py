"""CLI command: csslint inspect -- display stylesheet structure."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csslint.config import ConfigError, LintConfig, load_config
from csslint.model.stylesheet import AtRule, Declaration, Node
from csslint.parser import parse, parse_selector


def _declaration_lines(declarations: tuple[Declaration, ...], config: LintConfig, indent: str) -> list[str]:
    index = config.group_index()
    lines = []
    for decl in declarations:
        group = index.get(decl.name)
        group_name = config.property_groups[group].name if group is not None else "-"
        lines.append(f"{indent}{decl.line}: {decl.property}: {decl.value}  [{group_name}]")
    return lines


def describe(nodes: tuple[Node, ...], config: LintConfig, depth: int = 0) -> list[str]:
    """Render nodes as indented lines of text."""
    indent = "  " * depth
    lines: list[str] = []
    for node in nodes:
        if isinstance(node, AtRule):
            prelude = f" {node.prelude}" if node.prelude else ""
            lines.append(f"{indent}{node.line}: @{node.name}{prelude}")
            lines.extend(_declaration_lines(node.declarations, config, indent + "  "))
            if node.block:
                lines.extend(describe(node.block, config, depth + 1))
            continue
        lines.append(f"{indent}{node.line}: rule")
        for text in node.selectors:
            selector = parse_selector(text)
            weight = ",".join(str(n) for n in selector.specificity) if selector else "?"
            lines.append(f"{indent}  selector {text}  (specificity {weight})")
        lines.extend(_declaration_lines(node.declarations, config, indent + "  "))
        if node.nested:
            lines.extend(describe(node.nested, config, depth + 1))
    return lines


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON configuration file (for property groups)",
)
def inspect(cssfile: str, config_file: str | None) -> None:
    """Parse a CSS file and display its structure.

    Shows at-rules, rule blocks with selector specificity, and declarations
    with their property group.
    """
    try:
        config = load_config(config_file) if config_file else LintConfig()
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(2)

    css_path = Path(cssfile)
    try:
        text = css_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Cannot read {css_path}: {exc}", err=True)
        sys.exit(1)
    stylesheet = parse(text)

    click.echo(f"Stylesheet: {css_path.name}")
    click.echo(f"Nodes: {len(stylesheet)}")
    click.echo()
    for line in describe(stylesheet.nodes, config):
        click.echo(line)
    for error in stylesheet.errors:
        click.echo()
        click.echo(f"Structural error at line {error.line}: {error.message}")
