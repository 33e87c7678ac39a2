"""Stylesheet model: AtRule, RuleBlock, Declaration and Stylesheet dataclasses."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

from csslint.model.finding import Finding

# At-rules whose block holds descriptors rather than rules.
DECLARATION_AT_RULES = frozenset({
    "font-face",
    "page",
    "counter-style",
    "property",
    "font-palette-values",
    "viewport",
    "color-profile",
})


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair, trimmed of surrounding whitespace."""

    property: str
    value: str
    line: int

    @property
    def name(self) -> str:
        """Property name normalized for lookups."""
        return self.property.lower()


@dataclass(frozen=True)
class RuleBlock:
    """A selector list with its declarations.

    ``nested`` holds rule blocks written inside this one (CSS nesting).
    """

    selectors: tuple[str, ...]
    declarations: tuple[Declaration, ...]
    line: int
    nested: tuple["Node", ...] = ()


@dataclass(frozen=True)
class AtRule:
    """An ``@name prelude`` directive.

    ``block`` is ``None`` for statement at-rules (``@import url(a.css);``) and a
    tuple of child nodes for group at-rules (``@media``).  Declaration-bodied
    at-rules such as ``@font-face`` keep an empty ``block`` and carry their
    content in ``declarations``.  A group at-rule nested inside a rule block
    may carry both child nodes and its own declarations.
    """

    name: str
    prelude: str
    line: int
    block: tuple["Node", ...] | None = None
    declarations: tuple[Declaration, ...] = ()

    @property
    def is_font_face(self) -> bool:
        return self.name.lower() == "font-face"

    @property
    def holds_descriptors(self) -> bool:
        """True for at-rules like @font-face whose declarations are descriptors."""
        return self.name.lower() in DECLARATION_AT_RULES


Node = Union[AtRule, RuleBlock]


@dataclass(frozen=True)
class Stylesheet:
    """Top-level nodes in source order plus any structural findings from parsing."""

    nodes: tuple[Node, ...] = ()
    errors: tuple[Finding, ...] = field(default=())

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def walk(self) -> Iterator[Node]:
        """Yield every node depth-first in source order."""
        stack: list[Node] = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            yield node
            children = node.nested if isinstance(node, RuleBlock) else node.block
            if children:
                stack.extend(reversed(children))

    def rule_blocks(self) -> Iterator[RuleBlock]:
        """Yield every rule block, descending into group at-rules and nesting."""
        for node in self.walk():
            if isinstance(node, RuleBlock):
                yield node

    def style_declarations(self) -> Iterator[tuple[Declaration, ...]]:
        """Yield each run of style declarations in source order.

        Covers rule blocks and group at-rules nested inside them
        (``.a { @media print { color: red; } }``), but not descriptor
        at-rules such as ``@font-face``.
        """
        for node in self.walk():
            if isinstance(node, RuleBlock):
                yield node.declarations
            elif node.declarations and not node.holds_descriptors:
                yield node.declarations
