"""Lark Transformer that converts a selector parse tree into a ComplexSelector."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from csslint.model.selector import ZERO_SPECIFICITY, ComplexSelector, Compound, Specificity
from csslint.parser.scanner import split_top_level

__all__ = ["parse_selector", "parse_selector_list"]

GRAMMAR_PATH = Path(__file__).parent / "selector.lark"

# Pseudo-classes whose weight is that of their most specific argument.
_MATCHING_PSEUDO_CLASSES = frozenset({"is", "not", "has", "matches", "-webkit-any", "-moz-any"})

# Pseudo-elements that may still be written with a single colon.
_LEGACY_PSEUDO_ELEMENTS = frozenset({"before", "after", "first-line", "first-letter"})


def _argument_specificity(name: str, argument: str) -> Specificity:
    """Extra specificity a functional pseudo-class gets from its argument."""
    if name in _MATCHING_PSEUDO_CLASSES:
        selectors = parse_selector_list(argument)
        if not selectors or any(s is None for s in selectors):
            raise ValueError(f"Unparseable argument to :{name}(): {argument!r}")
        return max(s.specificity for s in selectors)  # type: ignore[union-attr]
    if name in ("nth-child", "nth-last-child") and " of " in f" {argument} ":
        _, _, tail = argument.partition(" of ")
        return _argument_specificity("is", tail)
    return ZERO_SPECIFICITY


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark selector tree into model objects."""

    # ---- simple selectors ----

    def element(self, items: list[Token]) -> tuple[str, str]:
        return ("element", str(items[0]))

    def id_selector(self, items: list[Token]) -> tuple[str, str]:
        return ("id", str(items[0]))

    def class_selector(self, items: list[Token]) -> tuple[str, str]:
        return ("class", str(items[0]))

    def attribute_selector(self, items: list[Token]) -> tuple[str, str]:
        return ("attribute", str(items[0]).strip())

    def nesting(self, items: list[Token]) -> tuple[str, str]:
        return ("nesting", "&")

    def pseudo_element(self, items: list[Token]) -> tuple[str, str]:
        return ("pseudo_element", str(items[0]).rstrip("(").lower())

    def pseudo_class(self, items: list[Token]) -> tuple[str, ...]:
        name = str(items[0]).rstrip("(").lower()
        if name in _LEGACY_PSEUDO_ELEMENTS:
            return ("pseudo_element", name)
        argument = str(items[1]) if len(items) > 1 else ""
        return ("pseudo_class", name, _argument_specificity(name, argument))  # type: ignore[return-value]

    # ---- structural ----

    def combinator(self, items: list[Token]) -> str:
        return str(items[0]) if items else " "

    def compound(self, items: list[tuple]) -> Compound:
        parts: dict[str, list[str]] = {
            "id": [],
            "class": [],
            "attribute": [],
            "pseudo_class": [],
            "pseudo_element": [],
        }
        element: str | None = None
        nesting = False
        extra = ZERO_SPECIFICITY
        for item in items:
            kind, value = item[0], item[1]
            if kind == "element":
                element = value
            elif kind == "nesting":
                nesting = True
            else:
                parts[kind].append(value)
                if kind == "pseudo_class":
                    extra = (extra[0] + item[2][0], extra[1] + item[2][1], extra[2] + item[2][2])
        return Compound(
            element=element,
            ids=tuple(parts["id"]),
            classes=tuple(parts["class"]),
            attributes=tuple(parts["attribute"]),
            pseudo_classes=tuple(parts["pseudo_class"]),
            pseudo_elements=tuple(parts["pseudo_element"]),
            nesting=nesting,
            argument_specificity=extra,
        )

    def complex(self, items: list[object]) -> tuple[tuple[Compound, ...], tuple[str, ...]]:
        compounds = tuple(i for i in items if isinstance(i, Compound))
        combinators = tuple(i for i in items if isinstance(i, str))
        return compounds, combinators


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="earley", start="start")


@lru_cache(maxsize=4096)
def parse_selector(text: str) -> ComplexSelector | None:
    """Parse one complex selector.

    Returns ``None`` for text the grammar does not cover (keyframe offsets such
    as ``50%``, namespaced selectors, deeply nested functional arguments).
    """
    text = text.strip()
    if not text:
        return None
    try:
        tree = _parser().parse(text)
        compounds, combinators = SelectorTransformer().transform(tree)
    except LarkError:
        return None
    return ComplexSelector(text=text, compounds=compounds, combinators=combinators)


def parse_selector_list(text: str) -> tuple[ComplexSelector | None, ...]:
    """Parse a comma-separated selector list; unparseable entries are ``None``."""
    return tuple(parse_selector(part) for part in split_top_level(text))
