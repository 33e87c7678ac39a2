"""Selector model: compound and complex selectors with specificity."""

from __future__ import annotations

from dataclasses import dataclass

Specificity = tuple[int, int, int]

ZERO_SPECIFICITY: Specificity = (0, 0, 0)

# Functional pseudo-classes weighted only by their arguments.
ARGUMENT_WEIGHTED_PSEUDO_CLASSES = frozenset({
    "is",
    "not",
    "has",
    "where",
    "matches",
    "-webkit-any",
    "-moz-any",
})


def add_specificity(a: Specificity, b: Specificity) -> Specificity:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


@dataclass(frozen=True)
class Compound:
    """A run of simple selectors with no combinator between them.

    ``element`` is the type selector (``"header"``, ``"*"``) or ``None``.
    ``argument_specificity`` is the extra weight contributed by functional
    pseudo-classes such as ``:not()`` and ``:is()``.
    """

    element: str | None = None
    ids: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    attributes: tuple[str, ...] = ()
    pseudo_classes: tuple[str, ...] = ()
    pseudo_elements: tuple[str, ...] = ()
    nesting: bool = False
    argument_specificity: Specificity = ZERO_SPECIFICITY

    @property
    def is_qualified(self) -> bool:
        """True when anything besides the type selector is present."""
        return bool(
            self.ids
            or self.classes
            or self.attributes
            or self.pseudo_classes
            or self.pseudo_elements
            or self.nesting
        )

    @property
    def specificity(self) -> Specificity:
        pseudo_classes = [p for p in self.pseudo_classes if p not in ARGUMENT_WEIGHTED_PSEUDO_CLASSES]
        own = (
            len(self.ids),
            len(self.classes) + len(self.attributes) + len(pseudo_classes),
            len(self.pseudo_elements) + (1 if self.element and self.element != "*" else 0),
        )
        return add_specificity(own, self.argument_specificity)


@dataclass(frozen=True)
class ComplexSelector:
    """Compounds joined by combinators (``" "``, ``">"``, ``"+"``, ``"~"``).

    ``combinators[i]`` joins ``compounds[i]`` and ``compounds[i + 1]``.
    """

    text: str
    compounds: tuple[Compound, ...]
    combinators: tuple[str, ...] = ()

    @property
    def is_bare_element(self) -> bool:
        """True for a standalone type selector such as ``nav``."""
        if len(self.compounds) != 1:
            return False
        compound = self.compounds[0]
        return compound.element is not None and not compound.is_qualified

    @property
    def element(self) -> str | None:
        """The type selector of a bare element selector, lowercased."""
        if not self.is_bare_element:
            return None
        return self.compounds[0].element.lower()  # type: ignore[union-attr]

    @property
    def specificity(self) -> Specificity:
        total = ZERO_SPECIFICITY
        for compound in self.compounds:
            total = add_specificity(total, compound.specificity)
        return total
