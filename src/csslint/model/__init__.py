"""csslint model layer -- public type re-exports."""

from csslint.model.finding import INTERNAL_ERROR, STRUCTURAL_ERROR, Finding, Severity
from csslint.model.selector import ComplexSelector, Compound, Specificity
from csslint.model.stylesheet import AtRule, Declaration, Node, RuleBlock, Stylesheet

__all__ = [
    # stylesheet
    "Declaration",
    "RuleBlock",
    "AtRule",
    "Node",
    "Stylesheet",
    # selector
    "Compound",
    "ComplexSelector",
    "Specificity",
    # finding
    "Severity",
    "Finding",
    "STRUCTURAL_ERROR",
    "INTERNAL_ERROR",
]
