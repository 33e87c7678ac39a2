"""Convention checks for stylesheets.

Each check is a function taking a Stylesheet and a LintConfig and returning a
list of Finding objects describing any issues found.
"""

from __future__ import annotations

from csslint.config import LintConfig
from csslint.model.finding import Finding, Severity
from csslint.model.stylesheet import AtRule, Stylesheet
from csslint.parser.selectors import parse_selector

SELECTOR_KIND = "selector-kind"
FONT_FACE_ORDER = "font-face-order"
PROPERTY_ORDER = "property-order"

_DEFAULT_CONFIG = LintConfig()


# ---------------------------------------------------------------------------
# Selector rules
# ---------------------------------------------------------------------------


def check_selector_kind(
    stylesheet: Stylesheet, config: LintConfig = _DEFAULT_CONFIG
) -> list[Finding]:
    """Bare structural element selectors should be replaced by classes.

    One finding per rule block, naming every offending selector in its list.
    """
    findings: list[Finding] = []
    for block in stylesheet.rule_blocks():
        offending: list[str] = []
        for text in block.selectors:
            selector = parse_selector(text)
            if selector is None or not selector.is_bare_element:
                continue
            element = selector.element
            if element in config.global_exceptions or element not in config.structural_selectors:
                continue
            offending.append(element)  # type: ignore[arg-type]
        if not offending:
            continue
        quoted = ", ".join(f"'{e}'" for e in offending)
        findings.append(
            Finding(
                rule_id=SELECTOR_KIND,
                severity=Severity.WARNING,
                message=(
                    f"Bare element selector {quoted} is not reusable; "
                    "prefer a class-based selector."
                ),
                line=block.line,
                fix="Use a class such as " + ", ".join(f"'.site-{e}'" for e in offending) + ".",
            )
        )
    return findings


# ---------------------------------------------------------------------------
# Ordering rules
# ---------------------------------------------------------------------------


def check_font_face_order(
    stylesheet: Stylesheet, config: LintConfig = _DEFAULT_CONFIG
) -> list[Finding]:
    """@font-face at-rules should precede every other rule.

    At-rules named in ``config.font_face_exempt`` may come first.  Only the
    first offending node is reported.
    """
    last_font_face = -1
    for index, node in enumerate(stylesheet.nodes):
        if isinstance(node, AtRule) and node.is_font_face:
            last_font_face = index
    if last_font_face < 0:
        return []

    for node in stylesheet.nodes[:last_font_face]:
        if isinstance(node, AtRule) and (node.is_font_face or node.name.lower() in config.font_face_exempt):
            continue
        what = f"@{node.name}" if isinstance(node, AtRule) else f"Rule '{', '.join(node.selectors)}'"
        return [
            Finding(
                rule_id=FONT_FACE_ORDER,
                severity=Severity.WARNING,
                message=f"{what} appears before @font-face; @font-face should precede other rules.",
                line=node.line,
                fix="Move @font-face declarations to the top of the stylesheet.",
            )
        ]
    return []


def check_property_order(
    stylesheet: Stylesheet, config: LintConfig = _DEFAULT_CONFIG
) -> list[Finding]:
    """Declarations should follow the canonical property-group order.

    Every run of declarations is checked on its own: rule blocks and the
    declarations a nested group at-rule holds directly.  Unrecognized
    properties take the group of the declaration before them.
    """
    index = config.group_index()
    names = [group.name for group in config.property_groups]
    findings: list[Finding] = []
    for declarations in stylesheet.style_declarations():
        previous = 0
        highest = 0
        for declaration in declarations:
            group = index.get(declaration.name, previous)
            if group < highest:
                findings.append(
                    Finding(
                        rule_id=PROPERTY_ORDER,
                        severity=Severity.WARNING,
                        message=(
                            f"Property '{declaration.property}' ({names[group]}) should be "
                            f"declared before {names[highest]} properties."
                        ),
                        line=declaration.line,
                        fix=f"Move '{declaration.property}' up with the other {names[group]} properties.",
                    )
                )
            highest = max(highest, group)
            previous = group
    return findings


# ---------------------------------------------------------------------------
# Check registry
# ---------------------------------------------------------------------------

ALL_CHECKS = {
    SELECTOR_KIND: check_selector_kind,
    FONT_FACE_ORDER: check_font_face_order,
    PROPERTY_ORDER: check_property_order,
}
