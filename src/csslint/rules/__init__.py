from csslint.rules.checks import (
    ALL_CHECKS,
    FONT_FACE_ORDER,
    PROPERTY_ORDER,
    SELECTOR_KIND,
    check_font_face_order,
    check_property_order,
    check_selector_kind,
)
from csslint.rules.engine import CheckFunc, dedupe, resolve_checks, run_checks

__all__ = [
    "ALL_CHECKS",
    "SELECTOR_KIND",
    "FONT_FACE_ORDER",
    "PROPERTY_ORDER",
    "check_selector_kind",
    "check_font_face_order",
    "check_property_order",
    "CheckFunc",
    "dedupe",
    "resolve_checks",
    "run_checks",
]
