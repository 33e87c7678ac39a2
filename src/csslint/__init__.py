"""csslint: a CSS rule-order and convention linter."""

__version__ = "0.1.0"

from csslint.analyzer import AnalysisResult, analyze  # noqa: E402
from csslint.config import ConfigError, LintConfig, PropertyGroup, load_config  # noqa: E402
from csslint.model import (  # noqa: E402
    AtRule,
    Declaration,
    Finding,
    RuleBlock,
    Severity,
    Stylesheet,
)
from csslint.parser import parse, parse_selector  # noqa: E402
from csslint.report import report  # noqa: E402
from csslint.rules import run_checks  # noqa: E402

__all__ = [
    "__version__",
    "analyze",
    "AnalysisResult",
    "parse",
    "parse_selector",
    "report",
    "run_checks",
    "LintConfig",
    "PropertyGroup",
    "ConfigError",
    "load_config",
    "Stylesheet",
    "AtRule",
    "RuleBlock",
    "Declaration",
    "Finding",
    "Severity",
]
