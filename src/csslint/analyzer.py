"""Analysis entry point: parse, check and report in one call."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from csslint.config import ConfigError, LintConfig
from csslint.model.finding import Finding
from csslint.model.stylesheet import Stylesheet
from csslint.parser import parse
from csslint.report import report
from csslint.rules.engine import CheckFunc, dedupe, resolve_checks, run_checks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis run.

    Either ``config_error`` is set and there is no report, or ``findings``
    holds the ordered report and ``stylesheet`` the parsed model.
    """

    findings: tuple[Finding, ...] = ()
    stylesheet: Stylesheet | None = None
    config_error: ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.config_error is None


def analyze(
    text: str,
    config: LintConfig | Mapping[str, Any] | None = None,
    extra_checks: dict[str, CheckFunc] | None = None,
) -> AnalysisResult:
    """Lint stylesheet *text* and return an ordered report.

    Configuration problems are returned as ``AnalysisResult.config_error``
    before any parsing happens; nothing is raised.
    """
    try:
        if config is None:
            config = LintConfig()
        elif not isinstance(config, LintConfig):
            config = LintConfig.from_dict(config)
        resolve_checks(config, extra_checks)
    except ConfigError as exc:
        logger.debug("Rejected configuration: %s", exc)
        return AnalysisResult(config_error=exc)

    stylesheet = parse(text)
    findings = dedupe(list(stylesheet.errors) + run_checks(stylesheet, config, extra_checks))
    return AnalysisResult(findings=report(findings), stylesheet=stylesheet)
