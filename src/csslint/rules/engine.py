"""Rule engine: runs every enabled check and collects findings."""

from __future__ import annotations

import logging
from typing import Callable

from csslint.config import ConfigError, LintConfig
from csslint.model.finding import INTERNAL_ERROR, Finding, Severity
from csslint.model.stylesheet import Stylesheet
from csslint.rules.checks import ALL_CHECKS

logger = logging.getLogger(__name__)

CheckFunc = Callable[[Stylesheet, LintConfig], list[Finding]]


def resolve_checks(
    config: LintConfig, extra_checks: dict[str, CheckFunc] | None = None
) -> list[tuple[str, CheckFunc]]:
    """Return the ``(rule_id, check)`` pairs to run, in their fixed order.

    Raises :class:`ConfigError` if ``disabled_rules`` names an unknown check.
    """
    checks: dict[str, CheckFunc] = dict(ALL_CHECKS)
    if extra_checks:
        checks.update(extra_checks)
    unknown = sorted(config.disabled_rules - set(checks))
    if unknown:
        raise ConfigError(
            f"Unknown rule(s) in disabled_rules: {', '.join(unknown)}. "
            f"Known rules: {', '.join(checks)}."
        )
    return [(rule_id, check) for rule_id, check in checks.items() if rule_id not in config.disabled_rules]


def run_checks(
    stylesheet: Stylesheet,
    config: LintConfig | None = None,
    extra_checks: dict[str, CheckFunc] | None = None,
) -> list[Finding]:
    """Run all enabled checks against *stylesheet*.

    A check that raises does not stop the others; its failure becomes an
    ``internal-error:<rule>`` finding.  Findings repeating an earlier
    ``(rule_id, line)`` pair are dropped.
    """
    config = config or LintConfig()
    findings: list[Finding] = []
    for rule_id, check in resolve_checks(config, extra_checks):
        try:
            produced = check(stylesheet, config)
        except Exception as exc:
            logger.exception("Check %s failed", rule_id)
            produced = [
                Finding(
                    rule_id=f"{INTERNAL_ERROR}:{rule_id}",
                    severity=Severity.ERROR,
                    message=f"Check '{rule_id}' failed: {exc}",
                    line=0,
                )
            ]
        logger.debug("Check %s produced %d finding(s)", rule_id, len(produced))
        findings.extend(produced)
    return dedupe(findings)


def dedupe(findings: list[Finding]) -> list[Finding]:
    """Drop findings whose ``(rule_id, line)`` was already seen, keeping order."""
    seen: set[tuple[str, int]] = set()
    unique: list[Finding] = []
    for finding in findings:
        key = (finding.rule_id, finding.line)
        if key in seen:
            continue
        seen.add(key)
        unique.append(finding)
    return unique
