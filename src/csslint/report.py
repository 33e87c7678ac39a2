"""Reporter: deterministic ordering and rendering of findings."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence

from csslint.model.finding import Finding, Severity


def report(findings: Iterable[Finding]) -> tuple[Finding, ...]:
    """Order findings by ``(line, rule_id)``.

    The sort is stable, so findings with equal keys keep emission order.
    """
    return tuple(sorted(findings, key=lambda f: (f.line, f.rule_id)))


def summarize(findings: Iterable[Finding]) -> dict[str, int]:
    counts = {"error": 0, "warning": 0}
    for finding in findings:
        counts[finding.severity.value] += 1
    return counts


def format_text(findings: Sequence[Finding], path: str = "<stdin>") -> list[str]:
    """Render ``path:line: severity [rule] message`` lines."""
    return [f"{path}:{f.line}: {f.severity.value} [{f.rule_id}] {f.message}" for f in findings]


def format_summary(findings: Iterable[Finding]) -> str:
    counts = summarize(findings)
    return f"Summary: {counts['error']} error(s), {counts['warning']} warning(s)"


def format_json(results: Mapping[str, Sequence[Finding]]) -> str:
    """Render findings for several files as one JSON document."""
    payload = {
        "files": [
            {"path": path, "findings": [f.to_dict() for f in findings]}
            for path, findings in results.items()
        ],
        "summary": summarize(f for findings in results.values() for f in findings),
    }
    return json.dumps(payload, indent=2)


def has_errors(findings: Iterable[Finding]) -> bool:
    return any(f.severity is Severity.ERROR for f in findings)
