"""Tests for report ordering and rendering."""

import json

from csslint.model import Finding, Severity
from csslint.report import format_json, format_summary, format_text, has_errors, report, summarize


def _f(rule: str, line: int, severity: Severity = Severity.WARNING, message: str = "msg") -> Finding:
    return Finding(rule_id=rule, severity=severity, message=message, line=line)


class TestReport:
    def test_sorted_by_line_then_rule(self):
        findings = [_f("b", 3), _f("a", 3), _f("z", 1)]
        assert [(f.line, f.rule_id) for f in report(findings)] == [(1, "z"), (3, "a"), (3, "b")]

    def test_stable_for_equal_keys(self):
        first = _f("a", 2, message="first")
        second = _f("a", 2, message="second")
        assert report([first, second]) == (first, second)

    def test_returns_tuple(self):
        assert report([]) == ()


class TestFinding:
    def test_str(self):
        assert str(_f("property-order", 4)) == "4: warning [property-order] msg"

    def test_to_dict_omits_empty_fix(self):
        assert _f("a", 1).to_dict() == {"rule": "a", "severity": "warning", "message": "msg", "line": 1}

    def test_to_dict_with_fix(self):
        f = Finding("a", Severity.ERROR, "m", 2, fix="do it")
        assert f.to_dict()["fix"] == "do it"
        assert f.is_error and not f.is_warning


class TestFormatting:
    def test_format_text(self):
        lines = format_text([_f("selector-kind", 7)], "site.css")
        assert lines == ["site.css:7: warning [selector-kind] msg"]

    def test_summary(self):
        findings = [_f("a", 1), _f("b", 2, Severity.ERROR), _f("c", 3)]
        assert summarize(findings) == {"error": 1, "warning": 2}
        assert format_summary(findings) == "Summary: 1 error(s), 2 warning(s)"
        assert has_errors(findings)
        assert not has_errors(findings[:1])

    def test_format_json(self):
        payload = json.loads(format_json({"a.css": [_f("x", 1)], "b.css": []}))
        assert [entry["path"] for entry in payload["files"]] == ["a.css", "b.css"]
        assert payload["files"][0]["findings"][0]["rule"] == "x"
        assert payload["summary"] == {"error": 0, "warning": 1}
