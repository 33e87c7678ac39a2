"""End-to-end tests for analyze(): parse, check and report."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from csslint import AnalysisResult, LintConfig, analyze
from csslint.config import DEFAULT_STRUCTURAL_SELECTORS
from csslint.model import STRUCTURAL_ERROR, Severity
from csslint.rules import FONT_FACE_ORDER, PROPERTY_ORDER, SELECTOR_KIND

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _findings(css: str, **kwargs) -> list[tuple[str, int]]:
    result = analyze(css, **kwargs)
    assert result.ok
    return [(f.rule_id, f.line) for f in result.findings]


# ---------------------------------------------------------------------------
# Documented examples
# ---------------------------------------------------------------------------


class TestExamples:
    def test_bare_header(self):
        result = analyze("header { color: red; }")
        assert len(result.findings) == 1
        f = result.findings[0]
        assert f.rule_id == SELECTOR_KIND
        assert f.severity is Severity.WARNING
        assert f.line == 1
        assert "header" in f.message

    def test_qualified_header(self):
        assert analyze("header.site-header { color: red; }").findings == ()

    def test_root_before_font_face(self):
        assert _findings(":root{--x:1} @font-face{font-family:'A';src:url(a)}") == [(FONT_FACE_ORDER, 1)]

    def test_property_order(self):
        assert _findings(".btn { color: red; border: none; }") == [(PROPERTY_ORDER, 1)]
        assert _findings(".btn { border: none; color: red; }") == []

    def test_nested_media_declarations(self):
        assert _findings(".a { @media print { color: red; border: 0; } }") == [(PROPERTY_ORDER, 1)]

    def test_missing_closing_brace(self):
        result = analyze(".btn { color: red")
        assert result.ok
        assert [f.rule_id for f in result.findings] == [STRUCTURAL_ERROR]

    def test_empty_input(self):
        result = analyze("")
        assert result.ok
        assert result.findings == ()
        assert result.stylesheet.nodes == ()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class TestFixtures:
    def test_clean(self):
        result = analyze((FIXTURES / "clean.css").read_text())
        assert result.findings == ()

    def test_messy(self):
        result = analyze((FIXTURES / "messy.css").read_text())
        assert [(f.rule_id, f.line) for f in result.findings] == [
            (FONT_FACE_ORDER, 1),
            (SELECTOR_KIND, 10),
            (PROPERTY_ORDER, 12),
            (SELECTOR_KIND, 15),
            (PROPERTY_ORDER, 21),
            (PROPERTY_ORDER, 23),
        ]
        assert all(f.is_warning for f in result.findings)

    def test_broken_still_runs_checks(self):
        css = (FIXTURES / "broken.css").read_text() + "\n"
        result = analyze("header { color: red; border: 0; }\n" + css)
        assert [f.rule_id for f in result.findings] == [PROPERTY_ORDER, SELECTOR_KIND, STRUCTURAL_ERROR]


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_sorted_by_line(self):
        text = (FIXTURES / "messy.css").read_text()
        lines = [f.line for f in analyze(text).findings]
        assert lines == sorted(lines)

    def test_deterministic(self):
        text = (FIXTURES / "messy.css").read_text()
        first = analyze(text)
        second = analyze(text)
        assert first.findings == second.findings
        assert [str(f) for f in first.findings] == [str(f) for f in second.findings]

    def test_thread_pool_matches_serial(self):
        texts = [(FIXTURES / name).read_text() for name in ("clean.css", "messy.css", "broken.css")]
        texts += [
            "header { color: red; }",
            ".a { @media print { color: red; border: 0; } }",
            ":root{--x:1} @font-face{font-family:'A';src:url(a)}",
        ]
        texts *= 4
        serial = [analyze(text) for text in texts]
        with ThreadPoolExecutor(max_workers=8) as pool:
            threaded = list(pool.map(analyze, texts))
        assert [r.findings for r in threaded] == [r.findings for r in serial]
        assert [r.stylesheet for r in threaded] == [r.stylesheet for r in serial]

    def test_default_config_not_mutated(self):
        before = set(DEFAULT_STRUCTURAL_SELECTORS)
        analyze("header { color: red; }", {"structural_selectors": ["article"]})
        assert set(DEFAULT_STRUCTURAL_SELECTORS) == before
        assert len(analyze("header { color: red; }").findings) == 1

    def test_no_font_face_no_ordering_finding(self):
        text = (FIXTURES / "messy.css").read_text().replace("@font-face", "@page")
        rule_ids = {f.rule_id for f in analyze(text).findings}
        assert FONT_FACE_ORDER not in rule_ids


# ---------------------------------------------------------------------------
# Configuration handling
# ---------------------------------------------------------------------------


class TestConfiguration:
    def test_mapping_config(self):
        assert _findings("header { margin: 0; }", config={"disable": ["selector-kind"]}) == []

    def test_config_object(self):
        config = LintConfig(structural_selectors=frozenset({"article"}))
        assert _findings("article { margin: 0; }", config=config) == [(SELECTOR_KIND, 1)]

    @pytest.mark.parametrize(
        "config",
        [
            {"property_groups": []},
            {"unknown": 1},
            {"disable": ["no-such-rule"]},
        ],
    )
    def test_invalid_config_is_returned_not_raised(self, config):
        result = analyze("header { color: red; }", config)
        assert isinstance(result, AnalysisResult)
        assert not result.ok
        assert result.findings == ()
        assert result.stylesheet is None
