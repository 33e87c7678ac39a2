"""Tests for the selector grammar and specificity."""

import pytest

from csslint.parser import parse_selector, parse_selector_list


# ---------------------------------------------------------------------------
# Bare element detection
# ---------------------------------------------------------------------------


class TestBareElement:
    def test_bare_element(self):
        sel = parse_selector("header")
        assert sel is not None
        assert sel.is_bare_element
        assert sel.element == "header"

    def test_element_name_lowercased(self):
        assert parse_selector("HEADER").element == "header"

    def test_universal_is_bare(self):
        sel = parse_selector("*")
        assert sel.is_bare_element
        assert sel.element == "*"

    @pytest.mark.parametrize(
        "text",
        [
            "header.site-header",
            "header[role=banner]",
            "header#top",
            "header:hover",
            "header::before",
            "&:hover",
            ".site-header",
        ],
    )
    def test_qualified_selectors_are_not_bare(self, text):
        sel = parse_selector(text)
        assert sel is not None
        assert not sel.is_bare_element
        assert sel.element is None

    def test_descendant_selector_is_not_bare(self):
        sel = parse_selector("nav a")
        assert len(sel.compounds) == 2
        assert sel.combinators == (" ",)
        assert not sel.is_bare_element

    def test_child_combinator(self):
        sel = parse_selector("ul > li")
        assert sel.combinators == (">",)
        assert [c.element for c in sel.compounds] == ["ul", "li"]


# ---------------------------------------------------------------------------
# Compound contents
# ---------------------------------------------------------------------------


class TestCompound:
    def test_parts(self):
        sel = parse_selector("a#x.b.c[href]:hover::after")
        compound = sel.compounds[0]
        assert compound.element == "a"
        assert compound.ids == ("x",)
        assert compound.classes == ("b", "c")
        assert compound.attributes == ("href",)
        assert compound.pseudo_classes == ("hover",)
        assert compound.pseudo_elements == ("after",)

    def test_legacy_pseudo_element(self):
        compound = parse_selector("p:first-line").compounds[0]
        assert compound.pseudo_elements == ("first-line",)
        assert compound.pseudo_classes == ()


# ---------------------------------------------------------------------------
# Specificity
# ---------------------------------------------------------------------------


class TestSpecificity:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("*", (0, 0, 0)),
            ("header", (0, 0, 1)),
            (".btn", (0, 1, 0)),
            ("#main", (1, 0, 0)),
            ("#main .nav li:hover::before", (1, 2, 2)),
            ("a::before", (0, 0, 2)),
            ("a:before", (0, 0, 2)),
            ("li:nth-child(2n+1)", (0, 1, 1)),
            (":not(#a)", (1, 0, 0)),
            (":where(#a)", (0, 0, 0)),
            ("a:is(.x, #y)", (1, 0, 1)),
            ("input[type=text]", (0, 1, 1)),
        ],
    )
    def test_specificity(self, text, expected):
        assert parse_selector(text).specificity == expected


# ---------------------------------------------------------------------------
# Unparseable selectors
# ---------------------------------------------------------------------------


class TestOpaqueSelectors:
    @pytest.mark.parametrize("text", ["", "   ", "50%", "a >", "> a"])
    def test_returns_none(self, text):
        assert parse_selector(text) is None

    def test_keyframe_keyword_parses_as_element(self):
        assert parse_selector("from").element == "from"


class TestSelectorList:
    def test_list(self):
        sels = parse_selector_list("a, .b, 10%")
        assert len(sels) == 3
        assert sels[0].element == "a"
        assert sels[1].compounds[0].classes == ("b",)
        assert sels[2] is None
