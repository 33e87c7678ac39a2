"""Hand-written, error-tolerant parser for CSS stylesheets.

Syntax example:
    @font-face { font-family: "Inter"; src: url(inter.woff2); }
    :root { --accent: #f60; }
    @media (min-width: 40em) {
        .site-header, nav :not(.a, .b) { padding: 0 1rem; color: var(--accent); }
    }

The parser never raises.  Malformed input yields a best-effort tree and a
single ``structural-error`` finding describing the first problem found.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from typing import Callable, TypeVar

from csslint.model.finding import STRUCTURAL_ERROR, Finding, Severity
from csslint.model.stylesheet import DECLARATION_AT_RULES, AtRule, Declaration, Node, RuleBlock, Stylesheet

__all__ = ["parse", "split_top_level", "strip_comments", "MAX_DEPTH"]

logger = logging.getLogger(__name__)

# Deepest block nesting the parser descends into.
MAX_DEPTH = 64

_AT_NAME_RE = re.compile(r"-?[_a-zA-Z][_a-zA-Z0-9-]*")

_T = TypeVar("_T")


def _blank(chars: list[str], start: int, end: int) -> None:
    """Replace chars[start:end] with spaces, keeping newlines."""
    for i in range(start, end):
        if chars[i] != "\n":
            chars[i] = " "


def strip_comments(text: str) -> tuple[str, int | None]:
    """Blank out ``/* ... */`` comments without shifting offsets or lines.

    Returns the cleaned text and the offset of an unterminated comment, if any.
    Comment markers inside quoted strings are left alone.
    """
    chars = list(text)
    n = len(text)
    quote: str | None = None
    i = 0
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote or ch == "\n":
                quote = None
            i += 1
            continue
        if ch in "\"'":
            quote = ch
        elif ch == "/" and text.startswith("*", i + 1):
            end = text.find("*/", i + 2)
            if end == -1:
                _blank(chars, i, n)
                return "".join(chars), i
            _blank(chars, i, end + 2)
            i = end + 2
            continue
        i += 1
    return "".join(chars), None


def split_top_level(text: str, separator: str = ",") -> tuple[str, ...]:
    """Split *text* on *separator* outside parentheses, brackets and strings.

    Parts are stripped; empty parts are dropped.
    """
    parts: list[str] = []
    depth = 0
    quote: str | None = None
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)
        elif ch == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return tuple(p.strip() for p in parts if p.strip())


def _find_colon(text: str) -> int:
    """Index of the first colon not preceded by a backslash, or -1."""
    i = 0
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == ":":
            return i
        i += 1
    return -1


class _StylesheetParser:
    """Recursive-descent parser over comment-free text.

    Positions always index the cleaned text, which has the same length and
    line breaks as the original source.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.text, comment_at = strip_comments(source)
        self.n = len(self.text)
        self.pos = 0
        self.error: Finding | None = None
        self._line_starts = [0] + [i + 1 for i, ch in enumerate(source) if ch == "\n"]
        if comment_at is not None:
            self._note("Unterminated comment: missing '*/'", comment_at, fix="Close the comment with '*/'.")

    # ---- helpers ----

    def line_at(self, offset: int) -> int:
        return bisect_right(self._line_starts, offset)

    def _note(self, message: str, offset: int, fix: str | None = None) -> None:
        """Record a structural problem; only the first one is kept."""
        if self.error is None:
            self.error = Finding(
                rule_id=STRUCTURAL_ERROR,
                severity=Severity.ERROR,
                message=message,
                line=self.line_at(offset),
                fix=fix,
            )

    def _fail(self, message: str, offset: int, fix: str | None = None) -> None:
        """Record an unrecoverable problem and truncate the input."""
        self._note(message, offset, fix)
        self.pos = self.n

    def _skip_ws(self) -> None:
        while self.pos < self.n and self.text[self.pos].isspace():
            self.pos += 1

    def _skip_string(self, start: int) -> int:
        """Return the offset just past the string opening at *start*."""
        quote = self.text[start]
        i = start + 1
        while i < self.n:
            ch = self.text[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i + 1
            if ch == "\n":
                break
            i += 1
        self._fail("Unterminated string", start, fix=f"Close the string with {quote}.")
        return self.n

    def _scan(self, stops: str) -> tuple[int, str | None]:
        """Find the next stop character outside strings and parentheses.

        Braces stop the scan even inside parentheses so that an unbalanced
        ``(`` cannot swallow the rest of the stylesheet.  Returns the offset of
        the stop and the character, or ``(n, None)`` at end of input.
        """
        depth = 0
        i = self.pos
        while i < self.n:
            ch = self.text[i]
            if ch in "\"'":
                i = self._skip_string(i)
                continue
            if ch == "\\":
                i += 2
                continue
            if ch in "{}" and ch in stops:
                return i, ch
            if ch in "([":
                depth += 1
            elif ch in ")]":
                depth = max(depth - 1, 0)
            elif depth == 0 and ch in stops:
                return i, ch
            i += 1
        return self.n, None

    def _skip_block(self) -> None:
        """Skip to just past the brace closing the current block, iteratively."""
        depth = 1
        i = self.pos
        while i < self.n and depth:
            ch = self.text[i]
            if ch in "\"'":
                i = self._skip_string(i)
                continue
            if ch == "\\":
                i += 2
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
            i += 1
        self.pos = min(i, self.n)

    def _block(self, open_at: int, depth: int, body: Callable[[int], _T], empty: _T) -> _T:
        """Parse a ``{ ... }`` body; ``self.pos`` is just past the ``{``."""
        if depth >= MAX_DEPTH:
            self._note(
                f"Blocks nested deeper than {MAX_DEPTH} levels",
                open_at,
                fix="Flatten the nesting.",
            )
            self._skip_block()
            return empty
        result = body(depth + 1)
        if self.pos >= self.n:
            self._note("Unclosed block: missing '}'", open_at, fix="Add the closing '}'.")
        else:
            self.pos += 1
        return result

    # ---- grammar ----

    def parse(self) -> Stylesheet:
        nodes = self._nodes(0, closing=False)
        errors = (self.error,) if self.error else ()
        logger.debug("Parsed %d top-level node(s), %d structural error(s)", len(nodes), len(errors))
        return Stylesheet(nodes=nodes, errors=errors)

    def _nodes(self, depth: int, closing: bool = True) -> tuple[Node, ...]:
        nodes: list[Node] = []
        while True:
            self._skip_ws()
            if self.pos >= self.n:
                return tuple(nodes)
            ch = self.text[self.pos]
            if ch == "}":
                if closing:
                    return tuple(nodes)
                self._note("Unexpected '}' without a matching '{'", self.pos, fix="Remove the stray '}'.")
                self.pos += 1
                continue
            if ch == ";":
                self.pos += 1
                continue
            node = self._at_rule(depth) if ch == "@" else self._rule_block(depth)
            if node is not None:
                nodes.append(node)

    def _at_rule(self, depth: int, nested: bool = False) -> AtRule:
        start = self.pos
        match = _AT_NAME_RE.match(self.text, start + 1)
        name = match.group() if match else ""
        self.pos = match.end() if match else start + 1
        stop_at, stop = self._scan(";{}")
        prelude = self.text[self.pos:stop_at].strip()
        line = self.line_at(start)

        if stop == ";":
            self.pos = stop_at + 1
            return AtRule(name=name, prelude=prelude, line=line)
        if stop == "{":
            self.pos = stop_at + 1
            if name.lower() in DECLARATION_AT_RULES:
                declarations, _ = self._block(stop_at, depth, self._declarations, ((), ()))
                return AtRule(name=name, prelude=prelude, line=line, block=(), declarations=declarations)
            if nested:
                # Group at-rules inside a rule block may hold declarations directly.
                declarations, children = self._block(stop_at, depth, self._declarations, ((), ()))
                return AtRule(name=name, prelude=prelude, line=line, block=children, declarations=declarations)
            children = self._block(stop_at, depth, self._nodes, ())
            return AtRule(name=name, prelude=prelude, line=line, block=children)

        # A statement at-rule closed by the end of its enclosing block is tolerated.
        self.pos = stop_at
        if stop is None:
            self._note(f"At-rule '@{name}' is missing ';' or a block", start)
        return AtRule(name=name, prelude=prelude, line=line)

    def _rule_block(self, depth: int) -> RuleBlock | None:
        start = self.pos
        stop_at, stop = self._scan(";{}")
        if stop == "{":
            selectors = split_top_level(self.text[start:stop_at])
            self.pos = stop_at + 1
            declarations, nested = self._block(stop_at, depth, self._declarations, ((), ()))
            return RuleBlock(
                selectors=selectors,
                declarations=declarations,
                line=self.line_at(start),
                nested=nested,
            )
        if stop == ";":
            self._note("Declaration outside of a rule block", start)
            self.pos = stop_at + 1
            return None
        self._note("Expected '{' after selector", start, fix="Add a declaration block.")
        self.pos = stop_at
        return None

    def _declarations(self, depth: int) -> tuple[tuple[Declaration, ...], tuple[Node, ...]]:
        declarations: list[Declaration] = []
        nested: list[Node] = []
        while True:
            self._skip_ws()
            if self.pos >= self.n or self.text[self.pos] == "}":
                return tuple(declarations), tuple(nested)
            if self.text[self.pos] == ";":
                self.pos += 1
                continue
            if self.text[self.pos] == "@":
                nested.append(self._at_rule(depth, nested=True))
                continue

            start = self.pos
            stop_at, stop = self._scan(";{}")
            if stop == "{":
                selectors = split_top_level(self.text[start:stop_at])
                self.pos = stop_at + 1
                inner, inner_nested = self._block(stop_at, depth, self._declarations, ((), ()))
                nested.append(
                    RuleBlock(selectors=selectors, declarations=inner, line=self.line_at(start), nested=inner_nested)
                )
                continue

            declaration = self._declaration(start, stop_at)
            if declaration is not None:
                declarations.append(declaration)
            self.pos = stop_at + 1 if stop == ";" else stop_at

    def _verbatim(self, start: int, end: int) -> str:
        """Source text between the first and last non-blank cleaned characters.

        Comments at either edge are excluded; comments inside are kept as written.
        """
        while start < end and self.text[start].isspace():
            start += 1
        while end > start and self.text[end - 1].isspace():
            end -= 1
        return self.source[start:end]

    def _declaration(self, start: int, end: int) -> Declaration | None:
        raw = self.text[start:end]
        colon = _find_colon(raw)
        if colon == -1:
            self._note(
                f"Malformed declaration {raw.strip()!r}: expected 'property: value'",
                start,
            )
            return None
        prop = self._verbatim(start, start + colon)
        if not prop:
            self._note("Declaration is missing a property name", start)
            return None
        value = self._verbatim(start + colon + 1, end)
        return Declaration(property=prop, value=value, line=self.line_at(start))


def parse(text: str) -> Stylesheet:
    """Parse stylesheet *text* into a Stylesheet.

    Never raises: structural problems are reported in ``Stylesheet.errors``.
    """
    return _StylesheetParser(text).parse()
