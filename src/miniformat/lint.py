"""Markup checks — reports the anomalies the renderer silently absorbs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from miniformat.ast import ROOT_TAG
from miniformat.colors import is_hex_literal, is_valid_hex, resolve_color
from miniformat.errors import format_context
from miniformat.lexer import tokenize
from miniformat.tags import COLOR_TAG, GRADIENT_TAG, is_known, resolve_name, split_tag
from miniformat.tokens import Span, Token, TokenType

WARNING = "warning"
HINT = "hint"


@dataclass(frozen=True, slots=True)
class Issue:
    """A single markup problem with its source location."""

    message: str
    span: Span
    source: str
    severity: str = WARNING

    def format(self, filename: str = "<input>") -> str:
        return format_context(self.message, self.span, self.source, filename, self.severity)


def check(source: str, palette: Mapping[str, str] | None = None) -> list[Issue]:
    """Return every issue found in *source*, in source order."""
    issues: list[Issue] = []
    stack: list[Token] = []

    def report(message: str, token: Token, severity: str = WARNING) -> None:
        issues.append(Issue(message, token.span, source, severity))

    for token in tokenize(source):
        match token.type:
            case TokenType.OPEN_TAG:
                stack.append(token)
                for message in _tag_problems(token.value, palette):
                    report(message, token)
            case TokenType.CLOSE_TAG:
                if not stack:
                    report(f"close tag </{token.value}> has no open tag", token)
                    continue
                opened = stack.pop()
                if token.value and _canonical(token.value) != _canonical(opened.value):
                    report(
                        f"</{token.value}> closes <{opened.value}>",
                        token,
                        HINT,
                    )
            case TokenType.TEXT:
                pass

    for token in stack:
        report(f"tag <{token.value}> is never closed", token)

    issues.sort(key=lambda i: i.span.start.offset)
    return issues


def _canonical(tag: str) -> str:
    name, _ = split_tag(tag)
    return resolve_name(name)


def _tag_problems(tag: str, palette: Mapping[str, str] | None) -> list[str]:
    """Describe why *tag* would not style anything as written."""
    if tag == ROOT_TAG:
        return []

    name, args = split_tag(tag)
    canonical = resolve_name(name)

    if canonical == GRADIENT_TAG:
        if len(args) < 2:
            return [f"gradient <{tag}> needs at least two colors"]
        problems: list[str] = []
        for arg in args:
            problems.extend(_color_problems(arg, palette, fallback=" (white is used)"))
        return problems

    if is_known(name) and canonical != COLOR_TAG:
        return []

    if resolve_color(tag, palette) is not None:
        return _color_problems(tag, palette)

    if name == COLOR_TAG:
        if not args:
            return [f"color tag <{tag}> has no color"]
        return _color_problems(args[0], palette)

    return [f"unknown tag <{tag}>"]


def _color_problems(
    token: str,
    palette: Mapping[str, str] | None,
    fallback: str = "",
) -> list[str]:
    resolved = resolve_color(token, palette)
    if resolved is None:
        return [f"unknown color {token!r}{fallback}"]
    if is_hex_literal(resolved) and not is_valid_hex(resolved):
        return [f"malformed hex color {resolved!r}"]
    return []
