"""MiniFormat lexer — splits markup into a flat stream of text and tag tokens."""

from __future__ import annotations

import re

from miniformat.tokens import Position, Span, Token, TokenType

# "<", anything but brackets, ">" — no nesting, leftmost non-overlapping matches
TAG_PATTERN = re.compile(r"<(/?[^<>]*)>")


class Lexer:
    """Tokenize MiniFormat source text into a list of Token objects."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        for match in TAG_PATTERN.finditer(self._source):
            if match.start() > self._pos:
                text = self._source[self._pos : match.start()]
                self._emit(TokenType.TEXT, text, text)

            content = match.group(1)
            if content.startswith("/"):
                self._emit(TokenType.CLOSE_TAG, content[1:], match.group(0))
            else:
                self._emit(TokenType.OPEN_TAG, content, match.group(0))

        if self._pos < len(self._source):
            text = self._source[self._pos :]
            self._emit(TokenType.TEXT, text, text)

        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _consume(self, raw: str) -> None:
        """Advance line/column tracking over *raw*."""
        newlines = raw.count("\n")
        if newlines:
            self._line += newlines
            self._col = len(raw) - raw.rfind("\n")
        else:
            self._col += len(raw)
        self._pos += len(raw)

    def _emit(self, tt: TokenType, value: str, raw: str) -> Token:
        start = self._current_pos()
        self._consume(raw)
        tok = Token(tt, value, raw, Span(start, self._current_pos()))
        self._tokens.append(tok)
        return tok


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source and return token list."""
    return Lexer(source).tokenize()
