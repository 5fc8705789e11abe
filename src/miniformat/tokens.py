"""Token types and source position data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    TEXT = auto()  # literal text between tags
    OPEN_TAG = auto()  # <name> or <name:arg:...>
    CLOSE_TAG = auto()  # </anything>, value has the "/" stripped


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its value and original source text."""

    type: TokenType
    value: str
    raw: str
    span: Span
