"""Shared test fixtures and helpers."""

from __future__ import annotations

import logging

import pytest

from miniformat.ast import Node
from miniformat.lexer import tokenize
from miniformat.message import Message
from miniformat.parser import parse_tree
from miniformat.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def tree():
    """Return a helper that parses source and returns the root Node."""

    def _tree(source: str) -> Node:
        return parse_tree(source)

    return _tree


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI runs reconfigure the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def leaves(msg: Message) -> list[Message]:
    """Return every message carrying text, in display order."""
    found: list[Message] = []
    stack = [msg]
    while stack:
        current = stack.pop()
        if current.text:
            found.append(current)
        stack.extend(reversed(current.children))
    return found


def leaf_colors(msg: Message) -> list[str | None]:
    return [leaf.color_hex for leaf in leaves(msg)]
