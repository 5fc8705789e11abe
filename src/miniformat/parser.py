"""MiniFormat tree builder — folds a token stream into a tag tree."""

from __future__ import annotations

import logging

from miniformat.ast import ROOT_TAG, Node
from miniformat.lexer import tokenize
from miniformat.tokens import Token, TokenType

logger = logging.getLogger(__name__)


def build(tokens: list[Token]) -> Node:
    """Build a tag tree from *tokens* and return its root.

    A single cursor walks the tree: open tags descend, close tags climb back
    to the parent. Close tags are positional and never compared by name. A
    close tag with nothing open is ignored; tags still open at the end stay
    open.
    """
    root = Node(ROOT_TAG)
    current = root

    for token in tokens:
        match token.type:
            case TokenType.TEXT:
                current.append_text(token.value, token.span)
            case TokenType.OPEN_TAG:
                current = current.open_child(token.value, token.span)
            case TokenType.CLOSE_TAG:
                parent = current.parent
                if parent is None:
                    logger.debug("ignoring unmatched close tag </%s>", token.value)
                    continue
                current = parent

    return root


def parse_tree(source: str) -> Node:
    """Tokenize *source* and build its tag tree."""
    return build(tokenize(source))
