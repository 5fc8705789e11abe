"""--debug tag tree dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from miniformat.ast import Node, Text


def dump_tree(root: Node, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable tag tree to *file*."""
    stack: list[tuple[Text | Node, int]] = [(root, 0)]
    while stack:
        item, depth = stack.pop()
        if isinstance(item, Text):
            file.write(f"{_indent(depth)}Text({item.value!r})\n")
        else:
            file.write(f"{_indent(depth)}Node {item.tag!r}\n")
            stack.extend((child, depth + 1) for child in reversed(item.children))


def _indent(depth: int) -> str:
    return "  " * depth
