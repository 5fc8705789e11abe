"""Tag tree node types for parsed MiniFormat markup."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field

from miniformat.tokens import Span

ROOT_TAG = "root"


@dataclass(frozen=True, slots=True)
class Text:
    """A literal text fragment."""

    value: str
    span: Span | None = None


@dataclass(eq=False, slots=True, weakref_slot=True)
class Node:
    """One tag scope: a raw tag plus its ordered text and node children.

    The parent link is a weak reference, children are owned by their node.
    """

    tag: str
    children: list[Text | Node] = field(default_factory=list)
    span: Span | None = None
    _parent: weakref.ReferenceType[Node] | None = field(default=None, repr=False)

    @property
    def parent(self) -> Node | None:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def is_root(self) -> bool:
        return self._parent is None

    def open_child(self, tag: str, span: Span | None = None) -> Node:
        """Append a new child node under this one and return it."""
        child = Node(tag, span=span, _parent=weakref.ref(self))
        self.children.append(child)
        return child

    def append_text(self, value: str, span: Span | None = None) -> None:
        self.children.append(Text(value, span))

    def text_length(self) -> int:
        """Number of text characters in this node's whole subtree."""
        total = 0
        stack: list[Node] = [self]
        while stack:
            for child in stack.pop().children:
                if isinstance(child, Text):
                    total += len(child.value)
                else:
                    stack.append(child)
        return total
