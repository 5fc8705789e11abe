"""Minimal rich-text message — the host rendering surface the renderer writes to."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MaybeBool(Enum):
    """Tri-state flag: explicitly on, explicitly off, or inherited."""

    NULL = None
    FALSE = False
    TRUE = True


@dataclass(eq=False, slots=True)
class Message:
    """A styled text run with optional child runs.

    Unset attributes (None / MaybeBool.NULL) inherit from the enclosing
    message when the tree is displayed.
    """

    text: str = ""
    color_hex: str | None = None
    is_bold: bool | None = None
    is_italic: bool | None = None
    is_monospace: bool | None = None
    underlined: MaybeBool = MaybeBool.NULL
    children: list[Message] = field(default_factory=list)

    @classmethod
    def raw(cls, text: str) -> Message:
        """Create an unstyled leaf."""
        return cls(text)

    @classmethod
    def join(cls, *messages: Message) -> Message:
        """Compose *messages*, in order, under one empty parent."""
        return cls(children=list(messages))

    def color(self, value: str) -> Message:
        self.color_hex = value
        return self

    def bold(self, value: bool) -> Message:
        self.is_bold = value
        return self

    def italic(self, value: bool) -> Message:
        self.is_italic = value
        return self

    def monospace(self, value: bool) -> Message:
        self.is_monospace = value
        return self

    def plain_text(self) -> str:
        """Concatenated text of this message and all descendants."""
        parts: list[str] = []
        stack: list[Message] = [self]
        while stack:
            msg = stack.pop()
            parts.append(msg.text)
            stack.extend(reversed(msg.children))
        return "".join(parts)
