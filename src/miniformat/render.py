"""Renderer — walks a tag tree and produces a styled Message."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from miniformat.ast import Node, Text
from miniformat.gradient import interpolate
from miniformat.message import MaybeBool, Message
from miniformat.parser import parse_tree
from miniformat.styles import StyleState, apply_tag


def parse(source: str, palette: Mapping[str, str] | None = None) -> Message:
    """Parse MiniFormat markup into a single composed Message.

    Text without any ``<`` skips the pipeline and comes back as one raw unit.
    """
    if "<" not in source:
        return Message.raw(source)
    return render(parse_tree(source), palette=palette)


class _Frame:
    """Render state of one node: its style, gradient run and emitted units."""

    def __init__(self, node: Node, style: StyleState) -> None:
        self.style = style
        self.children: Iterator[Text | Node] = iter(node.children)
        self.messages: list[Message] = []
        self.position = 0
        self.gradient_length = 0
        if style.gradient is not None:
            self.gradient_length = node.text_length()

    def emit_text(self, value: str) -> None:
        gradient = self.style.gradient
        if gradient is None:
            self.messages.append(_styled(Message.raw(value), self.style))
            return
        for ch in value:
            msg = _styled(Message.raw(ch), self.style)
            msg.color(interpolate(gradient.stops, self.position, self.gradient_length))
            self.messages.append(msg)
            self.position += 1

    def finish(self) -> Message:
        if not self.messages:
            return Message.raw("")
        return Message.join(*self.messages)


def render(
    node: Node,
    inherited: StyleState | None = None,
    palette: Mapping[str, str] | None = None,
) -> Message:
    """Render *node* and its subtree under the *inherited* style.

    A gradient paints its direct text children as one run over the length of
    the whole subtree. Nested nodes get their own frame, which restarts the
    run over their own subtree with the inherited stops.
    """
    stack = [_Frame(node, apply_tag(node.tag, inherited or StyleState(), palette))]

    while True:
        frame = stack[-1]
        child = next(frame.children, None)
        if child is None:
            stack.pop()
            msg = frame.finish()
            if not stack:
                return msg
            stack[-1].messages.append(msg)
        elif isinstance(child, Text):
            frame.emit_text(child.value)
        else:
            stack.append(_Frame(child, apply_tag(child.tag, frame.style, palette)))


def _styled(msg: Message, style: StyleState) -> Message:
    """Apply the solid color and the flags of *style* to *msg*."""
    if style.color is not None and style.gradient is None:
        msg.color(style.color)
    if style.bold:
        msg.bold(True)
    if style.italic:
        msg.italic(True)
    if style.underlined:
        msg.underlined = MaybeBool.TRUE
    if style.monospace:
        msg.monospace(True)
    return msg
