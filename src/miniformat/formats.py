"""Output formats — plain text, ANSI, HTML and JSON views of a rendered Message."""

from __future__ import annotations

import io
import json
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any

from rich.color import Color
from rich.console import Console
from rich.style import Style
from rich.text import Text as RichText

from miniformat.errors import ColorDecodeError
from miniformat.gradient import decode_hex
from miniformat.message import MaybeBool, Message

FORMATS = ("ansi", "html", "json", "plain")


@dataclass(frozen=True, slots=True)
class _Effective:
    """Attributes in effect for a run after inheritance."""

    color: str | None = None
    bold: bool = False
    italic: bool = False
    monospace: bool = False
    underlined: bool = False


def _inherit(msg: Message, outer: _Effective) -> _Effective:
    eff = outer
    if msg.color_hex is not None:
        eff = replace(eff, color=msg.color_hex)
    if msg.is_bold is not None:
        eff = replace(eff, bold=msg.is_bold)
    if msg.is_italic is not None:
        eff = replace(eff, italic=msg.is_italic)
    if msg.is_monospace is not None:
        eff = replace(eff, monospace=msg.is_monospace)
    if msg.underlined is not MaybeBool.NULL:
        eff = replace(eff, underlined=msg.underlined is MaybeBool.TRUE)
    return eff


def iter_runs(msg: Message, outer: _Effective | None = None) -> Iterator[tuple[str, _Effective]]:
    """Yield (text, effective style) for every non-empty text run, in order."""
    stack: list[tuple[Message, _Effective]] = [(msg, outer or _Effective())]
    while stack:
        current, parent_eff = stack.pop()
        eff = _inherit(current, parent_eff)
        if current.text:
            yield current.text, eff
        stack.extend((child, eff) for child in reversed(current.children))


def render_format(msg: Message, fmt: str) -> str:
    """Dispatch to the named output format."""
    match fmt:
        case "ansi":
            return to_ansi(msg)
        case "html":
            return to_html(msg)
        case "json":
            return to_json(msg)
        case "plain":
            return to_plain(msg)
        case _:
            raise ValueError(f"unknown output format: {fmt!r}")


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


def to_plain(msg: Message) -> str:
    return msg.plain_text()


# ---------------------------------------------------------------------------
# Terminal (rich)
# ---------------------------------------------------------------------------


def to_rich_text(msg: Message) -> RichText:
    """Build a rich Text with one styled span per run."""
    result = RichText(end="")
    for text, eff in iter_runs(msg):
        result.append(text, style=_rich_style(eff))
    return result


def _rich_style(eff: _Effective) -> Style:
    # Monospace has no terminal equivalent; undecodable colors are dropped
    color = None
    if eff.color is not None:
        try:
            r, g, b = decode_hex(eff.color)
        except ColorDecodeError:
            pass
        else:
            color = Color.from_rgb(r, g, b)
    return Style(
        color=color,
        bold=eff.bold or None,
        italic=eff.italic or None,
        underline=eff.underlined or None,
    )


def to_ansi(msg: Message) -> str:
    """Render with 24-bit SGR escapes through a captured rich Console."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        force_terminal=True,
        force_jupyter=False,
        color_system="truecolor",
        no_color=False,
        highlight=False,
        soft_wrap=True,
        legacy_windows=False,
    )
    console.print(to_rich_text(msg), end="")
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


def _escape_html(text: str) -> str:
    """Escape text for HTML body content."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str) -> str:
    """Escape text for HTML attribute values."""
    return _escape_html(text).replace('"', "&quot;")


def to_html(msg: Message) -> str:
    """Render as a sequence of inline ``<span>`` elements."""
    parts: list[str] = []
    for text, eff in iter_runs(msg):
        css = _css(eff)
        if css:
            parts.append(f'<span style="{_escape_attr(css)}">{_escape_html(text)}</span>')
        else:
            parts.append(_escape_html(text))
    return "".join(parts)


def _css(eff: _Effective) -> str:
    rules: list[str] = []
    if eff.color is not None:
        rules.append(f"color:{eff.color}")
    if eff.bold:
        rules.append("font-weight:bold")
    if eff.italic:
        rules.append("font-style:italic")
    if eff.underlined:
        rules.append("text-decoration:underline")
    if eff.monospace:
        rules.append("font-family:monospace")
    return ";".join(rules)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def _attributes(msg: Message) -> dict[str, Any]:
    """The text and explicitly set attributes of a single message."""
    data: dict[str, Any] = {"text": msg.text}
    if msg.color_hex is not None:
        data["color"] = msg.color_hex
    if msg.is_bold is not None:
        data["bold"] = msg.is_bold
    if msg.is_italic is not None:
        data["italic"] = msg.is_italic
    if msg.is_monospace is not None:
        data["monospace"] = msg.is_monospace
    if msg.underlined is not MaybeBool.NULL:
        data["underlined"] = msg.underlined.value
    return data


def to_dict(msg: Message) -> dict[str, Any]:
    """Convert a message tree to nested dicts, omitting unset attributes."""
    result: dict[str, Any] = {}
    stack: list[tuple[Message, dict[str, Any]]] = [(msg, result)]
    while stack:
        current, data = stack.pop()
        data.update(_attributes(current))
        if current.children:
            children: list[dict[str, Any]] = [{} for _ in current.children]
            data["children"] = children
            stack.extend(zip(current.children, children))
    return result


def to_json(msg: Message) -> str:
    """Serialize a message tree as JSON, the same document as ``to_dict``.

    Objects are written from an explicit stack so nesting depth is not bound
    by the interpreter's recursion limit.
    """
    parts: list[str] = []
    stack: list[Message | str] = [msg]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        attrs = json.dumps(_attributes(item), ensure_ascii=False)
        if not item.children:
            parts.append(attrs)
            continue
        parts.append(attrs[:-1] + ', "children": [')
        stack.append("]}")
        for i in range(len(item.children) - 1, -1, -1):
            stack.append(item.children[i])
            if i:
                stack.append(", ")
    return "".join(parts)
