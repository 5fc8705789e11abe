"""MiniFormat inline markup to styled rich-text messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from miniformat.message import Message

__version__ = "0.1.0"


def parse(source: str, palette: Mapping[str, str] | None = None) -> Message:
    """Parse MiniFormat markup into a single styled Message."""
    from miniformat.render import parse as _parse

    return _parse(source, palette)
