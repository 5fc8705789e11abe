"""Named color palette and color token resolution."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


WHITE = "#FFFFFF"

# The classic sixteen four-bit chat colors.
CLASSIC_PALETTE: Mapping[str, str] = MappingProxyType(
    {
        "black": "#000000",
        "dark_blue": "#0000AA",
        "dark_green": "#00AA00",
        "dark_aqua": "#00AAAA",
        "dark_red": "#AA0000",
        "dark_purple": "#AA00AA",
        "gold": "#FFAA00",
        "gray": "#AAAAAA",
        "dark_gray": "#555555",
        "blue": "#5555FF",
        "green": "#55FF55",
        "aqua": "#55FFFF",
        "red": "#FF5555",
        "light_purple": "#FF55FF",
        "yellow": "#FFFF55",
        "white": WHITE,
    }
)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def is_hex_literal(token: str) -> bool:
    """Return True if *token* has the shape of a ``#rrggbb`` literal.

    Only the length and the leading ``#`` are checked, digits are not.
    """
    return len(token) == 7 and token.startswith("#")


def is_valid_hex(token: str) -> bool:
    """Return True if *token* is a ``#rrggbb`` literal with real hex digits."""
    return is_hex_literal(token) and all(ch in _HEX_DIGITS for ch in token[1:])


def resolve_color(token: str, palette: Mapping[str, str] | None = None) -> str | None:
    """Resolve a hex literal or a palette name to a hex string, or None."""
    if is_hex_literal(token):
        return token
    if palette is None:
        palette = CLASSIC_PALETTE
    return palette.get(token.lower())


def merge_palette(overrides: Mapping[str, str]) -> dict[str, str]:
    """Return the classic palette with *overrides* applied (names lowercased)."""
    merged = dict(CLASSIC_PALETTE)
    for name, value in overrides.items():
        merged[name.lower()] = value
    return merged
