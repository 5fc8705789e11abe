"""Piecewise-linear multi-stop color interpolation."""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction

from miniformat.colors import WHITE, is_valid_hex
from miniformat.errors import ColorDecodeError


def decode_hex(value: str) -> tuple[int, int, int]:
    """Decode ``#rrggbb`` into an (r, g, b) tuple."""
    if not is_valid_hex(value):
        raise ColorDecodeError(value)
    rgb = int(value[1:], 16)
    return (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF


def encode_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def interpolate(stops: Sequence[str], position: int, total: int) -> str:
    """Return the color at *position* of a gradient spread over *total* characters.

    The stops divide *total* into equal segments; channels are interpolated
    linearly inside a segment and truncated to integers. The segment index and
    the in-segment fraction are exact ratios, so a channel that lands on an
    integer is never truncated one below it.
    """
    if not stops:
        return WHITE
    if len(stops) == 1 or total <= 1:
        return stops[0]

    # position / (total / (n - 1)) scaled to integers
    scaled = position * (len(stops) - 1)
    segment = min(max(scaled // total, 0), len(stops) - 2)
    fraction = Fraction(scaled % total, total)

    r1, g1, b1 = decode_hex(stops[segment])
    r2, g2, b2 = decode_hex(stops[segment + 1])

    return encode_hex(
        int(r1 + (r2 - r1) * fraction),
        int(g1 + (g2 - g1) * fraction),
        int(b1 + (b2 - b1) * fraction),
    )
