"""Style state and per-tag style resolution."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace

from miniformat.ast import ROOT_TAG
from miniformat.colors import WHITE, resolve_color
from miniformat.tags import COLOR_TAG, resolve_name, split_tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GradientSpec:
    """Ordered color stops of an active gradient."""

    stops: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class StyleState:
    """Resolved style in effect at a tree node."""

    color: str | None = None
    bold: bool = False
    italic: bool = False
    underlined: bool = False
    monospace: bool = False
    gradient: GradientSpec | None = None


def apply_tag(
    tag: str,
    style: StyleState,
    palette: Mapping[str, str] | None = None,
) -> StyleState:
    """Return a copy of *style* with the effect of *tag* applied.

    Flags only ever switch on. A gradient clears the solid color; a later
    color does not clear an active gradient.
    """
    if tag == ROOT_TAG:
        return style

    name, args = split_tag(tag)

    match resolve_name(name):
        case "bold":
            return replace(style, bold=True)
        case "italic":
            return replace(style, italic=True)
        case "underlined":
            return replace(style, underlined=True)
        case "monospace":
            return replace(style, monospace=True)
        case "gradient":
            if len(args) < 2:
                logger.debug("gradient tag <%s> needs at least two colors", tag)
                return style
            return replace(style, gradient=_gradient_spec(args, palette), color=None)

    resolved = resolve_color(tag, palette)
    if resolved is not None:
        return replace(style, color=resolved)

    if name == COLOR_TAG and args:
        resolved = resolve_color(args[0], palette)
        if resolved is not None:
            return replace(style, color=resolved)
        logger.debug("unresolved color %r in tag <%s>", args[0], tag)
        return style

    logger.debug("unknown tag <%s>", tag)
    return style


def _gradient_spec(args: list[str], palette: Mapping[str, str] | None) -> GradientSpec:
    stops: list[str] = []
    for arg in args:
        resolved = resolve_color(arg, palette)
        if resolved is None:
            logger.debug("unresolved gradient stop %r, using white", arg)
            resolved = WHITE
        stops.append(resolved)
    return GradientSpec(tuple(stops))
