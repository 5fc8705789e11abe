"""Tag registry — alias resolution for the built-in style tags."""

from __future__ import annotations

# Alias map: alternate name -> canonical name
ALIASES: dict[str, str] = {
    "b": "bold",
    "i": "italic",
    "em": "italic",
    "u": "underlined",
    "mono": "monospace",
    "tt": "monospace",
}

FLAG_TAGS: frozenset[str] = frozenset({"bold", "italic", "underlined", "monospace"})

GRADIENT_TAG = "gradient"
COLOR_TAG = "color"


def split_tag(tag: str) -> tuple[str, list[str]]:
    """Split a raw tag into its lowercased name and its argument segments."""
    name, *args = tag.split(":")
    return name.lower(), args


def resolve_name(name: str) -> str:
    """Resolve an alias to its canonical name."""
    return ALIASES.get(name, name)


def is_known(name: str) -> bool:
    """Return True if *name* (already lowercased) is a built-in tag name."""
    canonical = resolve_name(name)
    return canonical in FLAG_TAGS or canonical in (GRADIENT_TAG, COLOR_TAG)
