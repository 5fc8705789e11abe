"""Error types and formatted source context."""

from __future__ import annotations

from miniformat.tokens import Span


class ColorDecodeError(ValueError):
    """Raised when a color string cannot be decoded into RGB channels."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"cannot decode color {value!r} (expected #rrggbb)")


def format_context(
    message: str,
    span: Span,
    source: str,
    filename: str = "<input>",
    severity: str = "error",
) -> str:
    """Format *message* with the offending source line and a caret underline.

    Shared by lint ``Issue.format`` for the CLI ``--check`` report.
    """
    lines = source.splitlines(keepends=True)
    line_idx = span.start.line - 1
    col = span.start.column

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(span.start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"{severity}: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{span.start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )
