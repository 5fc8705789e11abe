"""Command-line interface for MiniFormat."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from miniformat.colors import merge_palette
from miniformat.errors import ColorDecodeError
from miniformat.formats import FORMATS

logger = logging.getLogger(__name__)

CONFIG_NAME = "miniformat.toml"
LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    text: str | None
    input_file: Path | None
    output_format: str
    palette: dict[str, str]
    check: bool
    debug: bool
    log_level: int


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="miniformat",
        description="Render MiniFormat markup as styled text",
    )
    p.add_argument("text", nargs="?", help="Markup to render (default: read -f FILE or stdin)")
    p.add_argument("-f", "--file", help="Read markup from FILE")
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: ansi)",
    )
    p.add_argument(
        "--color",
        action="append",
        default=[],
        metavar="NAME=HEX",
        help="Add or override a named color (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--check", action="store_true", help="Report markup problems and exit")
    p.add_argument("--debug", action="store_true", help="Dump the tag tree to stderr")
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return p


def parse_color_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=HEX string into (name, hex)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid color format (expected NAME=HEX): {s}")
    name, _, value = s.partition("=")
    return name.lower(), value


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def palette_overrides(config: dict[str, Any]) -> dict[str, str]:
    """Return the [palette] table of a loaded config, names lowercased."""
    overrides: dict[str, str] = {}
    cfg_palette = config.get("palette")
    if isinstance(cfg_palette, dict):
        for k, v in cfg_palette.items():
            overrides[str(k).lower()] = str(v)
    return overrides


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise argparse.ArgumentTypeError(f"invalid log level: {name}")
    return level


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.file) if args.file else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, search_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    # Output format: config < CLI
    output_format = "ansi"
    cfg_format = config.get("format")
    if isinstance(cfg_format, str):
        if cfg_format not in FORMATS:
            raise argparse.ArgumentTypeError(f"invalid format in config: {cfg_format}")
        output_format = cfg_format
    if args.format is not None:
        output_format = args.format

    # Palette: classic < config < CLI
    overrides = palette_overrides(config)
    for raw in args.color:
        name, value = parse_color_arg(raw)
        overrides[name] = value

    # Log level: config < CLI
    log_level = logging.WARNING
    cfg_level = config.get("log_level")
    if isinstance(cfg_level, str):
        log_level = _level_from_name(cfg_level)
    if args.verbose == 1:
        log_level = logging.INFO
    elif args.verbose > 1:
        log_level = logging.DEBUG

    return CliOptions(
        text=args.text,
        input_file=input_file,
        output_format=output_format,
        palette=merge_palette(overrides),
        check=args.check,
        debug=args.debug,
        log_level=log_level,
    )


def configure_logging(level: int, stream: TextIO | None = None) -> None:
    """Attach a single stderr handler to the root logger at *level*."""
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def read_source(options: CliOptions, stdin: TextIO | None = None) -> tuple[str, str]:
    """Return (source, display name) from the positional text, -f file, or stdin."""
    if options.text is not None:
        return options.text, "<argument>"
    if options.input_file is not None:
        return options.input_file.read_text(encoding="utf-8"), str(options.input_file)
    stream = stdin if stdin is not None else sys.stdin
    return stream.read(), "<stdin>"


def render_source(source: str, options: CliOptions) -> str:
    """Parse *source* and render it in the configured output format."""
    from miniformat.debug import dump_tree
    from miniformat.formats import render_format
    from miniformat.parser import parse_tree
    from miniformat.render import parse

    if options.debug:
        dump_tree(parse_tree(source), file=sys.stderr)

    message = parse(source, options.palette)
    return render_format(message, options.output_format)


def run_check(source: str, filename: str, options: CliOptions) -> int:
    """Print lint issues to stderr; return 1 if any warning was found."""
    from miniformat.lint import WARNING, check

    issues = check(source, options.palette)
    for issue in issues:
        print(issue.format(filename), file=sys.stderr)
    warnings = sum(1 for issue in issues if issue.severity == WARNING)
    logger.info("%s: %d issue(s), %d warning(s)", filename, len(issues), warnings)
    return 1 if warnings else 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    configure_logging(options.log_level)

    try:
        source, filename = read_source(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.check:
        return run_check(source, filename, options)

    try:
        output = render_source(source, options)
    except ColorDecodeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def main_exit() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())
