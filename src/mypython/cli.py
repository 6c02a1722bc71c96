"""Command-line interface for the MyPython lexer."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mypython.errors import LexError

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    whitespace: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="mypython",
        description="Print the token stream of a MyPython source file",
    )
    # Optional here so a missing filename is reported with our own exit code
    p.add_argument("input", nargs="?", help="Source file to scan")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Token output format (default: text)",
    )
    p.add_argument(
        "--no-whitespace",
        dest="whitespace",
        action="store_false",
        default=None,
        help="Leave whitespace tokens out of the report",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover mypython.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens with positions to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "mypython.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}

    # Output format: config < CLI
    fmt = "text"
    cfg_format = cfg_output.get("format")
    if cfg_format is not None:
        if cfg_format not in FORMATS:
            raise argparse.ArgumentTypeError(
                f"invalid output format in config (expected text or json): {cfg_format}"
            )
        fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    # Whitespace tokens in the report: config < CLI
    whitespace = True
    cfg_ws = cfg_output.get("whitespace")
    if isinstance(cfg_ws, bool):
        whitespace = cfg_ws
    if args.whitespace is not None:
        whitespace = args.whitespace

    debug = args.debug
    cfg_debug = config.get("debug")
    if isinstance(cfg_debug, dict) and cfg_debug.get("tokens") is True:
        debug = True

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        whitespace=whitespace,
        debug=debug,
    )


def read_source(path: Path) -> str:
    """Read a source file one byte per character, keeping carriage returns intact."""
    with open(path, encoding="latin-1", newline="") as f:
        return f.read()


def scan_file(options: CliOptions) -> str:
    """Read and tokenize a source file, returning the rendered report."""
    from mypython.debug import dump_tokens
    from mypython.lexer import tokenize
    from mypython.report import render, render_json

    source = read_source(options.input_file)
    tokens = tokenize(source, str(options.input_file))

    if options.debug:
        dump_tokens(tokens, file=sys.stderr)

    if options.format == "json":
        return render_json(tokens, whitespace=options.whitespace)
    return render(tokens, whitespace=options.whitespace)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2/-1). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.input is None:
        print("Invalid number of arguments. Filename is required.", file=sys.stderr)
        return -1

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        report = scan_file(options)
    except OSError:
        print(f"An error occurred while opening {options.input_file}", file=sys.stderr)
        return -1
    except LexError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(report, encoding="utf-8")
    else:
        sys.stdout.write(report)

    return 0
