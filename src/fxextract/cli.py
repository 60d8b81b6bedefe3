"""Command-line interface for fxextract."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from fxextract.errors import ExtractError
from fxextract.model import ExtractedLiteral
from fxextract.options import DEFAULT_FUNCTION_NAME, RewriteOptions

CONFIG_NAME = "fxextract.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    output_file: Path | None
    rewrite: RewriteOptions
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="fxextract",
        description="Rewrite f/x extraction literals in C++ sources into formatting calls",
        epilog="With no files, reads stdin and writes stdout; with one, writes stdout.",
    )
    p.add_argument("input", nargs="?", help="Input source file (default: stdin)")
    p.add_argument("output", nargs="?", help="Output file (default: stdout)")
    p.add_argument(
        "-n",
        "--name",
        metavar="NAME",
        help=f"Function wrapping f literals; a trailing * becomes the argument count "
        f"(default: {DEFAULT_FUNCTION_NAME})",
    )
    p.add_argument(
        "--line-markers",
        action="store_true",
        default=None,
        help="Emit #line markers so diagnostics point at the original fields",
    )
    p.add_argument(
        "--source-path",
        metavar="PATH",
        help="File name written into #line markers (default: the input path)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--test", action="store_true", help="Run the built-in self test")
    p.add_argument("--debug", action="store_true", help="Dump rewritten literals to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    function_name = DEFAULT_FUNCTION_NAME
    line_markers = False
    cfg_rewrite = config.get("rewrite")
    if isinstance(cfg_rewrite, dict):
        cfg_name = cfg_rewrite.get("name")
        if isinstance(cfg_name, str) and cfg_name:
            function_name = cfg_name
        cfg_markers = cfg_rewrite.get("line-markers")
        if isinstance(cfg_markers, bool):
            line_markers = cfg_markers
    if args.name:
        function_name = args.name
    if args.line_markers is not None:
        line_markers = args.line_markers

    if args.source_path:
        source_path = args.source_path
    elif input_file is not None:
        source_path = str(input_file)
    else:
        source_path = "<stdin>"

    return CliOptions(
        input_file=input_file,
        output_file=Path(args.output) if args.output else None,
        rewrite=RewriteOptions(function_name, line_markers, source_path),
        debug=args.debug,
    )


def process(options: CliOptions) -> list[ExtractedLiteral]:
    """Rewrite the selected input into the selected output."""
    if options.input_file is None:
        _pass_bytes_through(sys.stdin)
        return _process_into(sys.stdin, options)
    with open(
        options.input_file, encoding="utf-8", errors="surrogateescape", newline=""
    ) as source:
        return _process_into(source, options)


def _pass_bytes_through(stream: TextIO) -> None:
    """Let undecodable bytes and CRLF line ends survive a standard stream."""
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape", newline="")


def _process_into(source: TextIO, options: CliOptions) -> list[ExtractedLiteral]:
    from fxextract.rewriter import rewrite_stream

    if options.output_file is None:
        _pass_bytes_through(sys.stdout)
        literals = rewrite_stream(source, sys.stdout, options.rewrite)
        sys.stdout.flush()
        return literals
    with open(
        options.output_file, "w", encoding="utf-8", errors="surrogateescape", newline=""
    ) as sink:
        return rewrite_stream(source, sink, options.rewrite)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.test:
        from fxextract.selftest import run_selftest

        print("Performing self test", file=sys.stderr)
        return 1 if run_selftest(file=sys.stderr) else 0

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    try:
        literals = process(options)
    except ExtractError as exc:
        print(str(exc), file=sys.stderr)
        if options.debug:
            print(exc.context(options.rewrite.source_path), file=sys.stderr)
        return 1
    except RecursionError:
        print("error: nesting too deep", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if options.debug:
        from fxextract.debug import dump_literals

        dump_literals(literals, file=sys.stderr)

    return 0
