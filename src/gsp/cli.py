"""Command line interface for GSP.

Compiles each named file (or standard input) and writes the markup to
standard output, one document per line.

Usage:
    gsp [-d] [-x] [-n] [--ast] [-v] [file ...]

Exit status is 0 on success, 1 when a document fails to parse or an input
cannot be read, and 2 on a usage error.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import BinaryIO, TextIO

from gsp import __version__, compile_markup, parse
from gsp.config import OutputMode, RenderConfig, render_config_context
from gsp.errors import GspError
from gsp.serialization import to_json
from gsp.utils.logger import configure_cli_logging, get_logger

logger = get_logger(__name__)

PROG = "gsp"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Compile GSP markup to HTML or XML.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="file",
        help="GSP source files; '-' or no files reads standard input",
    )
    parser.add_argument(
        "-d",
        "--no-doctype",
        action="store_true",
        help="Do not prepend '<!DOCTYPE html>' to the output",
    )
    parser.add_argument(
        "-x",
        "--xml",
        action="store_true",
        help="Render in XML mode: childless elements are self-closing, no doctype line",
    )
    parser.add_argument(
        "-n",
        "--newlines",
        action="store_true",
        help="Emit a line feed after elements marked with '>'",
    )
    parser.add_argument(
        "--ast",
        action="store_true",
        help="Print the parsed AST as JSON instead of rendering it",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log parser and renderer debug output to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    return RenderConfig(
        mode=OutputMode.XML if args.xml else OutputMode.HTML,
        doctype=not args.no_doctype,
        newlines=args.newlines,
    )


def process(filename: str, out: TextIO, *, dump_ast: bool = False) -> None:
    """Compile one input and write it, followed by a line feed, to ``out``.

    Raises:
        GspError: If the document fails to parse or render
        OSError: If the file cannot be opened
    """
    if filename == "-":
        _process_stream(sys.stdin.buffer, None, out, dump_ast)
        return

    with open(filename, "rb") as stream:
        _process_stream(stream, filename, out, dump_ast)


def _process_stream(stream: BinaryIO, source_file: str | None, out: TextIO, dump_ast: bool) -> None:
    logger.debug("compiling %s", source_file or "<stdin>")
    if dump_ast:
        output = to_json(parse(stream, source_file=source_file), indent=2)
    else:
        output = compile_markup(stream, source_file=source_file)
    out.write(output)
    out.write("\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_cli_logging(args.verbose)

    with render_config_context(config_from_args(args)):
        for filename in args.files or ["-"]:
            try:
                process(filename, sys.stdout, dump_ast=args.ast)
            except (GspError, OSError) as exc:
                print(f"{PROG}: {exc}", file=sys.stderr)
                return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
