#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .api import execute
from .config import DEFAULT_MEMORY_SIZE, DEFAULT_WORD_BITS, RuntimeOptions
from .errors import BFVMError
from .program import load_file
from .runtime import ProgramRuntime
from .streams import StdinSource, StdoutSink

logger = logging.getLogger(__name__)

BANNER = "bfvm - A Brainf*ck language interpreter written in Python."


def init_logging(verbose: bool = False) -> None:
    pkg = logging.getLogger("bfvm")
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)5s %(name)s: %(message)s"))
    pkg.addHandler(handler)
    pkg.setLevel(logging.DEBUG if verbose else logging.WARNING)
    pkg.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description="Run a Brainf*ck program.",
        add_help=False,
    )
    parser.add_argument("path", nargs="?", help="Program to run")
    parser.add_argument("-h", "-?", "--help", action="store_true", dest="help", help="Display this help message")
    parser.add_argument(
        "--memory-size", type=int, default=DEFAULT_MEMORY_SIZE,
        help=f"Number of tape cells (default {DEFAULT_MEMORY_SIZE})",
    )
    parser.add_argument(
        "--word-bits", type=int, default=DEFAULT_WORD_BITS,
        help=f"Wrap width of the pc and memory pointer (default {DEFAULT_WORD_BITS})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log loader/runtime debug messages to stderr")
    return parser


def print_help(parser: argparse.ArgumentParser) -> None:
    print(BANNER)
    print(f"Version {__version__}.")
    print()
    parser.print_help()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help or args.path is None:
        print_help(parser)
        return 0

    init_logging(args.verbose)

    try:
        options = RuntimeOptions(memory_size=args.memory_size, word_bits=args.word_bits)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logger.debug("loading %s", args.path)
    try:
        program = load_file(args.path)
    except OSError as e:
        print(f"error: couldn't read {args.path}: {e.strerror or e}", file=sys.stderr)
        return 1
    except BFVMError as e:
        print(f"error: failed to load program\n{e}", file=sys.stderr)
        return 1

    runtime = ProgramRuntime(options, output=StdoutSink(), input=StdinSource())
    try:
        execute(program, runtime)
    except BFVMError as e:
        sys.stdout.flush()
        print(f"error: program runtime execution error\n{e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
