"""Configuration: numbering mode, the run Config, and the argument parser that builds it."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
from typing import NoReturn, Sequence

from minicat import __version__
from minicat.errors import InvalidArguments

PROG = "minicat"
STDIN_PATH = "-"


class NumberingMode(Enum):
    """Which lines get a number prefix."""

    NONE = "none"
    ALL = "all"
    NONBLANK = "nonblank"


@dataclass(frozen=True)
class Config:
    """Everything one run needs. Built once from argv, then only read."""

    mode: NumberingMode = NumberingMode.NONE
    files: tuple[str, ...] = ()  # Empty means read standard input
    verbose: bool = False
    quiet: bool = False


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises InvalidArguments instead of exiting on bad input."""

    def error(self, message: str) -> NoReturn:
        raise InvalidArguments(message)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Concatenate files to standard output, optionally numbering lines.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    number_group = parser.add_mutually_exclusive_group()
    number_group.add_argument(
        "-n",
        "--number",
        dest="mode",
        action="store_const",
        const=NumberingMode.ALL,
        help="Number all output lines.",
    )
    number_group.add_argument(
        "-b",
        "--number-nonblank",
        dest="mode",
        action="store_const",
        const=NumberingMode.NONBLANK,
        help="Number only non-blank output lines.",
    )
    parser.set_defaults(mode=NumberingMode.NONE)

    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) logging.")
    log_group.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Files to read in order; '-' or no files reads standard input.",
    )
    return parser


def build_config(argv: Sequence[str]) -> Config:
    """
    Turn command-line tokens (without the program name) into a Config.

    Raises InvalidArguments when -n and -b are both given or when an
    unrecognized option is present. --help and --version print and exit.
    """
    parser = build_arg_parser()
    # Intermixed so "a.txt -n b.txt" keeps both files
    args = parser.parse_intermixed_args(list(argv))
    return Config(
        mode=args.mode,
        files=tuple(args.files),
        verbose=args.verbose,
        quiet=args.quiet,
    )
