"""CLI entry point: argument parsing, logging setup, and exit codes."""

from __future__ import annotations

import logging
import os
import sys
from typing import Sequence

from minicat.config import PROG, build_arg_parser, build_config
from minicat.emitter import run
from minicat.errors import InvalidArguments, IoWriteError

EXIT_OK = 0
EXIT_WRITE_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the minicat logger: level from --verbose/--quiet, console handler on stderr.
    Default is WARNING so a normal run writes nothing but the requested output.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    root = logging.getLogger("minicat")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail again."""
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        # stdout is not backed by a real descriptor (e.g. replaced in tests)
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = build_config(argv)
    except InvalidArguments as exc:
        sys.stderr.write(build_arg_parser().format_usage())
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(verbose=config.verbose, quiet=config.quiet)

    try:
        result = run(config)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except IoWriteError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        if isinstance(exc.__cause__, BrokenPipeError):
            _silence_stdout()
        return EXIT_WRITE_ERROR

    if result.failures:
        logging.getLogger(__name__).info("%d source(s) could not be read", len(result.failures))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
