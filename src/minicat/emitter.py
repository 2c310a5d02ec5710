"""
Line emitter: read each source line by line, apply the numbering mode, write to stdout.

The line counter is the only state shared between sources. It is passed in
and returned explicitly so numbering continues across file boundaries.
"""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TextIO

from minicat.config import STDIN_PATH, Config, NumberingMode
from minicat.errors import FileOpenError, IoWriteError

logger = logging.getLogger(__name__)

SEPARATOR = "\t"


@dataclass
class RunResult:
    """Outcome of one run: where the counter ended and which sources failed."""

    next_number: int = 1
    failures: list[FileOpenError] = field(default_factory=list)


def is_blank(line: str) -> bool:
    """True if the line is empty once surrounding whitespace (and its newline) is stripped."""
    return not line.strip()


def number_line(line: str, mode: NumberingMode, counter: int) -> tuple[str, int]:
    """
    Format one line under mode. Returns (text to write, next counter value).

    ALL numbers every line, blank ones included. NONBLANK leaves blank lines
    as they are and does not advance the counter for them.
    """
    if mode is NumberingMode.NONE:
        return line, counter
    if mode is NumberingMode.NONBLANK and is_blank(line):
        return line, counter
    return f"{counter}{SEPARATOR}{line}", counter + 1


def write_text(out: TextIO, text: str) -> None:
    """Write to the output stream; any OS-level failure is fatal."""
    try:
        out.write(text)
    except OSError as exc:
        raise IoWriteError(f"write error: {exc.strerror or exc}") from exc


@contextmanager
def open_source(path: str, stdin: TextIO | None = None) -> Iterator[TextIO]:
    """
    Yield a readable text stream for path; '-' means standard input.

    Files are opened as UTF-8 with undecodable bytes replaced, and newline=""
    so line terminators come through unchanged. Standard input gets the same
    decoding by rewrapping its byte buffer, and is never closed.
    """
    if path == STDIN_PATH:
        source = stdin if stdin is not None else sys.stdin
        buffer = getattr(source, "buffer", None)
        if buffer is None:
            # Already a plain text stream (e.g. io.StringIO), nothing to decode
            yield source
            return
        wrapper = io.TextIOWrapper(buffer, encoding="utf-8", errors="replace", newline="")
        try:
            yield wrapper
        finally:
            wrapper.detach()
        return
    try:
        stream = open(path, encoding="utf-8", errors="replace", newline="")
    except OSError as exc:
        raise FileOpenError(path, exc.strerror or str(exc)) from exc
    with stream:
        yield stream


def _report(err: FileOpenError, stderr: TextIO) -> None:
    logger.info("Skipping %s: %s", err.path, err.reason)
    print(f"minicat: {err}", file=stderr)


def run(
    config: Config,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> RunResult:
    """
    Concatenate every source in config to stdout, numbering per config.mode.

    Sources that cannot be opened or read are reported on stderr and skipped;
    the rest are still processed. IoWriteError aborts immediately.
    """
    out = stdout if stdout is not None else sys.stdout
    err_out = stderr if stderr is not None else sys.stderr
    sources = config.files or (STDIN_PATH,)
    result = RunResult()
    counter = 1

    for path in sources:
        lines_read = 0
        try:
            with open_source(path, stdin) as stream:
                logger.debug("Reading %s", "<stdin>" if path == STDIN_PATH else path)
                for line in stream:
                    text, counter = number_line(line, config.mode, counter)
                    write_text(out, text)
                    lines_read += 1
        except FileOpenError as exc:
            result.failures.append(exc)
            _report(exc, err_out)
            continue
        except OSError as exc:
            # Read failed part way through; lines already written stay written
            failure = FileOpenError(path, exc.strerror or str(exc))
            result.failures.append(failure)
            _report(failure, err_out)
            continue
        logger.debug("Finished %s: %d lines, next number %d", path, lines_read, counter)

    try:
        out.flush()
    except OSError as exc:
        raise IoWriteError(f"write error: {exc.strerror or exc}") from exc

    result.next_number = counter
    return result
