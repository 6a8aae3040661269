from __future__ import annotations

import io
import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator

from tsdata.core import (
    HEADER_SIZE,
    LineError,
    Metadata,
    MonotonicTimePolicy,
    Record,
    parse_header,
    validate_line,
)

logger = logging.getLogger(__name__)

STDIO = "-"
ENCODING = "utf-8"
# Round-trips bytes that are not valid UTF-8
ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class LineResult:
    """
    Outcome of validating one data line.

    lineno is the 1-based line number in the file, so the first data line
    is HEADER_SIZE + 1. Exactly one of `record` / `error` is set.
    """

    lineno: int
    text: str
    record: Record | None = None
    error: LineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _chomp(line: str) -> str:
    """Drop one line terminator ("\\n" or "\\r\\n")."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def read_header(lines: Iterator[str]) -> str:
    """Consume up to HEADER_SIZE lines from `lines` and join them with newlines.

    Short input is not an error here; parse_header reports the wrong line count.
    """
    header_lines: list[str] = []
    for line in lines:
        header_lines.append(_chomp(line))
        if len(header_lines) == HEADER_SIZE:
            break
    return "\n".join(header_lines)


class TsdataReader:
    """Iterate over the data lines of a TSDATA text stream.

    The header is read and validated on construction, so a bad header raises
    a MetadataError before any data line is touched. Iterating yields one
    LineResult per remaining line, in file order. Iteration is single-pass.
    """

    def __init__(
        self,
        lines: Iterable[str],
        *,
        strict: bool = True,
        policy: MonotonicTimePolicy | None = None,
    ):
        self._lines = iter(lines)
        self.strict = strict
        self.policy = policy
        self.metadata: Metadata = parse_header(read_header(self._lines))
        logger.debug("header ok, %d columns", self.metadata.column_count)

    def __iter__(self) -> Iterator[LineResult]:
        lineno = HEADER_SIZE
        for raw in self._lines:
            lineno += 1
            text = _chomp(raw)
            try:
                record = validate_line(self.metadata, text, strict=self.strict, policy=self.policy)
            except LineError as e:
                yield LineResult(lineno=lineno, text=text, error=e)
            else:
                yield LineResult(lineno=lineno, text=text, record=record)


@contextmanager
def _wrap_stdio(stream: IO[str], **kwargs) -> Iterator[IO[str]]:
    # Re-wrap the binary buffer so decoding matches files on disk. Streams
    # without a buffer (already text, e.g. io.StringIO) are used as is.
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        yield stream
        return
    wrapper = io.TextIOWrapper(buffer, encoding=ENCODING, errors=ERRORS, **kwargs)
    try:
        yield wrapper
    finally:
        wrapper.flush()
        wrapper.detach()


@contextmanager
def open_input(path: str | Path) -> Iterator[IO[str]]:
    """Open `path` for reading text; "-" means stdin (left open).

    Lines end only at "\\n". Undecodable bytes are kept as surrogates, so they
    fail their column check instead of aborting the read.
    """
    if str(path) == STDIO:
        with _wrap_stdio(sys.stdin, newline="\n") as f:
            yield f
        return
    with open(path, "r", encoding=ENCODING, errors=ERRORS, newline="\n") as f:
        yield f


@contextmanager
def open_output(path: str | Path) -> Iterator[IO[str]]:
    """Open `path` for writing text; "-" means stdout (flushed, left open)."""
    if str(path) == STDIO:
        sys.stdout.flush()
        try:
            with _wrap_stdio(sys.stdout, newline="") as f:
                yield f
        finally:
            sys.stdout.flush()
        return
    with open(path, "w", encoding=ENCODING, errors=ERRORS, newline="") as f:
        yield f
