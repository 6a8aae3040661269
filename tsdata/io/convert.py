from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable

from tsdata.core import MonotonicTimePolicy, render_header
from tsdata.io.reader import LineResult, TsdataReader, open_input, open_output

_default_logger = logging.getLogger(__name__)


@dataclass
class ValidationSummary:
    lines: int = 0
    errors: int = 0
    stopped_early: bool = False

    @property
    def ok(self) -> bool:
        return self.errors == 0


@dataclass
class ConversionSummary:
    lines: int = 0
    written: int = 0
    skipped: int = 0


def _report(log: logging.Logger, result: LineResult) -> None:
    log.warning("line %d, %s", result.lineno, result.error)


def _as_reader(source: Iterable[str] | TsdataReader) -> TsdataReader:
    if isinstance(source, TsdataReader):
        return source
    return TsdataReader(source, strict=False)


def validate_stream(
    lines: Iterable[str],
    *,
    stringent: bool = False,
    policy: MonotonicTimePolicy | None = None,
    log: logging.Logger | None = None,
) -> ValidationSummary:
    """Validate header and data lines, reporting every bad line to `log`.

    A bad header raises a MetadataError. With stringent=True processing
    stops after the first bad data line.
    """
    log = log or _default_logger
    reader = TsdataReader(lines, strict=True, policy=policy)
    summary = ValidationSummary()
    for result in reader:
        summary.lines += 1
        if not result.ok:
            summary.errors += 1
            _report(log, result)
            if stringent:
                summary.stopped_early = True
                break
    return summary


def to_csv(
    source: Iterable[str] | TsdataReader,
    out: IO[str],
    *,
    log: logging.Logger | None = None,
) -> ConversionSummary:
    """Write the column headers then every valid data line as CSV rows.

    Bad lines are reported to `log` and left out of the output.
    """
    log = log or _default_logger
    reader = _as_reader(source)
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(reader.metadata.headers)

    summary = ConversionSummary()
    for result in reader:
        summary.lines += 1
        if result.record is None:
            summary.skipped += 1
            _report(log, result)
            continue
        writer.writerow(result.record.fields)
        summary.written += 1
    return summary


def clean(
    source: Iterable[str] | TsdataReader,
    out: IO[str],
    *,
    log: logging.Logger | None = None,
) -> ConversionSummary:
    """Re-write a TSDATA stream in normalized form.

    The header is re-rendered, with blank comments written as NA. Fields
    are whitespace-trimmed. Bad lines are reported to `log` and dropped.
    """
    log = log or _default_logger
    reader = _as_reader(source)
    out.write(render_header(reader.metadata) + "\n")

    summary = ConversionSummary()
    for result in reader:
        summary.lines += 1
        if result.record is None:
            summary.skipped += 1
            _report(log, result)
            continue
        out.write(result.record.line() + "\n")
        summary.written += 1
    return summary


def validate_file(
    infile: str | Path,
    *,
    stringent: bool = False,
    log: logging.Logger | None = None,
) -> ValidationSummary:
    with open_input(infile) as f:
        return validate_stream(f, stringent=stringent, log=log)


def csv_file(infile: str | Path, outfile: str | Path, *, log: logging.Logger | None = None) -> ConversionSummary:
    # Parse the header before creating the output so a bad header leaves no file behind
    with open_input(infile) as f:
        reader = TsdataReader(f, strict=False)
        with open_output(outfile) as out:
            return to_csv(reader, out, log=log)


def clean_file(infile: str | Path, outfile: str | Path, *, log: logging.Logger | None = None) -> ConversionSummary:
    with open_input(infile) as f:
        reader = TsdataReader(f, strict=False)
        with open_output(outfile) as out:
            return clean(reader, out, log=log)
