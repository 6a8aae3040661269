# tsdata/core/record.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from .exceptions import (
    ColumnCountMismatch,
    ColumnValidationError,
    InvalidTimestamp,
    NonMonotonicTimestamp,
    TooFewColumns,
)
from .metadata import DELIMITER, Metadata
from .types import parse_timestamp


@dataclass(frozen=True, slots=True)
class Record:
    """One validated data line: trimmed fields in header order plus the parsed timestamp."""
    fields: Sequence[str]
    time: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    def line(self) -> str:
        return DELIMITER.join(self.fields)


@dataclass(slots=True)
class MonotonicTimePolicy:
    """
    Optional ordering check for a sequence of lines from one file.

    Rejects a timestamp earlier than the last one it accepted. With
    strictly=True equal timestamps are rejected too. Holds per-file state, so
    use one instance per file and do not share it between threads.
    """
    strictly: bool = False
    last: datetime | None = field(default=None, init=False)

    def check(self, current: datetime) -> None:
        if self.last is not None:
            if current < self.last or (self.strictly and current == self.last):
                raise NonMonotonicTimestamp(self.last, current)
        self.last = current

    def reset(self) -> None:
        self.last = None


def validate_line(
    meta: Metadata,
    line: str,
    strict: bool = True,
    policy: MonotonicTimePolicy | None = None,
) -> Record:
    """
    Validate one data line against `meta` and return its Record.

    The first column must always hold a real timestamp. With strict=True the
    first failing column raises immediately; with strict=False every column
    is checked and the raised ColumnValidationError lists all failures.
    Values are never repaired. `meta` is expected to have passed
    validate_metadata; a column with no known type fails its check.
    """
    fields = line.split(DELIMITER)
    if len(fields) < 2:
        raise TooFewColumns(len(fields))
    if len(fields) != len(meta.headers):
        raise ColumnCountMismatch(len(meta.headers), len(fields))

    fields = [f.strip() for f in fields]
    try:
        time = parse_timestamp(fields[0])
    except ValueError as e:
        raise InvalidTimestamp(fields[0]) from e

    failures: list[tuple[int, str]] = []
    for i in range(1, len(fields)):
        # Unvalidated metadata may declare fewer types than headers
        check = meta.checkers[i] if i < len(meta.checkers) else None
        if check is None or not check(fields[i]):
            if strict:
                raise ColumnValidationError(i + 1, fields[i])
            failures.append((i + 1, fields[i]))
    if failures:
        column, value = failures[0]
        raise ColumnValidationError(column, value, failures)

    if policy is not None:
        policy.check(time)
    return Record(fields=fields, time=time)
