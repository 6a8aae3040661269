# tsdata/core/exceptions.py
from __future__ import annotations

from datetime import datetime
from typing import Sequence


def _printable(value: str) -> str:
    # Undecodable input bytes arrive as lone surrogates; show them as \xNN
    try:
        raw = value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")


class TsdataError(ValueError):
    """Base error for all TSDATA format exceptions."""


# ---- Header / metadata errors (fatal for the whole file) ----
class MetadataError(TsdataError):
    """Raised when a header block or a Metadata instance is not valid."""


class HeaderShapeError(MetadataError):
    def __init__(self, found: int, expected: int = 7) -> None:
        self.found = found
        self.expected = expected
        super().__init__(f"expected {expected} lines in header, found {found}")


class MissingFileType(MetadataError):
    def __init__(self) -> None:
        super().__init__("missing or empty FileType")


class MissingProject(MetadataError):
    def __init__(self) -> None:
        super().__init__("missing or empty Project")


class EmptyComment(MetadataError):
    def __init__(self, column: int) -> None:
        self.column = column
        super().__init__(f"empty comment in column {column}")


class CommentCountMismatch(MetadataError):
    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"inconsistent Types column count: {found} types for {expected} comments"
        )


class MissingTypes(MetadataError):
    def __init__(self) -> None:
        super().__init__("missing or empty Types")


class UnknownType(MetadataError):
    def __init__(self, value: str, column: int) -> None:
        self.value = value
        self.column = column
        super().__init__(f"bad Types value '{_printable(value)}' in column {column}")


class MissingUnits(MetadataError):
    def __init__(self) -> None:
        super().__init__("missing or empty Units")


class UnitCountMismatch(MetadataError):
    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"inconsistent Units column count: found {found}, expected {expected}")


class EmptyUnit(MetadataError):
    def __init__(self, column: int) -> None:
        self.column = column
        super().__init__(f"empty Units value in column {column}")


class MissingHeaders(MetadataError):
    def __init__(self) -> None:
        super().__init__("missing or empty Headers")


class HeaderCountMismatch(MetadataError):
    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"inconsistent Headers column count: found {found}, expected {expected}")


class FirstColumnNotTime(MetadataError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"first Headers column should be 'time', found '{_printable(value)}'")


class EmptyHeader(MetadataError):
    def __init__(self, column: int) -> None:
        self.column = column
        super().__init__(f"empty Headers value in column {column}")


class NoDataColumns(MetadataError):
    def __init__(self, found: int) -> None:
        self.found = found
        super().__init__(f"expected a time column plus at least one data column, found {found} column(s)")


# ---- Data line errors (scoped to one line) ----
class LineError(TsdataError):
    """Raised when a single data line fails validation."""


class TooFewColumns(LineError):
    def __init__(self, found: int) -> None:
        self.found = found
        super().__init__(f"found {found} columns, expected at least 2")


class ColumnCountMismatch(LineError):
    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"found {found} columns, expected {expected}")


class InvalidTimestamp(LineError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"column 1, bad timestamp '{_printable(value)}'")


class ColumnValidationError(LineError):
    """
    A field failed its column type check.

    `column`/`value` describe the first failure. `failures` lists every
    (column, value) pair found; it holds a single entry unless the line was
    checked with strict=False.
    """

    def __init__(
        self,
        column: int,
        value: str,
        failures: Sequence[tuple[int, str]] | None = None,
    ) -> None:
        self.column = column
        self.value = value
        self.failures = tuple(failures) if failures else ((column, value),)
        msg = f"column {column}, bad value '{_printable(value)}'"
        if len(self.failures) > 1:
            msg += f" ({len(self.failures) - 1} more bad value(s) in this line)"
        super().__init__(msg)


class NonMonotonicTimestamp(LineError):
    def __init__(self, previous: datetime, current: datetime) -> None:
        self.previous = previous
        self.current = current
        super().__init__(
            f"timestamp {current.isoformat()} is earlier than previous {previous.isoformat()}"
        )
