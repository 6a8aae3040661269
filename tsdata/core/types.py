# tsdata/core/types.py
"""
Column type tags and their value predicates.

Every TSDATA column declares one of a fixed set of type tags. Each tag has
exactly one predicate that takes a whitespace-trimmed field and says whether
it is an acceptable value for that column. The missing-value token ``NA`` is
accepted by every predicate that has a notion of "missing"; the mandatory
leading timestamp column is handled separately by the line validator and
never accepts ``NA``.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Callable

import numpy as np

NA = "NA"

Checker = Callable[[str], bool]

_INT64 = np.iinfo(np.int64)

# RFC 3339 date-time with a mandatory offset. A single space is tolerated in
# place of the "T" separator.
_TIMESTAMP_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})", re.ASCII
)
_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)
# Hex mantissa with a mandatory binary exponent, e.g. 0x1.8p3
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+", re.ASCII
)
_INFINITY_LITERALS = frozenset({"inf", "infinity"})


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp with an explicit timezone offset.

    Accepts "T" or a single space between date and time. Raises ValueError
    for anything else, including ``NA``.
    """
    if not _TIMESTAMP_RE.fullmatch(value):
        raise ValueError(f"not an RFC 3339 timestamp with offset: '{value}'")
    return datetime.fromisoformat(value)


def _check_time(value: str) -> bool:
    if value == NA:
        return True
    try:
        parse_timestamp(value)
    except ValueError:
        return False
    return True


def _check_float(value: str) -> bool:
    if value == NA:
        return True
    if _HEX_FLOAT_RE.fullmatch(value):
        try:
            float.fromhex(value)
        except OverflowError:
            return False
        return True
    # float() also takes "1_000" and non-ASCII digits
    if "_" in value or not value.isascii():
        return False
    try:
        parsed = np.float64(float(value))
    except ValueError:
        return False
    if np.isinf(parsed):
        # Out-of-range finite literals overflow to inf; only explicit
        # infinity spellings are valid.
        return value.lstrip("+-").lower() in _INFINITY_LITERALS
    return True


def _check_integer(value: str) -> bool:
    if value == NA:
        return True
    if not _INTEGER_RE.fullmatch(value):
        return False
    return _INT64.min <= int(value) <= _INT64.max


def _check_text(value: str) -> bool:
    return True


def _check_category(value: str) -> bool:
    return value != ""


def _check_boolean(value: str) -> bool:
    return value in ("TRUE", "FALSE", NA)


class ColumnType(Enum):
    """Closed set of column type tags. The value is the tag as written in headers."""

    TIME = "time"
    FLOAT = "float"
    INTEGER = "integer"
    TEXT = "text"
    CATEGORY = "category"
    BOOLEAN = "boolean"

    @classmethod
    def from_tag(cls, tag: str) -> "ColumnType | None":
        try:
            return cls(tag)
        except ValueError:
            return None

    @property
    def checker(self) -> Checker:
        return _CHECKERS[self]

    def check(self, value: str) -> bool:
        return _CHECKERS[self](value)


_CHECKERS: dict[ColumnType, Checker] = {
    ColumnType.TIME: _check_time,
    ColumnType.FLOAT: _check_float,
    ColumnType.INTEGER: _check_integer,
    ColumnType.TEXT: _check_text,
    ColumnType.CATEGORY: _check_category,
    ColumnType.BOOLEAN: _check_boolean,
}

if set(_CHECKERS) != set(ColumnType):
    raise RuntimeError("every ColumnType needs exactly one checker")

TYPE_TAGS: frozenset[str] = frozenset(t.value for t in ColumnType)


def checker_for(tag: str) -> Checker | None:
    """Return the predicate for `tag`, or None if the tag is not recognized."""
    column_type = ColumnType.from_tag(tag)
    return None if column_type is None else column_type.checker
