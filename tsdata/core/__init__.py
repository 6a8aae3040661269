# tsdata/core/__init__.py
"""
Core format engine for tsdata.

This module defines the TSDATA model and its validation rules:
- Metadata: the parsed 7-line header plus derived per-column checkers
- ColumnType: closed set of column type tags, one predicate each
- Record: one validated data line
- parse_header / validate_metadata / render_header: header round trip
- validate_line: per-line validation against a Metadata

The core layer performs no file or stream I/O.
"""

from .types import NA, TYPE_TAGS, Checker, ColumnType, checker_for, parse_timestamp
from .metadata import (
    DELIMITER,
    HEADER_SIZE,
    TIME_HEADER,
    Metadata,
    parse_header,
    render_header,
    validate_metadata,
)
from .record import MonotonicTimePolicy, Record, validate_line
from .exceptions import (
    TsdataError,
    MetadataError,
    HeaderShapeError,
    MissingFileType,
    MissingProject,
    EmptyComment,
    CommentCountMismatch,
    MissingTypes,
    UnknownType,
    MissingUnits,
    UnitCountMismatch,
    EmptyUnit,
    MissingHeaders,
    HeaderCountMismatch,
    FirstColumnNotTime,
    EmptyHeader,
    NoDataColumns,
    LineError,
    TooFewColumns,
    ColumnCountMismatch,
    InvalidTimestamp,
    ColumnValidationError,
    NonMonotonicTimestamp,
)


__all__ = [
    # constants
    "NA",
    "DELIMITER",
    "HEADER_SIZE",
    "TIME_HEADER",
    "TYPE_TAGS",

    # column types
    "Checker",
    "ColumnType",
    "checker_for",
    "parse_timestamp",

    # metadata
    "Metadata",
    "parse_header",
    "render_header",
    "validate_metadata",

    # data lines
    "Record",
    "MonotonicTimePolicy",
    "validate_line",

    # exceptions
    "TsdataError",
    "MetadataError",
    "HeaderShapeError",
    "MissingFileType",
    "MissingProject",
    "EmptyComment",
    "CommentCountMismatch",
    "MissingTypes",
    "UnknownType",
    "MissingUnits",
    "UnitCountMismatch",
    "EmptyUnit",
    "MissingHeaders",
    "HeaderCountMismatch",
    "FirstColumnNotTime",
    "EmptyHeader",
    "NoDataColumns",
    "LineError",
    "TooFewColumns",
    "ColumnCountMismatch",
    "InvalidTimestamp",
    "ColumnValidationError",
    "NonMonotonicTimestamp",
]
