"""Parse, validate and re-serialize TSDATA time-series files."""

from importlib import metadata

from .core import (
    NA,
    DELIMITER,
    HEADER_SIZE,
    ColumnType,
    Metadata,
    MonotonicTimePolicy,
    Record,
    TsdataError,
    MetadataError,
    LineError,
    parse_header,
    render_header,
    validate_line,
    validate_metadata,
)
from .io import TsdataReader, clean, to_csv, validate_stream

try:
    __version__ = metadata.version("tsdata")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
    __version__ = "0.3.0"

__all__ = [
    "NA",
    "DELIMITER",
    "HEADER_SIZE",
    "ColumnType",
    "Metadata",
    "MonotonicTimePolicy",
    "Record",
    "TsdataError",
    "MetadataError",
    "LineError",
    "parse_header",
    "render_header",
    "validate_line",
    "validate_metadata",
    "TsdataReader",
    "to_csv",
    "clean",
    "validate_stream",
    "__version__",
]
