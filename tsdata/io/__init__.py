# tsdata/io/__init__.py
"""
Stream and file glue around the core format engine.

Reads header and data lines from text streams, drives validation, and
writes CSV or cleaned TSDATA output. "-" as a path means stdin / stdout.
"""

from .reader import STDIO, LineResult, TsdataReader, open_input, open_output, read_header
from .convert import (
    ConversionSummary,
    ValidationSummary,
    clean,
    clean_file,
    csv_file,
    to_csv,
    validate_file,
    validate_stream,
)


__all__ = [
    "STDIO",
    "LineResult",
    "TsdataReader",
    "open_input",
    "open_output",
    "read_header",
    "ValidationSummary",
    "ConversionSummary",
    "validate_stream",
    "to_csv",
    "clean",
    "validate_file",
    "csv_file",
    "clean_file",
]
