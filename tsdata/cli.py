"""Command line interface for tsdata."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import ConfigError, Settings, load_settings
from .core import MetadataError
from .io import clean_file, csv_file, validate_file
from .logging_utils import configure_logging, diagnostic_logger, log_event

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsdata",
        description="Process time-series TSDATA files (https://github.com/armbrustlab/tsdataformat).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="YAML settings file (optional)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit JSON logs")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate",
        help="Validates a TSDATA file",
        description="Validates metadata and data in INFILE. Prints errors encountered to STDERR. Use '-' for STDIN.",
    )
    validate.add_argument("infile", help="TSDATA file to validate")
    validate.add_argument(
        "-s", "--stringent", action="store_true", default=None,
        help="Exit after the first data line validation error",
    )
    validate.add_argument("-q", "--quiet", action="store_true", default=None, help="Suppress logging output")

    to_csv = subparsers.add_parser(
        "csv",
        help="Converts a TSDATA file to CSV",
        description="Validates and converts a TSDATA file at INFILE to a CSV file at OUTFILE. "
        "Use '-' for STDIN and STDOUT.",
    )
    to_csv.add_argument("infile", help="TSDATA input file")
    to_csv.add_argument("outfile", help="CSV output file")
    to_csv.add_argument("-q", "--quiet", action="store_true", default=None, help="Suppress logging output")

    clean = subparsers.add_parser(
        "clean",
        help="Clean a TSDATA file",
        description="Fix common errors in a TSDATA file at INFILE, write to OUTFILE. Use '-' for STDIN and STDOUT.",
    )
    clean.add_argument("infile", help="TSDATA input file")
    clean.add_argument("outfile", help="Cleaned TSDATA output file")
    clean.add_argument("-q", "--quiet", action="store_true", default=None, help="Suppress logging output")

    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    if args.log_level is not None:
        settings.log_level = args.log_level
    if args.json_logs is not None:
        settings.json_logs = args.json_logs
    if getattr(args, "quiet", None) is not None:
        settings.quiet = args.quiet
    if getattr(args, "stringent", None) is not None:
        settings.stringent = args.stringent
    return settings


def _run(args: argparse.Namespace, settings: Settings, diag: logging.Logger) -> int:
    if args.command == "validate":
        summary = validate_file(args.infile, stringent=settings.stringent, log=diag)
        log_event(logger, "validate", json_logs=settings.json_logs, infile=args.infile,
                  lines=summary.lines, errors=summary.errors)
        if not summary.ok:
            diag.error("%s failed validation", args.infile)
            return 1
    elif args.command == "csv":
        summary = csv_file(args.infile, args.outfile, log=diag)
        log_event(logger, "csv", json_logs=settings.json_logs, infile=args.infile,
                  written=summary.written, skipped=summary.skipped)
    elif args.command == "clean":
        summary = clean_file(args.infile, args.outfile, log=diag)
        log_event(logger, "clean", json_logs=settings.json_logs, infile=args.infile,
                  written=summary.written, skipped=summary.skipped)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    diag = diagnostic_logger(quiet=bool(getattr(args, "quiet", False)))
    try:
        settings = _resolve_settings(args)
    except (ConfigError, OSError) as e:
        diag.error(str(e))
        return 1

    configure_logging(level="ERROR" if settings.quiet else settings.log_level, json_logs=settings.json_logs)
    diag = diagnostic_logger(quiet=settings.quiet)

    try:
        return _run(args, settings, diag)
    except MetadataError as e:
        diag.error(str(e))
    except (OSError, UnicodeError) as e:
        diag.error(str(e))
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
