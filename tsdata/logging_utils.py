"""Logging helpers for the tsdata command line tool."""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any

DIAGNOSTIC_LOGGER = "tsdata.diagnostics"
JSON_LOGS_ENV = "TSDATA_JSON_LOGS"

_TEXT_FORMAT = "%(levelname)s:%(name)s:%(message)s"
_JSON_FORMAT = "%(message)s"


def _env_json_logs(json_logs: bool | None = None) -> bool:
    """Return `json_logs`, or the TSDATA_JSON_LOGS setting when it is None."""
    if json_logs is not None:
        return json_logs
    return os.getenv(JSON_LOGS_ENV, "false").strip().lower() in ("1", "true", "yes", "on")


def configure_logging(level: str = "INFO", json_logs: bool | None = None) -> None:
    """Install a root handler at `level`; events are bare JSON lines when json_logs."""
    logging.basicConfig(
        level=logging.getLevelNamesMapping().get(level.upper(), logging.INFO),
        format=_JSON_FORMAT if _env_json_logs(json_logs) else _TEXT_FORMAT,
    )


def diagnostic_logger(quiet: bool = False, stream: Any = None) -> logging.Logger:
    """Return the logger that receives per-line validation diagnostics.

    Messages go to `stream` (stderr by default) as bare text and do not
    propagate to the root logger. When quiet, the logger is disabled instead
    of touching global logging state.
    """

    log = logging.getLogger(DIAGNOSTIC_LOGGER)
    for handler in list(log.handlers):
        log.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.INFO)
    log.propagate = False
    log.disabled = quiet
    return log


def log_event(logger: logging.Logger, event: str, *, json_logs: bool | None = None, **fields: Any) -> None:
    """Log `event` with its fields at INFO, as one JSON object or as key=value pairs."""
    if _env_json_logs(json_logs):
        logger.info(json.dumps({"event": event, **fields}, default=str))
        return
    logger.info("%s %s", event, " ".join(f"{k}={v}" for k, v in fields.items()))
