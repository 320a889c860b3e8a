"""Stderr logging for FLTR.

Ingestion notifications ("Loaded 3 events from auth.log"), warnings
about files that could not be loaded and parser debug output all go to
stderr, so stdout only ever carries the rendered timeline.
"""

import json
import sys
from datetime import UTC, datetime
from typing import Any, Literal

LogLevel = Literal["debug", "info", "warning", "error"]
LogFormat = Literal["text", "json"]

LEVELS: dict[str, int] = {"debug": 10, "info": 20, "warning": 30, "error": 40}

_threshold = LEVELS["info"]
_log_format: LogFormat = "text"


def configure_logging(
    log_format: LogFormat = "text",
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the stderr channel.

    Args:
        log_format: ``text`` lines or one JSON object per line
        verbose: Also emit debug messages
        quiet: Only emit warnings and errors; overrides ``verbose``
    """
    global _threshold, _log_format
    _log_format = log_format
    if quiet:
        _threshold = LEVELS["warning"]
    elif verbose:
        _threshold = LEVELS["debug"]
    else:
        _threshold = LEVELS["info"]


def log(message: str, level: LogLevel = "info", **context: Any) -> None:
    """Write a message to stderr if its level passes the threshold.

    ``context`` (file names, event ids) is only emitted in JSON format.
    """
    if LEVELS[level] < _threshold:
        return

    if _log_format == "json":
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            **context,
        }
        line = json.dumps(entry, default=str)
    elif level == "info":
        line = message
    else:
        line = f"[{level.upper()}] {message}"

    print(line, file=sys.stderr)


def debug(message: str, **context: Any) -> None:
    log(message, level="debug", **context)


def info(message: str, **context: Any) -> None:
    log(message, level="info", **context)


def warning(message: str, **context: Any) -> None:
    log(message, level="warning", **context)


def error(message: str, **context: Any) -> None:
    log(message, level="error", **context)
