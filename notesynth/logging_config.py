# notesynth/logging_config.py
"""
Stderr-only logging configuration.

Synthesis output is streamed to stdout, so ALL logging must go to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per log record, for piping CLI logs into other tools."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _text_formatter() -> logging.Formatter:
    return logging.Formatter("%(asctime)s  %(levelname)-7s  %(message)s", datefmt="%H:%M:%S")


def configure_cli_logging(verbosity: str = "normal", log_format: str = "text") -> None:
    """
    Route all logging to stderr for CLI mode.

    Clears existing root handlers so nothing is written to stdout.

    Args:
        verbosity: "quiet", "normal" or "verbose" (from OutputConfig)
        log_format: "text" for human-readable lines, "json" for JsonFormatter
    """
    level = _VERBOSITY_LEVELS.get(verbosity, logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if log_format == "json" else _text_formatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    for logger_name in ["httpx", "httpcore"]:
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))
