"""
Logging setup for linesample.

Standard output carries sampled records, so every handler installed here
writes to standard error. Context passed through ``extra=`` (run label, seed,
counts) is kept as top-level keys by the JSON formatter.
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record: level, logger, message and the record's context."""

    def payload(self, record: logging.LogRecord) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key != "extra" and not key.startswith("_")
        }
        data.update(context)
        nested = getattr(record, "extra", None)
        if isinstance(nested, dict):
            data.update(nested)
        return data

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return json.dumps(self.payload(record), default=str)


def _dict_config(level: str, formatter: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": CONSOLE_DATEFMT},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "level": level,
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str = "WARNING", json_logs: bool = False, force: bool = True) -> None:
    """
    Install a single stderr handler on the root logger.

    With ``force=False`` an already configured root logger is left alone.
    """
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(_dict_config(level.upper(), "json" if json_logs else "console"))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
