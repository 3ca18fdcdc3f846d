"""
Logging configuration for edwallet.

Two output formats:
  - **human** – coloured, single-line, readable
  - **json**  – newline-delimited JSON for log aggregators

Records carrying an edwallet error also report the failing operation
(``"op"``), so a corrupt wallet file and a bad signature are easy to tell
apart in aggregated logs.

Usage:
    from edwallet_core.logging_config import setup_logging
    setup_logging(level="DEBUG", fmt="json", log_file="edwallet.log")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from edwallet_core.errors import WalletError


def _operation(record: logging.LogRecord) -> str | None:
    if record.exc_info and isinstance(record.exc_info[1], WalletError):
        return record.exc_info[1].operation
    return getattr(record, "operation", None)


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        op = _operation(record)
        if op:
            log_obj["op"] = op
        if record.exc_info and record.exc_info[1]:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


class _HumanFormatter(logging.Formatter):
    """Coloured, concise single-line format."""

    COLOURS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, colour: bool = True):
        super().__init__()
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        colour = self.COLOURS.get(record.levelname, "") if self.colour else ""
        reset = self.RESET if self.colour else ""
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        op = _operation(record)
        suffix = f" (op={op})" if op else ""
        return (
            f"{colour}{ts} [{record.levelname:<7}]{reset} "
            f"{record.name}: {record.getMessage()}{suffix}"
        )


def setup_logging(
    level: str = "INFO",
    fmt: str = "human",
    log_file: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Parameters
    ----------
    level : str
        One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
    fmt : str
        ``"human"`` or ``"json"``.  Colour is only used when stderr is a tty.
    log_file : str, optional
        Also write logs here, always as JSON.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        console.setFormatter(_JSONFormatter())
    else:
        console.setFormatter(_HumanFormatter(colour=sys.stderr.isatty()))
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path))
        fh.setFormatter(_JSONFormatter())
        root.addHandler(fh)
