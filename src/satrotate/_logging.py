"""
--------------------------------------------------------------------------------
<satrotate project>
satrotate/_logging.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import json
import logging
import sys

from rich.logging import RichHandler

_DEF_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        return json.dumps(payload)


def build_handler(level: str = "INFO", json_logs: bool = False, console=None) -> logging.Handler:
    if json_logs:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
    elif console is not None:
        handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            rich_tracebacks=False,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_DEF_FMT))
    handler.setLevel(level.upper())
    return handler


def get_logger(name: str = "satrotate") -> logging.Logger:
    """Library-friendly logger. Output is configured once by the CLI."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
