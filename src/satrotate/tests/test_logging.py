"""
--------------------------------------------------------------------------------
satrotate
src/satrotate/tests/test_logging.py

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import json
import logging

from rich.logging import RichHandler

from satrotate._console import console
from satrotate._logging import JsonFormatter, build_handler, get_logger


def test_json_formatter_emits_one_object_per_record() -> None:
    record = logging.LogRecord("satrotate.engine", logging.WARNING, __file__, 1, "seq %s kept", ("s1",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["name"] == "satrotate.engine"
    assert payload["message"] == "seq s1 kept"


def test_build_handler_variants() -> None:
    assert isinstance(build_handler("debug", json_logs=True).formatter, JsonFormatter)
    assert isinstance(build_handler("INFO", console=console), RichHandler)
    plain = build_handler("warning")
    assert plain.level == logging.WARNING
    assert not isinstance(plain, RichHandler)


def test_library_logger_is_silent_by_default() -> None:
    logger = get_logger("satrotate.tests.silent")
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
