"""Tests for logging setup."""

import logging
import sys
from pathlib import Path

from molblog.logging_config import setup_logging


def _file_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_console_handler_writes_to_stderr() -> None:
    setup_logging(logging.INFO)
    logger = logging.getLogger("molblog")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr


def test_repeated_setup_closes_previous_log_file(tmp_path: Path) -> None:
    logger = logging.getLogger("molblog")

    setup_logging(logging.INFO, str(tmp_path / "first.log"))
    (first,) = _file_handlers(logger)

    setup_logging(logging.INFO, str(tmp_path / "second.log"))
    (second,) = _file_handlers(logger)

    assert first.stream is None
    assert second is not first
    assert len(logger.handlers) == 2
