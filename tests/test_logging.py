"""Tests for sassvars.logging."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from sassvars.logging import configure_logging, get_logger


def _reset() -> None:
    logger = logging.getLogger("sassvars")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_get_logger_names_stages_under_sassvars() -> None:
    assert get_logger().name == "sassvars"
    assert get_logger("imports").name == "sassvars.imports"


def test_default_console_output_hides_debug_and_stage() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)
    try:
        get_logger("imports").debug("Inlining a into b")
        get_logger("extractor").info("Extracting variables from main.scss")
    finally:
        _reset()

    assert stream.getvalue() == "[sassvars] INFO Extracting variables from main.scss\n"


def test_verbose_console_output_names_the_stage() -> None:
    stream = io.StringIO()
    configure_logging(verbose=True, stream=stream)
    try:
        get_logger("imports").debug("Inlining a into b")
    finally:
        _reset()

    assert stream.getvalue() == "[sassvars] DEBUG imports: Inlining a into b\n"


def test_log_file_records_debug_even_when_console_is_quiet(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "sassvars.log"
    configure_logging(log_file=log_file, stream=stream)
    try:
        get_logger("loader").debug("Loaded 3 included files")
    finally:
        _reset()

    assert stream.getvalue() == ""
    assert "DEBUG loader: Loaded 3 included files" in log_file.read_text(encoding="utf-8")


def test_reconfiguring_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)
    try:
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        _reset()
