"""Logging utilities for sassvars.

Every extraction stage logs under its own child of the ``sassvars`` logger
(``sassvars.compiler``, ``sassvars.imports``, ``sassvars.extractor`` ...), so
verbose output names the stage a message came from.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

_LOGGER_NAME = "sassvars"

_CONSOLE_FORMAT = "[sassvars] %(levelname)s %(message)s"
_VERBOSE_FORMAT = "[sassvars] %(levelname)s %(stage)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(stage)s: %(message)s"


class _StageFilter(logging.Filter):
    """Expose the logger name relative to ``sassvars`` as ``%(stage)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = f"{_LOGGER_NAME}."
        name = record.name
        record.stage = name[len(prefix) :] if name.startswith(prefix) else name
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a stage logger under the sassvars hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | str | None = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure console output, and an optional file sink, for CLI runs.

    Verbose mode lowers the level to DEBUG and prefixes each line with the
    stage name. The file sink always records at DEBUG.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setLevel(level)
    console.addFilter(_StageFilter())
    console.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(_StageFilter())
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
