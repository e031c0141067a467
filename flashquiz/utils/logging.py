from __future__ import annotations

import logging
import sys
from logging import Logger
from pathlib import Path

LOGGER_NAME = "flashquiz"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _attach(logger: Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(log_dir: str = "logs", filename: str = "flashquiz.log", level: str = "INFO") -> Logger:
    """Configure the ``flashquiz`` logger once: a file log plus warnings on stderr.

    Quiz prompts own stdout, so the console handler never goes below WARNING
    while the file receives everything at the configured level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_configured", False):
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    log_path = Path(log_dir) / filename
    log_path.parent.mkdir(parents=True, exist_ok=True)

    _attach(logger, logging.StreamHandler(sys.stderr), max(logger.level, logging.WARNING))
    _attach(logger, logging.FileHandler(str(log_path), encoding="utf-8"), logger.level)

    logger._configured = True  # type: ignore[attr-defined]
    logger.debug("Session log at %s (level %s)", log_path, logging.getLevelName(logger.level))
    return logger
