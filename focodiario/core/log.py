"""
FILE: focodiario/core/log.py
PURPOSE: File logging for the focodiario package
EXPORTS:
  - configure_logging(config) -> Optional[Path]
NOTES:
  - Terminal output belongs to Rich; log records go to <data_dir>/focodiario.log
  - Safe to call more than once (handler is attached only once)
"""

import logging
from pathlib import Path
from typing import Optional

from .config import FocoConfig

LOGGER_NAME = "focodiario"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(config: FocoConfig) -> Optional[Path]:
    """
    Attach a file handler to the package logger.

    Returns the log file path, or None when the file cannot be opened
    (logging then stays with the default last-resort handler).
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, config.log_level, logging.WARNING))

    if _handler is not None:
        return Path(_handler.baseFilename)  # type: ignore[attr-defined]

    log_path = config.log_path
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("Could not open log file %s: %s", log_path, e)
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    # Keep records out of the terminal
    logger.propagate = False
    _handler = handler
    return log_path
