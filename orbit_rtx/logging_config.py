"""Logging configuration for the ray tracer."""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

from orbit_rtx.config import LOG_LEVEL, LOG_FORMAT


def setup_logging(
    name: str = "orbit_rtx",
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file

    Returns:
        Configured logger instance
    """
    if level is None:
        level = LOG_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler, added once per logger
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler, added once per file
    if log_file is not None:
        log_file = Path(log_file)
        for handler in logger.handlers:
            if (isinstance(handler, logging.handlers.RotatingFileHandler)
                    and handler.baseFilename == os.path.abspath(log_file)):
                return logger
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
