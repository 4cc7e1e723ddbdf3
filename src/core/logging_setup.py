"""Logging configuration for the recommender client.

All loggers live under the ``recommender`` namespace so a single handler,
configured once at startup, controls every module.

Usage:
    from core.logging_setup import configure_logging, get_logger

    configure_logging(level="DEBUG")
    log = get_logger("api")
    log.debug("GET %s", url)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

ROOT_LOGGER_NAME = "recommender"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(
    level: str = "WARNING",
    output: str | Path | TextIO | None = None,
    timestamps: bool = True,
) -> logging.Logger:
    """Configure the ``recommender`` logger.

    Args:
        level: One of ``LOG_LEVELS`` (case insensitive).
        output: Where to send logs:
            - None: sys.stderr (default, keeps stdout clean for command output)
            - str/Path: file path
            - TextIO: any file-like object
        timestamps: Prefix each record with its time.

    Returns:
        The configured root logger of the namespace.
    """
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    numeric_level: int = getattr(logging, level_name)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    for existing_handler in logger.handlers[:]:
        logger.removeHandler(existing_handler)
        existing_handler.close()

    handler: logging.Handler
    if output is None:
        handler = logging.StreamHandler(sys.stderr)
    elif isinstance(output, (str, Path)):
        handler = logging.FileHandler(str(output))
    elif hasattr(output, "write"):
        handler = logging.StreamHandler(output)
    else:
        raise ValueError(f"Invalid output: {type(output)}")

    parts = []
    if timestamps:
        parts.append("%(asctime)s")
    parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])

    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(" ".join(parts)))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``recommender.<name>`` (or the namespace root if ``name`` is None)."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
