"""Logging setup shared by the CLI, the web app and library modules."""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def level_from_string(value: Optional[str]) -> int:
    """Convert a level name to its numeric value, defaulting to INFO."""
    if not value:
        return logging.INFO
    return _LEVELS.get(value.strip().upper(), logging.INFO)


def default_level() -> int:
    explicit = os.getenv("LOG_LEVEL")
    if explicit:
        return level_from_string(explicit)
    # keep test output quiet unless asked otherwise
    if "pytest" in sys.modules:
        return logging.WARNING
    return logging.INFO


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger once and return it."""

    numeric = level_from_string(level) if level else default_level()
    logger = logging.getLogger("latex_hub")
    logger.setLevel(numeric)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger for ``name``."""
    if name.startswith("latex_hub"):
        return logging.getLogger(name)
    return logging.getLogger(f"latex_hub.{name}")
