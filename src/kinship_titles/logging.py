"""Structlog-based logging for kinship_titles.

Library code logs through structlog and never prints.
"""
from __future__ import annotations

import logging
from typing import Literal, get_args

import structlog

from .config import LOG_LEVEL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: LogLevel = "WARNING") -> None:
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "kinship_titles"):
    return structlog.get_logger(name)


def level_or_default(level: str, default: LogLevel = "WARNING") -> LogLevel:
    """Return ``level`` upper-cased if it names a known level, else ``default``."""
    level = level.upper()
    return level if level in get_args(LogLevel) else default


# Initialize default config
configure_logging(level_or_default(LOG_LEVEL))
