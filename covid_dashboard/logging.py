"""Logging utilities for the dashboard."""

import logging
import sys
from typing import Optional


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """Setup logging configuration for the dashboard.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        format_string: Custom format string for log messages
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=format_string,
        handlers=[
            logging.StreamHandler(sys.stdout),
            *([logging.FileHandler(log_file)] if log_file else [])
        ]
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name, configuring the root logger on first use."""
    if not logging.getLogger().handlers:
        from covid_dashboard import config
        setup_logging(config.LOG_LEVEL, config.LOG_FILE)

    return logging.getLogger(name)
