"""
Logging Configuration Module

Provides consistent logging setup across the chunking, extraction and
retrieval packages.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the course materials pipeline.

    Handlers are attached to the ``course_rag`` logger and to the three
    pipeline package loggers so module-level ``logging.getLogger(__name__)``
    calls are picked up.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file
        format_string: Optional custom format string

    Returns:
        Configured ``course_rag`` logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in ("course_rag", "chunking", "extraction", "retrieval"):
        package_logger = logging.getLogger(name)
        package_logger.setLevel(level)
        # Remove existing handlers to avoid duplicates
        package_logger.handlers.clear()
        for handler in handlers:
            package_logger.addHandler(handler)

    return logging.getLogger("course_rag")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"course_rag.{name}")
