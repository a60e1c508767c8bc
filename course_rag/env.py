"""Helpers for reading typed configuration values from the environment."""

import logging
import os

logger = logging.getLogger(__name__)


def env_str(name: str, default: str) -> str:
    value = os.environ.get(name)
    return value.strip() if value and value.strip() else default


def env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {name}={value!r}; using default {default}")
        return default


def env_float(name: str, default: float) -> float:
    """
    Read a float setting.

    ``nan`` and ``inf`` parse successfully and are returned as-is; callers
    decide what a non-finite value means for their setting.
    """
    value = os.environ.get(name)
    if not value or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid number for {name}={value!r}; using default {default}")
        return default
