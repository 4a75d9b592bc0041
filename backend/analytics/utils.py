"""
utils.py — Shared Utility Functions and Logging Setup
======================================================

Common helpers used across the analytics pipeline modules.
"""

import logging

from . import config


def setup_logging(level: str = None) -> None:
    """
    Configure structured logging for the analytics pipeline.

    Sets up a console handler with timestamp, logger name, level,
    and message.  All analytics.* loggers inherit this configuration.

    Args:
        level: Log level string (DEBUG/INFO/WARNING/ERROR/CRITICAL).
               Defaults to config.LOG_LEVEL.
    """
    level = level or config.LOG_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(name)s] %(levelname)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    analytics_logger = logging.getLogger("analytics")
    analytics_logger.setLevel(numeric_level)

    # Avoid duplicate handlers on repeated calls
    if not analytics_logger.handlers:
        analytics_logger.addHandler(handler)


def is_number(value) -> bool:
    """True if a cell value is the Number variant (a float, not a bool)."""
    return isinstance(value, float)


def format_value(value) -> str:
    """
    Render a raw cell value as a display string.

    Missing cells render as config.MISSING_MARKER.  Whole numbers drop
    the trailing ".0" so "10" in the file shows as "10".

    Args:
        value: A cell value (float, str, or None).

    Returns:
        Display string.
    """
    if value is None:
        return config.MISSING_MARKER
    if is_number(value):
        return str(int(value)) if value.is_integer() else str(value)
    return str(value)


def format_number(value, decimals: int = None) -> str:
    """
    Render a computed value with a fixed number of decimals.

    Not-applicable results (None) render as config.MISSING_MARKER, so
    they stay distinguishable from a computed zero ("0.00").
    """
    if value is None:
        return config.MISSING_MARKER
    decimals = config.DISPLAY_DECIMALS if decimals is None else decimals
    return f"{value:.{decimals}f}"
