"""Tests for display formatting and logging setup."""

import logging

from backend.analytics.utils import format_number, format_value, is_number, setup_logging


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG")
    setup_logging("DEBUG")
    analytics_logger = logging.getLogger("analytics")
    assert analytics_logger.level == logging.DEBUG
    assert len(analytics_logger.handlers) == 1


def test_setup_logging_unknown_level_falls_back_to_info():
    setup_logging("chatty")
    assert logging.getLogger("analytics").level == logging.INFO


def test_is_number():
    assert is_number(3.0)
    assert not is_number("3")
    assert not is_number(None)


def test_format_value():
    assert format_value(None) == "—"
    assert format_value(10.0) == "10"
    assert format_value(12.5) == "12.5"
    assert format_value("Pasig") == "Pasig"


def test_format_number():
    assert format_number(None) == "—"
    assert format_number(0.0) == "0.00"
    assert format_number(3.14159) == "3.14"
    assert format_number(37.5, 1) == "37.5"
