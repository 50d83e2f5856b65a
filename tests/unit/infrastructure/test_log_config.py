"""Tests for src/infrastructure/log_config.py."""

import logging
from unittest.mock import patch

from src.infrastructure.database import Settings
from src.infrastructure.log_config import DATE_FORMAT, LOG_FORMAT, configure_logging


def _configured_level(log_level):
    with patch("src.infrastructure.log_config.logging.basicConfig") as basic_config:
        configure_logging(Settings(log_level=log_level))
    return basic_config.call_args.kwargs


def test_configure_logging_sets_named_level():
    assert _configured_level("WARNING")["level"] == logging.WARNING


def test_configure_logging_level_is_case_insensitive():
    assert _configured_level("debug")["level"] == logging.DEBUG


def test_configure_logging_unknown_level_falls_back_to_info():
    assert _configured_level("chatty")["level"] == logging.INFO


def test_configure_logging_replaces_existing_handlers():
    kwargs = _configured_level("INFO")
    assert kwargs["force"] is True
    assert kwargs["format"] == LOG_FORMAT
    assert kwargs["datefmt"] == DATE_FORMAT
