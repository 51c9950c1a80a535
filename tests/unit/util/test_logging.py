"""Unit tests for logging setup."""

import logging

import logfire

from diary.config import Settings
from diary.util.logging import log_level, setup_logging


class TestLogLevel:
    """Tests for the environment to level mapping."""

    def test_test_environment_is_quiet(self):
        assert log_level(Settings(environment="test", debug=False)) == logging.WARNING

    def test_debug_wins(self):
        assert log_level(Settings(environment="production", debug=True)) == logging.DEBUG

    def test_production_logs_info(self):
        assert log_level(Settings(environment="production", debug=False)) == logging.INFO


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_routes_records_to_logfire(self):
        # Arrange
        settings = Settings(environment="test", debug=False)

        # Act
        setup_logging(settings)

        # Assert
        root = logging.getLogger()
        assert any(isinstance(h, logfire.LogfireLoggingHandler) for h in root.handlers)
        assert logging.getLogger("httpx").level == logging.WARNING
