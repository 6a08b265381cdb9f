"""Tests for shared validators and logging setup."""

import logging

import pytest

from shared import logging_config
from shared.logging_config import LOGGER_NAME, configure_logging, get_invocation_logger
from shared.validators import MAX_REQUEST_SIZE, validate_request_size


class TestValidateRequestSize:
    """Tests for validate_request_size function."""

    @pytest.mark.parametrize("content_length", [None, "", "0", "1024", str(MAX_REQUEST_SIZE)])
    def test_accepted(self, content_length):
        assert validate_request_size(content_length) == (True, None, None)

    def test_too_large(self):
        is_valid, error_msg, status_code = validate_request_size(str(MAX_REQUEST_SIZE + 1))
        assert not is_valid
        assert status_code == 413
        assert "10MB" in error_msg

    def test_not_a_number(self):
        assert validate_request_size("ten") == (False, "Invalid Content-Length header", 400)


@pytest.fixture
def fresh_logging(monkeypatch):
    """Reset the configured flag and restore the webhook logger level afterwards."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    monkeypatch.setattr(logging_config, "_configured", False)
    yield logger
    logger.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_default_level(self, fresh_logging, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert configure_logging().level == logging.DEBUG

    def test_level_from_environment(self, fresh_logging, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert configure_logging().level == logging.WARNING

    def test_explicit_level(self, fresh_logging):
        assert configure_logging(logging.ERROR).level == logging.ERROR

    def test_unknown_level_falls_back(self, fresh_logging, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert configure_logging().level == logging.DEBUG


class TestGetInvocationLogger:
    """Tests for get_invocation_logger function."""

    def test_wraps_webhook_logger(self, fresh_logging):
        invocation_logger = get_invocation_logger("abc123")

        assert invocation_logger.logger is fresh_logging
        assert invocation_logger.extra == {"invocation_id": "abc123"}

    def test_messages_carry_invocation_id(self, fresh_logging, caplog):
        invocation_logger = get_invocation_logger("abc123")
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            invocation_logger.info("Training webhook received.")

        assert "[abc123] Training webhook received." in caplog.text

    def test_random_ids_differ(self, fresh_logging):
        first = get_invocation_logger().extra["invocation_id"]
        second = get_invocation_logger().extra["invocation_id"]
        assert first != second

    def test_shared_logger_is_configured_once(self, fresh_logging, monkeypatch):
        """Test that later invocations do not change the shared logger level."""
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        get_invocation_logger()
        assert fresh_logging.level == logging.INFO

        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        get_invocation_logger()
        assert fresh_logging.level == logging.INFO
