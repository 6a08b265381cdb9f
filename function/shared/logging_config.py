"""Logger setup for the webhook and its invocations."""

import logging
import os
import uuid

LOGGER_NAME = "training_webhook"
DEFAULT_LOG_LEVEL = "DEBUG"

_configured = False


class InvocationLogger(logging.LoggerAdapter):
    """Prefixes every message with the ID of the invocation it belongs to."""

    def process(self, msg, kwargs):
        return f"[{self.extra['invocation_id']}] {msg}", kwargs


def _resolve_level(level):
    if level is None:
        level = os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            logging.warning(f"Unknown LOG_LEVEL {level!r}, using {DEFAULT_LOG_LEVEL}")
            resolved = logging.getLevelName(DEFAULT_LOG_LEVEL)
        level = resolved
    return level


def configure_logging(level=None):
    """
    Set the level of the webhook logger.

    Args:
        level: Level name or number; defaults to LOG_LEVEL or DEBUG

    Returns:
        logging.Logger
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level(level))
    _configured = True
    return logger


def get_invocation_logger(invocation_id=None):
    """
    Return the logger for one invocation.

    The webhook logger is configured on first use only; later invocations
    get their own adapter and leave the shared logger untouched.

    Args:
        invocation_id: ID shown in every message; a random one if omitted

    Returns:
        InvocationLogger
    """
    if not _configured:
        configure_logging()

    return InvocationLogger(
        logging.getLogger(LOGGER_NAME),
        {"invocation_id": invocation_id or uuid.uuid4().hex[:8]}
    )
