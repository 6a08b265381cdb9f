"""Shared utilities used by the webhook handlers."""

from .validators import validate_request_size, MAX_REQUEST_SIZE
from .logging_config import configure_logging, get_invocation_logger

__all__ = [
    'validate_request_size',
    'MAX_REQUEST_SIZE',
    'configure_logging',
    'get_invocation_logger'
]
