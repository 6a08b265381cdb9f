"""Training webhook module for logging chat workout messages to Notion."""

from .training_webhook import training_log_webhook, handle_event
from . import message_parser

__all__ = ['training_log_webhook', 'handle_event', 'message_parser']
