"""Pytest configuration and fixtures."""

import json
import logging
from datetime import date
from unittest.mock import MagicMock

import pytest


class FakeProvider:
    """Credential provider backed by a dict; records every lookup."""

    def __init__(self, values=None, error=None):
        self.values = values or {}
        self.error = error
        self.calls = []

    def get_parameter(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        return self.values.get(name)


@pytest.fixture
def workout_date():
    return date(2025, 5, 1)


@pytest.fixture
def logger():
    return logging.getLogger("training_webhook.tests")


@pytest.fixture
def configured_provider():
    return FakeProvider({
        "/NOTION_API_KEY": "secret_test_key",
        "/NOTION_DATABASE_ID": "db-123",
    })


@pytest.fixture
def make_event():
    """Build a webhook event carrying the given message text."""
    def _make_event(text):
        body = {"events": [{"type": "message", "message": {"type": "text", "text": text}}]}
        return {"body": json.dumps(body, ensure_ascii=False)}
    return _make_event


@pytest.fixture
def make_http():
    """Build a requests stand-in whose post returns the given status and body."""
    def _make_http(status_code=200, content=b"{}"):
        response = MagicMock()
        response.status_code = status_code
        response.content = content
        http = MagicMock()
        http.post.return_value = response
        return http
    return _make_http
