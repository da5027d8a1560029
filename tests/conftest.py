"""
Shared pytest fixtures for the chat-completion call core.

HTTP is never performed: tests patch ``src.api_client.executor.requests.post``
and build fake responses with the ``http_response`` factory.  Sleeps are
patched via the ``no_sleep`` fixture so backoff and pacing run instantly
while their durations stay observable.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from src.api_client import Credential

POST_TARGET = "src.api_client.executor.requests.post"
SLEEP_TARGET = "src.api_client.cancellation.time.sleep"


def completion_payload(content: str = "Hello there", **extra) -> dict:
    """Minimal well-formed chat-completion response body."""
    payload = {
        "id": "chatcmpl-test",
        "model": "gpt-3.5-turbo",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        "usage": {"prompt_tokens": 12, "completion_tokens": 3},
    }
    payload.update(extra)
    return payload


@pytest.fixture
def credential():
    return Credential(api_key="test-key", base_url="https://api.example.test/v1")


@pytest.fixture
def http_response():
    """Factory for fake ``requests.Response`` objects."""

    def _make(status_code: int = 200, payload=None, text: str | None = None):
        resp = MagicMock()
        resp.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        resp.text = text

        if payload is None:
            resp.json.side_effect = ValueError("Expecting value: line 1 column 1")
        else:
            resp.json.return_value = payload

        if status_code >= 400:
            resp.raise_for_status.side_effect = requests.HTTPError(
                f"{status_code} Error", response=resp
            )
        else:
            resp.raise_for_status.return_value = None
        return resp

    return _make


@pytest.fixture
def ok_response(http_response):
    return http_response(200, completion_payload())


@pytest.fixture
def no_sleep():
    """Patch time.sleep used by waits; yields the mock to inspect durations."""
    with patch(SLEEP_TARGET) as mock_sleep:
        yield mock_sleep
