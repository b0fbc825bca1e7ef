"""
Shared test fixtures for ttrss-client tests.
Patches config module to avoid loading a real .env and making API calls.
"""

import json
import os
import sys
from unittest.mock import MagicMock

import pytest

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state."""
    from ttrss_client import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "HOST_URL", "http://rss.example")
    monkeypatch.setattr(config, "USER", "admin")
    monkeypatch.setattr(config, "PASSWORD", "secret")
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(config, "HTTP_MAX_RESPONSE_BYTES", 5_000_000)


def make_urlopen_response(body, content_type="application/json"):
    """Context-manager mock standing in for urllib.request.urlopen()'s result."""
    raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    cm = MagicMock()
    resp = cm.__enter__.return_value
    resp.status = 200
    resp.headers.get.return_value = content_type
    resp.read.return_value = raw
    return cm


def sent_payload(mock_urlopen, index=-1):
    """Decode the JSON body of a request passed to a patched urlopen."""
    req = mock_urlopen.call_args_list[index].args[0]
    return json.loads(req.data.decode("utf-8"))
