"""
Shared fixtures for the Platform client test suite.
"""
import os
import sys

import httpx
import pytest

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Set env vars before any imports that read them
os.environ.setdefault("PLATFORM_API_URL", "https://api.example.com/api")
os.environ.setdefault("PLATFORM_API_TOKEN", "test-token")

from tests.testkit import API_URL, ENV_COLLECTION, FakeApi, environment_payload  # noqa: E402


@pytest.fixture
def api():
    """Fake API installed as the process-wide connector."""
    from platform_client.config.settings import Settings
    from platform_client.http.connector import ApiConnector, set_connector

    fake = FakeApi()
    connector = ApiConnector(
        Settings(api_url=API_URL, api_token="test-token"),
        transport=httpx.MockTransport(fake.handler),
    )
    set_connector(connector)
    yield fake
    set_connector(None)


@pytest.fixture
def make_environment():
    """Factory building an Environment from the canned payload plus overrides."""
    from platform_client.model.environment import Environment

    def _make(**overrides):
        return Environment.from_payload(environment_payload(**overrides), ENV_COLLECTION)

    return _make
