"""Fixtures for integration tests against a real JSON wire server."""

import os

import pytest

from webdriver_wire import Capabilities, Client

# Set to a hub URL, e.g. http://localhost:4444/wd/hub, to run these tests
INTEGRATION_URL = os.environ.get("WEBDRIVER_WIRE_INTEGRATION_URL")


def pytest_collection_modifyitems(config, items):
    if INTEGRATION_URL:
        return
    skip = pytest.mark.skip(reason="WEBDRIVER_WIRE_INTEGRATION_URL is not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def server_url():
    """Return the JSON wire server URL."""
    return INTEGRATION_URL


@pytest.fixture
def live_client(server_url):
    """Client connected to the real server, closed after the test."""
    client = Client(server_url)
    yield client
    client.close()


@pytest.fixture
def live_session(live_client):
    """Owned browser session, deleted after the test."""
    with live_client.create_session(Capabilities(browserName="firefox")) as session:
        yield session
