"""Connectivity tests against a real JSON wire server.

These run only when WEBDRIVER_WIRE_INTEGRATION_URL points at a server that
still speaks the JSON wire protocol.
"""

import pytest

from webdriver_wire import By, Capabilities, ProtocolError

pytestmark = pytest.mark.integration


class TestServerConnectivity:
    """Tests for direct server access."""

    def test_status(self, live_client):
        """Should read the server status object."""
        status = live_client.get_status()

        assert isinstance(status, dict)

    def test_session_lifecycle(self, live_client):
        """Should create a session, list it, and delete it on close."""
        session = live_client.create_session(Capabilities(browserName="firefox"))
        try:
            ids = [s.id for s in live_client.get_sessions()]
            assert session.id in ids
        finally:
            session.close()

        ids = [s.id for s in live_client.get_sessions()]
        assert session.id not in ids


class TestBrowsing:
    """Tests for basic page interaction."""

    def test_navigate_and_read_title(self, live_session):
        live_session.navigate("https://example.com")

        assert "Example Domain" in live_session.get_title()
        assert live_session.get_url().startswith("https://example.com")

    def test_find_element(self, live_session):
        live_session.navigate("https://example.com")

        heading = live_session.find_element(By.tag_name("h1"))

        assert heading.get_text() == "Example Domain"
        assert heading.is_displayed()

    def test_missing_element_trail(self, live_session):
        """Should report the locator in the failure trail."""
        live_session.navigate("https://example.com")

        with pytest.raises(ProtocolError) as exc:
            live_session.find_element(By.id("does-not-exist"))

        assert exc.value.error_code == "NO_SUCH_ELEMENT"
        assert exc.value.trail[0] == "Session.find_element(strategy='id', value='does-not-exist')"
