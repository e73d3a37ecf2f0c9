"""Unit tests for the Client facade."""

import gc

import pytest

from webdriver_wire.capabilities import Capabilities
from webdriver_wire.client import Client
from webdriver_wire.core.exceptions import ConversionError, ProtocolError, TransportError
from webdriver_wire.core.resource import Ownership

BASE_URL = "http://wd.test/wd/hub"


class TestStatus:
    """Tests for GET /status."""

    def test_get_status(self, client, fake_transport):
        fake_transport.queue({"build": {"version": "2.53"}, "os": {"name": "linux"}})

        status = client.get_status()

        assert status["build"]["version"] == "2.53"
        assert fake_transport.last.url == f"{BASE_URL}/status"

    def test_status_must_be_object(self, client, fake_transport):
        """An array value is a conversion error, not a protocol error."""
        fake_transport.queue([1, 2, 3])

        with pytest.raises(ConversionError) as exc:
            client.get_status()

        assert exc.value.message == "Value is not an object"
        assert exc.value.trail == ["Client.get_status"]

    def test_transport_failure(self, client, fake_transport):
        fake_transport.queue_error(TransportError("GET", f"{BASE_URL}/status", "refused"))

        with pytest.raises(TransportError) as exc:
            client.get_status()

        assert exc.value.trail[0] == "Client.get_status"


class TestCreateSession:
    """Tests for POST /session."""

    def test_creates_owned_session(self, client, fake_transport):
        """Response envelope becomes an owning session handle."""
        fake_transport.queue({"browserName": "firefox"}, session_id="abc")

        session = client.create_session(Capabilities(browserName="firefox"))

        assert session.id == "abc"
        assert session.capabilities.browser_name == "firefox"
        assert session.ownership is Ownership.OWNER
        assert session.resource.path == "/session/abc"

    def test_canonical_request_shape(self, client, fake_transport):
        """Desired first, required second, both always present."""
        fake_transport.queue({}, session_id="abc")

        session = client.create_session(Capabilities(browserName="chrome"))

        request = fake_transport.calls("POST")[-1]
        assert not session.closed
        assert request.method == "POST"
        assert request.url == f"{BASE_URL}/session"
        assert list(request.body) == ["desiredCapabilities", "requiredCapabilities"]
        assert request.body["desiredCapabilities"] == {"browserName": "chrome"}
        assert request.body["requiredCapabilities"] == {}

    def test_required_capabilities_sent(self, client, fake_transport):
        fake_transport.queue({}, session_id="abc")

        session = client.create_session(required=Capabilities(acceptSslCerts=True))

        assert session.id == "abc"
        assert fake_transport.calls("POST")[-1].body == {
            "desiredCapabilities": {},
            "requiredCapabilities": {"acceptSslCerts": True},
        }

    def test_session_deleted_once(self, client, fake_transport):
        """Closing twice then dropping issues a single DELETE."""
        fake_transport.queue({"browserName": "firefox"}, session_id="abc")
        session = client.create_session()

        session.close()
        session.close()
        del session
        gc.collect()

        deletes = fake_transport.calls("DELETE")
        assert [d.url for d in deletes] == [f"{BASE_URL}/session/abc"]

    def test_session_deleted_when_collected(self, client, fake_transport):
        fake_transport.queue({}, session_id="abc")
        session = client.create_session()

        del session
        gc.collect()

        assert len(fake_transport.calls("DELETE")) == 1

    def test_context_manager(self, client, fake_transport):
        fake_transport.queue({}, session_id="abc")

        with client.create_session() as session:
            assert not session.closed

        assert session.closed
        assert len(fake_transport.calls("DELETE")) == 1

    def test_missing_session_id(self, client, fake_transport):
        """sessionId is mandatory on creation."""
        fake_transport.queue({"browserName": "firefox"})

        with pytest.raises(ProtocolError) as exc:
            client.create_session()

        assert "Session ID is not a string" in str(exc.value)
        assert exc.value.trail[0].startswith("Client.create_session")

    def test_capabilities_must_be_object(self, client, fake_transport):
        fake_transport.queue("firefox", session_id="abc")

        with pytest.raises(ProtocolError) as exc:
            client.create_session()

        assert "Capabilities is not an object" in str(exc.value)
        assert fake_transport.calls("DELETE") == []

    def test_server_refusal(self, client, fake_transport):
        fake_transport.queue({"message": "browser not available"}, status=33)

        with pytest.raises(ProtocolError) as exc:
            client.create_session()

        assert exc.value.status == 33
        assert exc.value.error_code == "SESSION_NOT_CREATED"

    def test_capabilities_are_immutable(self, client, fake_transport):
        fake_transport.queue({"browserName": "firefox"}, session_id="abc")
        session = client.create_session()

        session.capabilities.add("browserName", "chrome")

        assert session.capabilities.browser_name == "firefox"


class TestGetSessions:
    """Tests for GET /sessions."""

    def test_lists_observer_sessions(self, client, fake_transport):
        fake_transport.queue(
            [
                {"sessionId": "s1", "capabilities": {"browserName": "chrome"}},
                {"sessionId": "s2", "capabilities": {"browserName": "firefox"}},
            ]
        )

        sessions = client.get_sessions()

        assert [s.id for s in sessions] == ["s1", "s2"]
        assert sessions[1].capabilities.browser_name == "firefox"
        assert all(s.ownership is Ownership.OBSERVER for s in sessions)

    def test_listed_sessions_never_deleted(self, client, fake_transport):
        """Observing a session must not tear it down."""
        fake_transport.queue([{"sessionId": "s1"}])

        sessions = client.get_sessions()
        sessions[0].close()
        del sessions
        gc.collect()

        assert fake_transport.calls("DELETE") == []

    def test_malformed_entry(self, client, fake_transport):
        fake_transport.queue([{"sessionId": "s1"}, {"capabilities": {}}])

        with pytest.raises(ConversionError) as exc:
            client.get_sessions()

        assert exc.value.index == 1
        assert exc.value.trail == ["Client.get_sessions"]


class TestClientLifecycle:
    """Tests for client setup and teardown."""

    def test_default_url_from_settings(self, fake_transport, monkeypatch):
        from webdriver_wire import client as client_module

        monkeypatch.setattr(client_module.settings, "webdriver_url", "http://grid:4444/wd/hub")

        assert Client(transport=fake_transport).url == "http://grid:4444/wd/hub"

    def test_sessions_keep_transport_open(self, client, fake_transport):
        """The transport closes only after the client and its sessions are gone."""
        fake_transport.queue({}, session_id="abc")
        session = client.create_session()

        client.close()
        assert not fake_transport.closed

        session.close()
        gc.collect()
        assert fake_transport.closed
