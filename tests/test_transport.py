"""Unit tests for the HTTP transport layer."""

import logging

import httpx
import pytest

from webdriver_wire.core.exceptions import TransportError
from webdriver_wire.core.transport import HttpResponse, HttpxTransport, SharedTransport


def make_transport(handler):
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:
    """Tests for the httpx-backed transport."""

    def test_get_sends_accept_only(self):
        """Should send Accept and no Content-Type on bodiless requests."""
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, text='{"status": 0, "value": null}')

        response = make_transport(handler).request("GET", "http://wd.test/status")

        request = seen["request"]
        assert request.method == "GET"
        assert request.headers["Accept"] == "application/json"
        assert "Content-Type" not in request.headers
        assert response == HttpResponse(200, '{"status": 0, "value": null}')
        assert response.ok

    def test_post_sends_json_body(self):
        """Should send the body as UTF-8 JSON."""
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, text="{}")

        make_transport(handler).request("POST", "http://wd.test/session", '{"a": "é"}')

        request = seen["request"]
        assert request.headers["Content-Type"] == "application/json;charset=UTF-8"
        assert request.content == '{"a": "é"}'.encode("utf-8")

    def test_error_status_is_returned(self):
        """Should hand non-2xx responses back for envelope decoding."""
        transport = make_transport(lambda request: httpx.Response(500, text="oops"))

        response = transport.request("DELETE", "http://wd.test/session/abc")

        assert response.status_code == 500
        assert response.body == "oops"
        assert not response.ok

    def test_connection_error_wrapped(self):
        """Should wrap httpx errors in TransportError and keep the cause."""

        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(TransportError) as exc:
            make_transport(handler).request("GET", "http://wd.test/status")

        assert exc.value.method == "GET"
        assert exc.value.url == "http://wd.test/status"
        assert "Connection refused" in str(exc.value)
        assert isinstance(exc.value.__cause__, httpx.ConnectError)

    def test_timeouts_from_settings(self, monkeypatch):
        """Should build the client timeout from settings by default."""
        from webdriver_wire.core import transport as transport_module

        monkeypatch.setattr(transport_module.settings, "request_timeout_seconds", 5.0)
        monkeypatch.setattr(transport_module.settings, "connect_timeout_seconds", 2.0)

        transport = HttpxTransport()
        try:
            timeout = transport._client.timeout
            assert timeout.read == 5.0
            assert timeout.connect == 2.0
        finally:
            transport.close()

    def test_explicit_timeouts(self):
        transport = HttpxTransport(timeout=1.5, connect_timeout=0.5)
        try:
            assert transport._client.timeout.read == 1.5
            assert transport._client.timeout.connect == 0.5
        finally:
            transport.close()


class TestSharedTransport:
    """Tests for the reference-counted transport handle."""

    def test_closes_after_last_release(self, fake_transport):
        """Should close the wrapped transport only when no holder remains."""
        inner = fake_transport
        shared = SharedTransport(inner)
        shared.acquire()
        shared.acquire()

        shared.release()
        assert not inner.closed
        assert shared.holders == 1

        shared.release()
        assert inner.closed
        assert shared.closed

    def test_acquire_after_close(self, fake_transport):
        """Should refuse new holders once closed."""
        shared = SharedTransport(fake_transport)
        shared.acquire()
        shared.release()

        with pytest.raises(RuntimeError):
            shared.acquire()

    def test_request_after_close(self, fake_transport):
        """Should fail requests once the transport is gone."""
        shared = SharedTransport(fake_transport)
        shared.acquire()
        shared.release()

        with pytest.raises(TransportError, match="transport is closed"):
            shared.request("GET", "http://wd.test/status")

    def test_close_failure_logged(self, fake_transport, caplog, monkeypatch):
        """Should log and swallow errors from the wrapped close."""

        def broken_close():
            raise OSError("socket gone")

        monkeypatch.setattr(fake_transport, "close", broken_close)
        shared = SharedTransport(fake_transport)
        shared.acquire()
        with caplog.at_level(logging.WARNING, logger="webdriver_wire.core.transport"):
            shared.release()

        assert shared.closed
        assert "Error closing transport: socket gone" in caplog.text

    def test_request_forwarded(self, fake_transport):
        inner = fake_transport
        inner.queue(42)
        shared = SharedTransport(inner).acquire()

        response = shared.request("POST", "http://wd.test/x", "{}")

        assert response.body == '{"status": 0, "value": 42}'
        assert inner.last.body == {}
