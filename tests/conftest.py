"""Pytest fixtures for testing the WebDriver wire client."""

import json
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional

import pytest

from webdriver_wire.by import By
from webdriver_wire.client import Client
from webdriver_wire.core.transport import HttpResponse, Transport

BASE_URL = "http://wd.test/wd/hub"


@dataclass
class RecordedRequest:
    """One request seen by the fake transport."""

    method: str
    url: str
    body: Optional[Any] = None


class FakeTransport(Transport):
    """
    Transport that records requests and replays queued responses.

    Unqueued requests get ``{"status": 0, "value": null}``.
    """

    def __init__(self):
        self.requests: list[RecordedRequest] = []
        self._responses: deque = deque()
        self.closed = False

    def queue(self, value: Any = None, status: int = 0, session_id: Optional[str] = None):
        """Queue a well-formed envelope."""
        payload: dict = {"status": status, "value": value}
        if session_id is not None:
            payload = {"sessionId": session_id, **payload}
        return self.queue_raw(json.dumps(payload))

    def queue_raw(self, body: str, status_code: int = 200):
        """Queue an arbitrary body."""
        self._responses.append(HttpResponse(status_code=status_code, body=body))
        return self

    def queue_error(self, exc: Exception):
        """Make the next request raise ``exc``."""
        self._responses.append(exc)
        return self

    def request(self, method: str, url: str, body: Optional[str] = None) -> HttpResponse:
        self.requests.append(
            RecordedRequest(method, url, json.loads(body) if body is not None else None)
        )
        if self._responses:
            response = self._responses.popleft()
            if isinstance(response, Exception):
                raise response
            return response
        return HttpResponse(status_code=200, body='{"status": 0, "value": null}')

    def close(self) -> None:
        self.closed = True

    def calls(self, method: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == method]

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def fake_transport():
    """Recording transport with no queued responses."""
    return FakeTransport()


@pytest.fixture
def client(fake_transport):
    """Client talking to the fake transport."""
    return Client(BASE_URL, transport=fake_transport, allowed_domains=[])


@pytest.fixture
def session(client, fake_transport):
    """Owned session ``abc`` with firefox capabilities."""
    fake_transport.queue({"browserName": "firefox"}, session_id="abc")
    return client.create_session()


@pytest.fixture
def element(session, fake_transport):
    """Element ``0`` found in session ``abc``."""
    fake_transport.queue({"ELEMENT": "0"})
    return session.find_element(By.css("#foo"))
