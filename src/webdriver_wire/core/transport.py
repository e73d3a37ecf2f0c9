"""HTTP transport used by resource nodes."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from ..config import settings
from .exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Raw result of one HTTP exchange."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(ABC):
    """
    Executes one blocking HTTP request.

    Implementations must be safe to call from every resource node that
    shares them; the client places no ordering guarantee on concurrent calls.
    """

    @abstractmethod
    def request(self, method: str, url: str, body: Optional[str] = None) -> HttpResponse:
        """Perform a GET, POST or DELETE and return the raw response.

        Raises:
            TransportError: If the exchange could not be completed
        """

    def close(self) -> None:
        """Release any connections held by the transport."""


class HttpxTransport(Transport):
    """
    Transport backed by a single ``httpx.Client``.

    Every ``httpx.HTTPError`` is reported as a ``TransportError`` so that
    a failed exchange never reaches the envelope decoder.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        if client is None:
            client = httpx.Client(
                timeout=httpx.Timeout(
                    timeout if timeout is not None else settings.request_timeout_seconds,
                    connect=(
                        connect_timeout
                        if connect_timeout is not None
                        else settings.connect_timeout_seconds
                    ),
                ),
            )
        self._client = client

    def request(self, method: str, url: str, body: Optional[str] = None) -> HttpResponse:
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json;charset=UTF-8"
        try:
            response = self._client.request(
                method,
                url,
                content=body.encode("utf-8") if body is not None else None,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(method, url, str(e) or type(e).__name__) from e
        return HttpResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self._client.close()


class SharedTransport:
    """
    Reference-counted handle to a transport.

    Every resource node descended from one root holds a reference. The
    wrapped transport is closed when the last holder releases it.
    """

    def __init__(self, transport: Transport):
        self._transport = transport
        self._holders = 0
        self._lock = threading.Lock()

    @property
    def holders(self) -> int:
        return self._holders

    @property
    def closed(self) -> bool:
        return self._transport is None

    def acquire(self) -> SharedTransport:
        with self._lock:
            if self._transport is None:
                raise RuntimeError("Transport has already been released")
            self._holders += 1
        return self

    def release(self) -> None:
        with self._lock:
            self._holders -= 1
            if self._holders > 0 or self._transport is None:
                return
            transport, self._transport = self._transport, None
        logger.debug("Last holder released, closing transport")
        try:
            transport.close()
        except Exception as e:
            logger.warning(f"Error closing transport: {e}")

    def request(self, method: str, url: str, body: Optional[str] = None) -> HttpResponse:
        transport = self._transport
        if transport is None:
            raise TransportError(method, url, "transport is closed")
        return transport.request(method, url, body)
