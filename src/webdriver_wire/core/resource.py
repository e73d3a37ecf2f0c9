"""Resource nodes: addressable JSON wire endpoints.

A resource node knows its composed path and the shared transport. It turns
GET/POST/DELETE calls into HTTP exchanges, validates the response envelope
and hands back the ``value`` payload. Nodes tagged ``Ownership.OWNER``
delete their remote counterpart exactly once when closed or collected.
"""

from __future__ import annotations

import json
import logging
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..utils.error_mapper import map_status
from .context import current_trail, diagnostic_context
from .exceptions import ProtocolError, ResourceClosedError, TransportError
from .transport import HttpResponse, SharedTransport, Transport

logger = logging.getLogger(__name__)


class Ownership(Enum):
    """Whether closing a node deletes the remote resource."""

    OWNER = "owner"
    OBSERVER = "observer"


@dataclass(frozen=True)
class Envelope:
    """Decoded ``{sessionId, status, value}`` response wrapper."""

    status: int
    value: Any
    session_id: Optional[str] = None


def decode_envelope(method: str, url: str, response: HttpResponse) -> Envelope:
    """
    Parse and validate a response body.

    Raises:
        TransportError: If the body is not JSON at all
        ProtocolError: If the envelope is malformed or reports a failure
    """
    try:
        payload = json.loads(response.body)
    except ValueError as e:
        snippet = response.body[:200]
        if response.ok:
            reason = f"Response body is not JSON: {snippet!r}"
        else:
            reason = f"HTTP {response.status_code} with non-JSON body: {snippet!r}"
        raise TransportError(method, url, reason) from e

    if not isinstance(payload, dict):
        raise ProtocolError("Response is not an object", response=response.body, url=url)

    value = payload.get("value")
    status = payload.get("status")
    if isinstance(status, bool) or not isinstance(status, (int, float)) or (
        isinstance(status, float) and not status.is_integer()
    ):
        reason = "Status is missing or not an integer"
        server_message = _extract_message(value)
        if server_message:
            reason = f"{reason} (server said: {server_message})"
        raise ProtocolError(reason, response=response.body, url=url)
    if "value" not in payload:
        raise ProtocolError("Value is missing", response=response.body, url=url)

    status = int(status)
    if status != 0:
        code = map_status(status)
        raise ProtocolError(
            _extract_message(value) or f"{method} {url} failed",
            status=status,
            error_code=code.value,
            response=response.body,
            url=url,
        )

    session_id = payload.get("sessionId")
    return Envelope(
        status=status,
        value=value,
        session_id=session_id if isinstance(session_id, str) else None,
    )


def _extract_message(value: Any) -> Optional[str]:
    if isinstance(value, dict) and isinstance(value.get("message"), str):
        return value["message"]
    if isinstance(value, str) and value:
        return value
    return None


def _exchange(
    transport: SharedTransport, method: str, url: str, body: Optional[str]
) -> Envelope:
    response = transport.request(method, url, body)
    return decode_envelope(method, url, response)


def _teardown(transport: SharedTransport, url: str, ownership: Ownership) -> None:
    # Runs at most once per node, from close() or garbage collection.
    try:
        if ownership is Ownership.OWNER:
            logger.info(f"Deleting owned resource {url}")
            try:
                _exchange(transport, "DELETE", url, None)
            except Exception as e:
                logger.warning(f"Error deleting {url} during teardown: {e}")
    finally:
        transport.release()


class Resource:
    """
    One addressable endpoint of the wire protocol.

    The path is composed once at construction and never changes. Every
    node descended from one root shares that root's transport.
    """

    def __init__(
        self,
        transport: SharedTransport,
        base_url: str,
        path: str = "",
        ownership: Ownership = Ownership.OBSERVER,
    ):
        self._transport = transport.acquire()
        self._base_url = base_url.rstrip("/")
        self._path = path
        self._ownership = ownership
        self._finalizer = weakref.finalize(
            self, _teardown, self._transport, self.url, ownership
        )

    @classmethod
    def root(cls, base_url: str, transport: Union[Transport, SharedTransport]) -> Resource:
        """Create the server root node; it observes and never deletes."""
        if not isinstance(transport, SharedTransport):
            transport = SharedTransport(transport)
        return cls(transport, base_url, "", Ownership.OBSERVER)

    @property
    def path(self) -> str:
        return self._path

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._path}"

    @property
    def ownership(self) -> Ownership:
        return self._ownership

    @property
    def transport(self) -> SharedTransport:
        return self._transport

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def sub_resource(
        self, segment: str, ownership: Ownership = Ownership.OBSERVER
    ) -> Resource:
        """Return a node one segment below this one. No network traffic."""
        if not segment:
            raise ValueError("Resource path segment must not be empty")
        if self.closed:
            raise ResourceClosedError(self._path)
        return Resource(
            self._transport, self._base_url, f"{self._path}/{segment}", ownership
        )

    def request(
        self, method: str, relative_path: str = "", body: Any = None
    ) -> Envelope:
        """
        Issue one verb against this node and return the decoded envelope.

        Args:
            method: GET, POST or DELETE
            relative_path: Path below this node, empty for the node itself
            body: JSON-serializable body, POST only (defaults to ``{}``)

        Returns:
            Validated envelope with ``status == 0``
        """
        path = f"{self._path}/{relative_path}" if relative_path else self._path
        with diagnostic_context(f"Resource.{method.lower()}", path=path or "/"):
            if self.closed:
                raise ResourceClosedError(self._path)
            url = f"{self._base_url}{path}"
            payload = None
            if method == "POST":
                payload = json.dumps({} if body is None else body)
            logger.debug(
                f"{method} {url} "
                f"[{' -> '.join(str(frame) for frame in current_trail())}]"
            )
            return _exchange(self._transport, method, url, payload)

    def get(self, relative_path: str = "") -> Any:
        return self.request("GET", relative_path).value

    def post(self, relative_path: str = "", body: Any = None) -> Any:
        return self.request("POST", relative_path, body).value

    def post_field(self, relative_path: str, key: str, value: Any) -> Any:
        """POST a single-key object body."""
        return self.post(relative_path, {key: value})

    def delete(self, relative_path: str = "") -> None:
        self.request("DELETE", relative_path)

    def close(self) -> None:
        """Tear the node down; owners delete the remote resource once."""
        self._finalizer()

    def __enter__(self) -> Resource:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Resource({self.url!r}, {self._ownership.value})"
