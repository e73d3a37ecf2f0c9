"""Entry point: the server root and session creation."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .capabilities import Capabilities
from .config import settings
from .core.context import traced
from .core.conversions import SessionInformation, from_json, from_json_array, to_json
from .core.exceptions import ProtocolError
from .core.resource import Ownership, Resource
from .core.transport import HttpxTransport, SharedTransport, Transport
from .session import Session

logger = logging.getLogger(__name__)


class Client:
    """
    Connection to a JSON wire protocol server.

    Owns the root resource node. Sessions created through the client share
    its transport, which stays open until the client and every handle
    derived from it are closed or collected.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[Union[Transport, SharedTransport]] = None,
        allowed_domains: Optional[list[str]] = None,
    ):
        self.url = url or settings.webdriver_url
        self._allowed_domains = allowed_domains
        self._resource = Resource.root(self.url, transport or HttpxTransport())

    @property
    def resource(self) -> Resource:
        return self._resource

    @traced()
    def get_status(self) -> dict:
        """Server status object from ``GET /status``."""
        return from_json(dict, self._resource.get("status"))

    @traced()
    def get_sessions(self) -> list[Session]:
        """Sessions currently known to the server; the handles only observe."""
        infos = from_json_array(SessionInformation, self._resource.get("sessions"))
        return [
            self._make_session(info.id, Ownership.OBSERVER, info.capabilities)
            for info in infos
        ]

    @traced(
        describe=lambda self, desired=None, required=None: {
            "desired": to_json(desired) if desired else {},
            "required": to_json(required) if required else {},
        }
    )
    def create_session(
        self,
        desired: Optional[Capabilities] = None,
        required: Optional[Capabilities] = None,
    ) -> Session:
        """
        Create a session on the server.

        Args:
            desired: Capabilities the server should provide if it can
            required: Capabilities the server must provide

        Returns:
            Session owning ``/session/:id``

        Raises:
            ProtocolError: If the reply lacks a string ``sessionId`` or an
                object ``value``
        """
        envelope = self._resource.request(
            "POST",
            "session",
            {
                "desiredCapabilities": to_json(desired or Capabilities()),
                "requiredCapabilities": to_json(required or Capabilities()),
            },
        )
        if envelope.session_id is None:
            raise ProtocolError("Session ID is not a string", url=self._resource.url)
        if not isinstance(envelope.value, dict):
            raise ProtocolError("Capabilities is not an object", url=self._resource.url)

        capabilities = from_json(Capabilities, envelope.value)
        session = self._make_session(envelope.session_id, Ownership.OWNER, capabilities)
        logger.info(
            f"Created session {session.id} with {capabilities.browser_name or 'unknown browser'}"
        )
        return session

    def close(self) -> None:
        """Release the root node. Open sessions keep the transport alive."""
        self._resource.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _make_session(
        self, session_id: str, ownership: Ownership, capabilities: Capabilities
    ) -> Session:
        resource = self._resource.sub_resource("session").sub_resource(session_id, ownership)
        return Session(session_id, resource, capabilities, self._allowed_domains)

    def __repr__(self) -> str:
        return f"Client({self.url!r})"
