"""Core protocol machinery: resources, transport, conversions, errors."""

from .exceptions import (
    WebDriverWireError,
    TransportError,
    ProtocolError,
    ConversionError,
    ResourceClosedError,
    DomainNotAllowedError,
)
from .context import ContextFrame, current_trail, diagnostic_context, traced
from .transport import HttpResponse, HttpxTransport, SharedTransport, Transport
from .resource import Envelope, Ownership, Resource, decode_envelope
from .conversions import (
    Cookie,
    ElementRef,
    Position,
    SessionInformation,
    Size,
    from_json,
    from_json_array,
    register_converter,
    to_json,
)

__all__ = [
    "WebDriverWireError",
    "TransportError",
    "ProtocolError",
    "ConversionError",
    "ResourceClosedError",
    "DomainNotAllowedError",
    "ContextFrame",
    "current_trail",
    "diagnostic_context",
    "traced",
    "HttpResponse",
    "HttpxTransport",
    "SharedTransport",
    "Transport",
    "Envelope",
    "Ownership",
    "Resource",
    "decode_envelope",
    "Cookie",
    "ElementRef",
    "Position",
    "SessionInformation",
    "Size",
    "from_json",
    "from_json_array",
    "register_converter",
    "to_json",
]
