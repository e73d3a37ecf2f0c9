"""
WebDriver wire - a client for the WebDriver JSON wire protocol.

Usage:
    from webdriver_wire import By, Capabilities, Client

    with Client("http://localhost:4444/wd/hub") as client:
        with client.create_session(Capabilities(browserName="firefox")) as session:
            session.navigate("https://example.com")
            heading = session.find_element(By.css("h1"))
            print(heading.get_text())
"""

from webdriver_wire.by import By
from webdriver_wire.capabilities import Capabilities
from webdriver_wire.client import Client
from webdriver_wire.config import Settings, configure_logging, settings
from webdriver_wire.core.conversions import (
    Cookie,
    Position,
    SessionInformation,
    Size,
    from_json,
    from_json_array,
    register_converter,
    to_json,
)
from webdriver_wire.core.exceptions import (
    WebDriverWireError,
    TransportError,
    ProtocolError,
    ConversionError,
    ResourceClosedError,
    DomainNotAllowedError,
)
from webdriver_wire.core.resource import Ownership, Resource
from webdriver_wire.core.transport import HttpResponse, HttpxTransport, Transport
from webdriver_wire.element import Element
from webdriver_wire.keys import Keys, Mouse, MouseButton, Shortcut
from webdriver_wire.session import Session
from webdriver_wire.window import Window

__version__ = "0.1.0"

__all__ = [
    # Main API
    "Client",
    "Session",
    "Element",
    "Window",
    "By",
    "Capabilities",
    # Input
    "Keys",
    "Shortcut",
    "Mouse",
    "MouseButton",
    # Data types
    "Cookie",
    "Position",
    "SessionInformation",
    "Size",
    "from_json",
    "from_json_array",
    "register_converter",
    "to_json",
    # Resources and transport
    "Ownership",
    "Resource",
    "HttpResponse",
    "HttpxTransport",
    "Transport",
    # Errors
    "WebDriverWireError",
    "TransportError",
    "ProtocolError",
    "ConversionError",
    "ResourceClosedError",
    "DomainNotAllowedError",
    # Configuration
    "Settings",
    "settings",
    "configure_logging",
    # Version
    "__version__",
]
