"""Map JSON wire status codes and client errors to structured reports."""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import (
    WebDriverWireError,
    TransportError,
    ProtocolError,
    ConversionError,
    ResourceClosedError,
    DomainNotAllowedError,
)


class ErrorCode(str, Enum):
    """Names for JSON wire protocol status codes and client-side failures."""

    # Session errors
    NO_SUCH_DRIVER = "NO_SUCH_DRIVER"
    SESSION_NOT_CREATED = "SESSION_NOT_CREATED"

    # Element errors
    NO_SUCH_ELEMENT = "NO_SUCH_ELEMENT"
    STALE_ELEMENT_REFERENCE = "STALE_ELEMENT_REFERENCE"
    ELEMENT_NOT_VISIBLE = "ELEMENT_NOT_VISIBLE"
    INVALID_ELEMENT_STATE = "INVALID_ELEMENT_STATE"
    ELEMENT_NOT_SELECTABLE = "ELEMENT_NOT_SELECTABLE"
    INVALID_ELEMENT_COORDINATES = "INVALID_ELEMENT_COORDINATES"
    MOVE_TARGET_OUT_OF_BOUNDS = "MOVE_TARGET_OUT_OF_BOUNDS"

    # Selector errors
    XPATH_LOOKUP_ERROR = "XPATH_LOOKUP_ERROR"
    INVALID_SELECTOR = "INVALID_SELECTOR"

    # Window/Frame errors
    NO_SUCH_FRAME = "NO_SUCH_FRAME"
    NO_SUCH_WINDOW = "NO_SUCH_WINDOW"

    # Alert errors
    UNEXPECTED_ALERT_OPEN = "UNEXPECTED_ALERT_OPEN"
    NO_ALERT_OPEN = "NO_ALERT_OPEN"

    # Cookie errors
    INVALID_COOKIE_DOMAIN = "INVALID_COOKIE_DOMAIN"
    UNABLE_TO_SET_COOKIE = "UNABLE_TO_SET_COOKIE"

    # Script and timing errors
    JAVASCRIPT_ERROR = "JAVASCRIPT_ERROR"
    TIMEOUT = "TIMEOUT"
    SCRIPT_TIMEOUT = "SCRIPT_TIMEOUT"

    # Input method errors
    IME_NOT_AVAILABLE = "IME_NOT_AVAILABLE"
    IME_ENGINE_ACTIVATION_FAILED = "IME_ENGINE_ACTIVATION_FAILED"

    # Server errors
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # Client-side errors
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    CONVERSION_FAILED = "CONVERSION_FAILED"
    RESOURCE_CLOSED = "RESOURCE_CLOSED"
    DOMAIN_NOT_ALLOWED = "DOMAIN_NOT_ALLOWED"


# Numeric statuses defined by the JSON wire protocol
STATUS_MAP: dict[int, ErrorCode] = {
    6: ErrorCode.NO_SUCH_DRIVER,
    7: ErrorCode.NO_SUCH_ELEMENT,
    8: ErrorCode.NO_SUCH_FRAME,
    9: ErrorCode.UNKNOWN_COMMAND,
    10: ErrorCode.STALE_ELEMENT_REFERENCE,
    11: ErrorCode.ELEMENT_NOT_VISIBLE,
    12: ErrorCode.INVALID_ELEMENT_STATE,
    13: ErrorCode.UNKNOWN_ERROR,
    15: ErrorCode.ELEMENT_NOT_SELECTABLE,
    17: ErrorCode.JAVASCRIPT_ERROR,
    19: ErrorCode.XPATH_LOOKUP_ERROR,
    21: ErrorCode.TIMEOUT,
    23: ErrorCode.NO_SUCH_WINDOW,
    24: ErrorCode.INVALID_COOKIE_DOMAIN,
    25: ErrorCode.UNABLE_TO_SET_COOKIE,
    26: ErrorCode.UNEXPECTED_ALERT_OPEN,
    27: ErrorCode.NO_ALERT_OPEN,
    28: ErrorCode.SCRIPT_TIMEOUT,
    29: ErrorCode.INVALID_ELEMENT_COORDINATES,
    30: ErrorCode.IME_NOT_AVAILABLE,
    31: ErrorCode.IME_ENGINE_ACTIVATION_FAILED,
    32: ErrorCode.INVALID_SELECTOR,
    33: ErrorCode.SESSION_NOT_CREATED,
    34: ErrorCode.MOVE_TARGET_OUT_OF_BOUNDS,
}

# Map client exceptions to error codes
EXCEPTION_MAP: dict[type[Exception], ErrorCode] = {
    TransportError: ErrorCode.TRANSPORT_FAILED,
    ConversionError: ErrorCode.CONVERSION_FAILED,
    ResourceClosedError: ErrorCode.RESOURCE_CLOSED,
    DomainNotAllowedError: ErrorCode.DOMAIN_NOT_ALLOWED,
}

# Suggestions for each error code to help callers recover
SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.NO_SUCH_DRIVER: (
        "The session does not exist on the server or has already been deleted. "
        "Create a new session."
    ),
    ErrorCode.SESSION_NOT_CREATED: (
        "The server could not create a session. "
        "Check the requested capabilities and that the browser is available."
    ),
    ErrorCode.NO_SUCH_ELEMENT: (
        "Element not found. Verify the locator strategy and value, "
        "and that the element exists when the search runs."
    ),
    ErrorCode.STALE_ELEMENT_REFERENCE: (
        "Element reference is outdated (page may have changed). "
        "Find the element again before interacting with it."
    ),
    ErrorCode.ELEMENT_NOT_VISIBLE: (
        "Element is not visible on the page. "
        "Scroll to it or wait for it to become visible."
    ),
    ErrorCode.INVALID_ELEMENT_STATE: (
        "Element is in a state that does not allow the command, "
        "for example clearing a disabled input."
    ),
    ErrorCode.INVALID_SELECTOR: (
        "The selector syntax is invalid. "
        "Check for typos in CSS selectors or XPath expressions."
    ),
    ErrorCode.NO_SUCH_WINDOW: (
        "The window is closed or the handle is unknown. "
        "List window handles and switch to an existing one."
    ),
    ErrorCode.NO_ALERT_OPEN: (
        "No alert, confirm, or prompt dialog is currently open."
    ),
    ErrorCode.JAVASCRIPT_ERROR: (
        "JavaScript execution failed. Check the script syntax and ensure all "
        "referenced objects exist in the page context."
    ),
    ErrorCode.TIMEOUT: (
        "Operation timed out. Increase the timeout or check if the condition "
        "can ever be met."
    ),
    ErrorCode.MALFORMED_RESPONSE: (
        "The server reply is not a JSON wire envelope. "
        "Check that the URL points at a JSON wire protocol endpoint."
    ),
    ErrorCode.TRANSPORT_FAILED: (
        "Cannot reach the WebDriver server. "
        "Verify the URL is correct and the server is running."
    ),
    ErrorCode.CONVERSION_FAILED: (
        "The server returned a value of an unexpected shape for this command."
    ),
    ErrorCode.RESOURCE_CLOSED: (
        "The handle was closed. Obtain a new handle before issuing commands."
    ),
    ErrorCode.DOMAIN_NOT_ALLOWED: (
        "Navigation to this domain is not permitted by the client configuration."
    ),
}


def map_status(status: int) -> ErrorCode:
    """
    Map a non-zero JSON wire status to an error code.

    Args:
        status: Numeric status from the response envelope

    Returns:
        Matching ErrorCode, or UNKNOWN_ERROR for unlisted statuses
    """
    return STATUS_MAP.get(status, ErrorCode.UNKNOWN_ERROR)


@dataclass
class ErrorReport:
    """Structured description of a failed operation."""

    error_code: str
    message: str
    trail: list[str]
    suggestion: Optional[str] = None
    details: Optional[dict] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging or API responses."""
        result = {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "trail": self.trail,
            },
        }
        if self.suggestion:
            result["error"]["suggestion"] = self.suggestion
        if self.details:
            result["error"]["details"] = self.details
        return result


def map_error(exc: Exception) -> ErrorCode:
    """
    Map an exception to an error code.

    Args:
        exc: The exception to map

    Returns:
        ErrorCode for the exception
    """
    if isinstance(exc, ProtocolError):
        if exc.status is None:
            return ErrorCode.MALFORMED_RESPONSE
        return map_status(exc.status)

    for exc_class, code in EXCEPTION_MAP.items():
        if isinstance(exc, exc_class):
            return code

    return ErrorCode.UNKNOWN_ERROR


def describe_error(exc: Exception) -> ErrorReport:
    """
    Build a structured report with suggestion for an exception.

    Args:
        exc: Exception raised by a client operation

    Returns:
        ErrorReport carrying the context trail when the exception has one
    """
    code = map_error(exc)
    details = None
    if isinstance(exc, ProtocolError):
        details = {"status": exc.status, "url": exc.url}
    elif isinstance(exc, TransportError):
        details = {"method": exc.method, "url": exc.url}
    elif isinstance(exc, ConversionError) and (exc.field or exc.index is not None):
        details = {"field": exc.field, "index": exc.index}

    if isinstance(exc, WebDriverWireError):
        message, trail = exc.message, exc.trail
    else:
        message, trail = str(exc), []

    return ErrorReport(
        error_code=code.value,
        message=message,
        trail=trail,
        suggestion=SUGGESTIONS.get(code),
        details=details,
    )
