"""Error taxonomy for the WebDriver wire client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .context import ContextFrame


class WebDriverWireError(Exception):
    """
    Base exception for all webdriver_wire errors.

    Carries the root cause message plus the diagnostic context frames that
    were active when the error propagated, ordered outermost first.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.context: list[ContextFrame] = []

    def add_context(self, frame: ContextFrame) -> None:
        """Record a frame the error is propagating out of."""
        # Inner frames are recorded first, so prepend to keep outermost first.
        self.context.insert(0, frame)

    @property
    def trail(self) -> list[str]:
        """Human-readable context frames, outermost first."""
        return [str(frame) for frame in self.context]

    def to_dict(self) -> dict:
        """Structured report with error code, trail and recovery suggestion."""
        from ..utils.error_mapper import describe_error

        return describe_error(self).to_dict()

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{' -> '.join(self.trail)}: {self.message}"


class TransportError(WebDriverWireError):
    """Raised when the HTTP exchange itself fails or yields an unreadable body."""

    def __init__(self, method: str, url: str, message: str):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} failed: {message}")


class ProtocolError(WebDriverWireError):
    """Raised when a response envelope is malformed or reports a non-zero status."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        error_code: Optional[str] = None,
        response: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.status = status
        self.error_code = error_code
        self.response = response
        self.url = url
        if status is None:
            text = f"Malformed response: {message}"
        elif error_code:
            text = f"Protocol error {status} ({error_code}): {message}"
        else:
            text = f"Protocol error {status}: {message}"
        super().__init__(text)
        self.reason = message


class ConversionError(WebDriverWireError):
    """Raised when a decoded JSON value does not have the shape a domain type needs."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        index: Optional[int] = None,
    ):
        self.field = field
        self.index = index
        if index is not None:
            message = f"Element {index}: {message}"
        super().__init__(message)


class ResourceClosedError(WebDriverWireError):
    """Raised when a verb is issued on a resource that was already closed."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Resource is closed: {path or '/'}")


class DomainNotAllowedError(WebDriverWireError):
    """Raised when attempting to navigate to a domain not in the allowed list."""

    def __init__(self, domain: str, allowed_domains: list[str]):
        self.domain = domain
        self.allowed_domains = allowed_domains
        super().__init__(f"Domain '{domain}' is not in allowed list: {allowed_domains}")
