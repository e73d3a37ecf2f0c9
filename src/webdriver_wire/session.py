"""Session handle: commands under ``/session/:id``."""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional, TypeVar, Union
from urllib.parse import quote

from .by import By
from .capabilities import Capabilities
from .config import settings
from .core.context import traced
from .core.conversions import Cookie, ElementRef, from_json, from_json_array, to_json
from .core.exceptions import DomainNotAllowedError
from .core.resource import Ownership, Resource
from .element import Element
from .keys import Keyboard, Mouse, Shortcut
from .utils.guardrails import extract_domain, validate_domain
from .window import Window

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _describe_by(self, by: By) -> dict:
    return {"strategy": by.strategy, "value": by.value}


class Session:
    """
    A browser session on the remote end.

    Sessions returned by ``Client.create_session`` own their resource and
    issue ``DELETE /session/:id`` exactly once when closed or collected.
    Sessions listed by ``Client.get_sessions`` only observe.
    """

    def __init__(
        self,
        session_id: str,
        resource: Resource,
        capabilities: Optional[Capabilities] = None,
        allowed_domains: Optional[list[str]] = None,
    ):
        self._id = session_id
        self._resource = resource
        self._capabilities = capabilities.copy() if capabilities else Capabilities()
        self._allowed_domains = allowed_domains

    @property
    def id(self) -> str:
        return self._id

    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def ownership(self) -> Ownership:
        return self._resource.ownership

    @property
    def capabilities(self) -> Capabilities:
        """Capabilities negotiated at creation; a copy, the session's own never change."""
        return self._capabilities.copy()

    @property
    def closed(self) -> bool:
        return self._resource.closed

    # Page

    @traced()
    def get_source(self) -> str:
        return from_json(str, self._resource.get("source"))

    @traced()
    def get_title(self) -> str:
        return from_json(str, self._resource.get("title"))

    @traced()
    def get_url(self) -> str:
        return from_json(str, self._resource.get("url"))

    @traced(describe=lambda self, url: {"url": url})
    def navigate(self, url: str) -> Session:
        allowed = (
            self._allowed_domains
            if self._allowed_domains is not None
            else settings.allowed_domain_list
        )
        if not validate_domain(url, allowed):
            raise DomainNotAllowedError(extract_domain(url) or url, allowed)
        self._resource.post_field("url", "url", url)
        return self

    @traced()
    def forward(self) -> Session:
        self._resource.post("forward")
        return self

    @traced()
    def back(self) -> Session:
        self._resource.post("back")
        return self

    @traced()
    def refresh(self) -> Session:
        self._resource.post("refresh")
        return self

    # Windows

    @traced()
    def get_current_window(self) -> Window:
        return self._make_window(from_json(str, self._resource.get("window_handle")))

    @traced()
    def get_windows(self) -> list[Window]:
        handles = from_json_array(str, self._resource.get("window_handles"))
        return [self._make_window(handle) for handle in handles]

    @traced(describe=lambda self, name_or_handle: {"name": name_or_handle})
    def set_focus_to_window(self, name_or_handle: Union[str, Window]) -> Session:
        if isinstance(name_or_handle, Window):
            name_or_handle = name_or_handle.handle
        self._resource.post_field("window", "name", name_or_handle)
        return self

    @traced()
    def close_current_window(self) -> Session:
        self._resource.delete("window")
        return self

    # Scripts

    @traced(describe=lambda self, script, *args: {"script": script})
    def execute(self, script: str, *args: Any) -> Any:
        """Run a script synchronously and return its raw JSON result."""
        return self._resource.post("execute", {"script": script, "args": to_json(list(args))})

    @traced(
        describe=lambda self, target, script, *args: {
            "type": target.__name__,
            "script": script,
        }
    )
    def evaluate(self, target: type[T], script: str, *args: Any) -> T:
        """Run a script and convert its result to ``target``."""
        return from_json(target, self.execute(script, *args))

    @traced(describe=lambda self, script, *args: {"script": script})
    def evaluate_element(self, script: str, *args: Any) -> Element:
        return self._make_element(self.evaluate(ElementRef, script, *args).ref)

    # Finding

    @traced(describe=_describe_by)
    def find_element(self, by: By) -> Element:
        return self._find_element(by, self._resource)

    @traced(describe=_describe_by)
    def find_elements(self, by: By) -> list[Element]:
        return self._find_elements(by, self._resource)

    def _find_element(self, by: By, context: Resource) -> Element:
        ref = from_json(ElementRef, context.post("element", by.to_json()))
        return self._make_element(ref.ref)

    def _find_elements(self, by: By, context: Resource) -> list[Element]:
        refs = from_json_array(ElementRef, context.post("elements", by.to_json()))
        return [self._make_element(ref.ref) for ref in refs]

    # Input

    @traced(describe=lambda self, keys: {"keys": keys})
    def send_keys(self, keys: Union[str, Shortcut]) -> Session:
        Keyboard(self._resource, "keys").send_keys(keys)
        return self

    def get_mouse(self) -> Mouse:
        return Mouse(self._resource)

    # Timeouts

    @traced(describe=lambda self, kind, milliseconds: {"type": kind, "ms": milliseconds})
    def set_timeout(self, kind: str, milliseconds: int) -> Session:
        """Set a timeout by type: ``script``, ``implicit`` or ``page load``."""
        self._resource.post("timeouts", {"type": kind, "ms": milliseconds})
        return self

    @traced(describe=lambda self, milliseconds: {"ms": milliseconds})
    def set_implicit_timeout(self, milliseconds: int) -> Session:
        self._resource.post_field("timeouts/implicit_wait", "ms", milliseconds)
        return self

    @traced(describe=lambda self, milliseconds: {"ms": milliseconds})
    def set_async_script_timeout(self, milliseconds: int) -> Session:
        self._resource.post_field("timeouts/async_script", "ms", milliseconds)
        return self

    # Screenshots

    @traced()
    def get_screenshot(self) -> str:
        """Base64-encoded PNG of the current page."""
        return from_json(str, self._resource.get("screenshot"))

    def get_screenshot_as_png(self) -> bytes:
        return base64.b64decode(self.get_screenshot())

    # Alerts

    @traced()
    def get_alert_text(self) -> str:
        return from_json(str, self._resource.get("alert_text"))

    @traced(describe=lambda self, text: {"text": text})
    def send_keys_to_alert(self, text: str) -> Session:
        self._resource.post_field("alert_text", "text", text)
        return self

    @traced()
    def accept_alert(self) -> Session:
        self._resource.post("accept_alert")
        return self

    @traced()
    def dismiss_alert(self) -> Session:
        self._resource.post("dismiss_alert")
        return self

    # Cookies

    @traced()
    def get_cookies(self) -> list[Cookie]:
        return from_json_array(Cookie, self._resource.get("cookie"))

    @traced(describe=lambda self, cookie: {"name": cookie.name})
    def set_cookie(self, cookie: Cookie) -> Session:
        self._resource.post_field("cookie", "cookie", to_json(cookie))
        return self

    @traced()
    def delete_cookies(self) -> Session:
        self._resource.delete("cookie")
        return self

    @traced(describe=lambda self, name: {"name": name})
    def delete_cookie(self, name: str) -> Session:
        self._resource.delete(f"cookie/{quote(name, safe='')}")
        return self

    # Lifecycle

    def close(self) -> None:
        """Delete the session if this handle owns it. Repeated calls do nothing."""
        if not self._resource.closed:
            logger.info(f"Closing session {self._id} ({self.ownership.value})")
        self._resource.close()

    def __enter__(self) -> Session:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _make_window(self, handle: str) -> Window:
        return Window(handle, self._resource.sub_resource("window").sub_resource(handle))

    def _make_element(self, ref: str) -> Element:
        return Element(ref, self._resource.sub_resource("element").sub_resource(ref), self)

    def __repr__(self) -> str:
        return f"Session({self._id!r}, {self.ownership.value})"
