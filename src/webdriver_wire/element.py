"""Element handle: commands under ``/session/:id/element/:ref``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from .by import By
from .core.context import traced
from .core.conversions import ELEMENT_KEY, Position, Size, from_json, register_converter
from .core.resource import Resource
from .keys import Keyboard, Shortcut

if TYPE_CHECKING:
    from .session import Session


def _describe_by(self, by: By) -> dict:
    return {"strategy": by.strategy, "value": by.value}


class Element:
    """
    A server-side element reference.

    The handle observes its resource: the protocol has no per-element
    DELETE, elements go away with their session. Equality asks the server,
    since two different references may name the same element.
    """

    def __init__(self, ref: str, resource: Resource, session: Session):
        self._ref = ref
        self._resource = resource
        self._session = session

    @property
    def ref(self) -> str:
        return self._ref

    @property
    def resource(self) -> Resource:
        return self._resource

    @traced(describe=_describe_by)
    def find_element(self, by: By) -> Element:
        """Find the first descendant matching ``by``."""
        return self._session._find_element(by, self._resource)

    @traced(describe=_describe_by)
    def find_elements(self, by: By) -> list[Element]:
        """Find all descendants matching ``by``."""
        return self._session._find_elements(by, self._resource)

    @traced()
    def click(self) -> Element:
        self._resource.post("click")
        return self

    @traced()
    def submit(self) -> Element:
        self._resource.post("submit")
        return self

    @traced()
    def clear(self) -> Element:
        self._resource.post("clear")
        return self

    @traced(describe=lambda self, keys: {"keys": keys})
    def send_keys(self, keys: Union[str, Shortcut]) -> Element:
        Keyboard(self._resource, "value").send_keys(keys)
        return self

    @traced()
    def get_text(self) -> str:
        return from_json(str, self._resource.get("text"))

    @traced()
    def get_tag_name(self) -> str:
        return from_json(str, self._resource.get("name"))

    @traced()
    def is_selected(self) -> bool:
        return from_json(bool, self._resource.get("selected"))

    @traced()
    def is_enabled(self) -> bool:
        return from_json(bool, self._resource.get("enabled"))

    @traced()
    def is_displayed(self) -> bool:
        return from_json(bool, self._resource.get("displayed"))

    @traced(describe=lambda self, name: {"name": name})
    def get_attribute(self, name: str) -> Optional[str]:
        """Attribute value, or None when the element does not have it."""
        value = self._resource.get(f"attribute/{name}")
        if value is None:
            return None
        return from_json(str, value)

    @traced(describe=lambda self, name: {"name": name})
    def get_css_property(self, name: str) -> str:
        return from_json(str, self._resource.get(f"css/{name}"))

    @traced()
    def get_location(self) -> Position:
        return from_json(Position, self._resource.get("location"))

    @traced()
    def get_location_in_view(self) -> Position:
        return from_json(Position, self._resource.get("location_in_view"))

    @traced()
    def get_size(self) -> Size:
        return from_json(Size, self._resource.get("size"))

    @traced(describe=lambda self, other: {"other": other.ref})
    def equals(self, other: Element) -> bool:
        return from_json(bool, self._resource.get(f"equals/{other.ref}"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Element({self._ref!r}, {self._resource.path!r})"


# Script arguments carry elements as references; elements are never read back
# from JSON directly, only through ElementRef.
register_converter(Element, dump=lambda element: {ELEMENT_KEY: element.ref})
