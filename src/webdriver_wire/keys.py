"""Keyboard and mouse input encoders."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Optional, Union

from selenium.webdriver.common.keys import Keys

from .core.context import traced
from .core.conversions import Position
from .core.resource import Resource

if TYPE_CHECKING:
    from .element import Element

__all__ = ["Keys", "Shortcut", "Keyboard", "Mouse", "MouseButton", "encode_keys"]


class Shortcut:
    """
    Keys pressed together, e.g. ``Shortcut(Keys.CONTROL, "a")``.

    Modifier keys are sticky on the wire, so the encoding ends with
    ``Keys.NULL`` to release them.
    """

    def __init__(self, *keys: str):
        if not keys:
            raise ValueError("Shortcut needs at least one key")
        self.keys = keys

    def __add__(self, other: Union[str, Shortcut]) -> Shortcut:
        extra = other.keys if isinstance(other, Shortcut) else (other,)
        return Shortcut(*self.keys, *extra)

    def encode(self) -> list[str]:
        chars: list[str] = []
        for key in self.keys:
            chars.extend(key)
        chars.append(Keys.NULL)
        return chars

    def __repr__(self) -> str:
        return f"Shortcut{self.keys!r}"


def encode_keys(keys: Union[str, Shortcut]) -> list[str]:
    """Encode text or a shortcut as the wire's array of characters."""
    if isinstance(keys, Shortcut):
        return keys.encode()
    return list(keys)


class Keyboard:
    """Sends key sequences to one command endpoint (``keys`` or ``value``)."""

    def __init__(self, resource: Resource, command: str):
        self._resource = resource
        self._command = command

    @traced(describe=lambda self, keys: {"keys": keys})
    def send_keys(self, keys: Union[str, Shortcut]) -> Keyboard:
        self._resource.post_field(self._command, "value", encode_keys(keys))
        return self


class MouseButton(IntEnum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class Mouse:
    """Mouse commands scoped to a session."""

    def __init__(self, resource: Resource):
        self._resource = resource

    @traced(
        describe=lambda self, element=None, offset=None: {
            "element": getattr(element, "ref", None),
            "offset": offset,
        }
    )
    def move_to(
        self, element: Optional[Element] = None, offset: Optional[Position] = None
    ) -> Mouse:
        """Move to an element (its center, or ``offset`` from its corner) or by ``offset``."""
        if element is None and offset is None:
            raise ValueError("move_to needs an element, an offset, or both")
        body: dict = {}
        if element is not None:
            body["element"] = element.ref
        if offset is not None:
            body["xoffset"] = offset.x
            body["yoffset"] = offset.y
        self._resource.post("moveto", body)
        return self

    @traced(describe=lambda self, button=MouseButton.LEFT: {"button": MouseButton(button).name})
    def click(self, button: MouseButton = MouseButton.LEFT) -> Mouse:
        self._resource.post_field("click", "button", int(button))
        return self

    @traced()
    def double_click(self) -> Mouse:
        self._resource.post("doubleclick")
        return self

    @traced(describe=lambda self, button=MouseButton.LEFT: {"button": MouseButton(button).name})
    def button_down(self, button: MouseButton = MouseButton.LEFT) -> Mouse:
        self._resource.post_field("buttondown", "button", int(button))
        return self

    @traced(describe=lambda self, button=MouseButton.LEFT: {"button": MouseButton(button).name})
    def button_up(self, button: MouseButton = MouseButton.LEFT) -> Mouse:
        self._resource.post_field("buttonup", "button", int(button))
        return self
