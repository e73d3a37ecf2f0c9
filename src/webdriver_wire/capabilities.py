"""Capability bag describing what a server/browser combination supports."""

from __future__ import annotations

import json
from typing import Any, Iterator, Union

CapabilityValue = Union[str, bool, int, float]


class Capabilities:
    """
    Ordered key/value bag of capabilities.

    Keys the client does not know about are kept as-is, so server-specific
    capabilities survive a read-modify-write cycle. Absent keys read as
    ``False`` / ``""`` through the typed accessors.
    """

    def __init__(self, **values: CapabilityValue):
        self._values: dict[str, Any] = {}
        for name, value in values.items():
            self.add(name, value)

    @classmethod
    def _from_json_object(cls, obj: dict[str, Any]) -> Capabilities:
        # Only the conversion layer builds bags from raw JSON.
        capabilities = cls()
        capabilities._values = dict(obj)
        return capabilities

    def _json_object(self) -> dict[str, Any]:
        return dict(self._values)

    def add(self, name: str, value: CapabilityValue) -> Capabilities:
        """Set a capability and return the bag for chaining."""
        if not isinstance(value, (str, bool, int, float)):
            raise TypeError(
                f"Capability {name!r} must be a string, boolean or number, "
                f"got {type(value).__name__}"
            )
        self._values[name] = value
        return self

    def contains(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str, default: Any = None) -> Any:
        """Raw JSON value of a capability."""
        return self._values.get(name, default)

    def get_bool(self, name: str) -> bool:
        """Truthiness of a capability, ``False`` when absent."""
        value = self._values.get(name)
        if isinstance(value, str):
            return value != ""
        return bool(value)

    def get_string(self, name: str) -> str:
        """String form of a capability, ``""`` when absent."""
        if name not in self._values:
            return ""
        value = self._values[name]
        if isinstance(value, str):
            return value
        return json.dumps(value)

    def copy(self) -> Capabilities:
        return Capabilities._from_json_object(self._values)

    @property
    def browser_name(self) -> str:
        return self.get_string("browserName")

    @property
    def version(self) -> str:
        return self.get_string("version")

    @property
    def platform(self) -> str:
        return self.get_string("platform")

    @property
    def javascript_enabled(self) -> bool:
        return self.get_bool("javascriptEnabled")

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Capabilities):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Capabilities({self._values!r})"

