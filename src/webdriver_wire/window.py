"""Window handle: commands under ``/session/:id/window/:handle``."""

from .core.context import traced
from .core.conversions import Position, Size, from_json, to_json
from .core.resource import Resource


class Window:
    """A browser window, observed through its handle."""

    def __init__(self, handle: str, resource: Resource):
        self._handle = handle
        self._resource = resource

    @property
    def handle(self) -> str:
        return self._handle

    @property
    def resource(self) -> Resource:
        return self._resource

    @traced()
    def get_size(self) -> Size:
        return from_json(Size, self._resource.get("size"))

    @traced(describe=lambda self, size: {"width": size.width, "height": size.height})
    def set_size(self, size: Size) -> "Window":
        self._resource.post("size", to_json(size))
        return self

    @traced()
    def get_position(self) -> Position:
        return from_json(Position, self._resource.get("position"))

    @traced(describe=lambda self, position: {"x": position.x, "y": position.y})
    def set_position(self, position: Position) -> "Window":
        self._resource.post("position", to_json(position))
        return self

    @traced()
    def maximize(self) -> "Window":
        self._resource.post("maximize")
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Window):
            return NotImplemented
        return self._handle == other._handle and self._resource.url == other._resource.url

    def __hash__(self) -> int:
        return hash((self._handle, self._resource.url))

    def __repr__(self) -> str:
        return f"Window({self._handle!r})"
