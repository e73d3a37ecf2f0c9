"""Typed conversion between JSON values and domain types.

Each target type registers a converter made of a ``validate`` step that
checks the JSON shape and raises ``ConversionError`` naming the offending
field, an ``extract`` step that builds the value, and optionally a ``dump``
step for the reverse direction. New types are added with
``register_converter`` without touching the dispatch functions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from ..capabilities import Capabilities
from .exceptions import ConversionError

T = TypeVar("T")

# Element reference keys: JSON wire and W3C
ELEMENT_KEY = "ELEMENT"
W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class SessionInformation:
    """A session as listed by the server: its id and negotiated capabilities."""

    id: str
    capabilities: Capabilities


@dataclass(frozen=True)
class ElementRef:
    """Server-side element reference as found in ``{"ELEMENT": ref}``."""

    ref: str


@dataclass(frozen=True)
class Cookie:
    name: str
    value: str
    path: Optional[str] = None
    domain: Optional[str] = None
    secure: bool = False
    http_only: bool = False
    expiry: Optional[int] = None


@dataclass(frozen=True)
class Converter:
    """Conversion entry for one target type."""

    validate: Optional[Callable[[Any], None]] = None
    extract: Optional[Callable[[Any], Any]] = None
    dump: Optional[Callable[[Any], Any]] = None


_converters: dict[type, Converter] = {}


def register_converter(
    target: type,
    validate: Optional[Callable[[Any], None]] = None,
    extract: Optional[Callable[[Any], Any]] = None,
    dump: Optional[Callable[[Any], Any]] = None,
) -> None:
    """
    Register JSON conversion for a target type.

    Args:
        target: Domain type being converted
        validate: Raises ConversionError when a JSON value has the wrong shape
        extract: Builds the target from an already validated JSON value
        dump: Builds the JSON value for an instance of the target
    """
    _converters[target] = Converter(validate=validate, extract=extract, dump=dump)


def from_json(target: type[T], value: Any) -> T:
    """
    Convert a JSON value to ``target``.

    Raises:
        ConversionError: If the value does not have the required shape
        TypeError: If no extraction is registered for ``target``
    """
    converter = _converters.get(target)
    if converter is None or converter.extract is None:
        raise TypeError(f"No JSON extraction registered for {target.__name__}")
    if converter.validate is not None:
        converter.validate(value)
    return converter.extract(value)


def from_json_array(target: type[T], value: Any) -> list[T]:
    """
    Convert a JSON array element by element, preserving order.

    The first element that fails conversion aborts the whole call; no
    partial result is returned.
    """
    if not isinstance(value, list):
        raise ConversionError("Value is not an array")
    result = []
    for index, item in enumerate(value):
        try:
            result.append(from_json(target, item))
        except ConversionError as e:
            raise ConversionError(e.message, field=e.field, index=index) from e
    return result


def to_json(value: Any) -> Any:
    """
    Build the JSON value for a Python value.

    Primitives, lists, tuples and string-keyed dicts are converted
    structurally; other objects need a registered ``dump``.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    for klass in type(value).__mro__:
        converter = _converters.get(klass)
        if converter is not None and converter.dump is not None:
            return converter.dump(value)
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    raise TypeError(f"No JSON conversion registered for {type(value).__name__}")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_object(value: Any, what: str = "Value") -> None:
    if not isinstance(value, dict):
        raise ConversionError(f"{what} is not an object")


def require_field(
    obj: dict, name: str, check: Callable[[Any], bool], kind: str, optional: bool = False
) -> None:
    if name not in obj or obj[name] is None:
        if optional:
            return
        raise ConversionError(f"Field '{name}' is missing", field=name)
    if not check(obj[name]):
        raise ConversionError(f"Field '{name}' is not {kind}", field=name)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _checker(check: Callable[[Any], bool], message: str) -> Callable[[Any], None]:
    def validate(value: Any) -> None:
        if not check(value):
            raise ConversionError(message)

    return validate


# Primitives

register_converter(str, _checker(_is_str, "Value is not a string"), str)
register_converter(int, _checker(is_number, "Value is not a number"), int)
register_converter(float, _checker(is_number, "Value is not a number"), float)
register_converter(bool, _checker(_is_bool, "Value is not a boolean"), bool)
register_converter(dict, _checker(lambda v: isinstance(v, dict), "Value is not an object"), dict)
register_converter(list, _checker(lambda v: isinstance(v, list), "Value is not an array"), list)


# Geometry


def _validate_size(value: Any) -> None:
    require_object(value, "Size")
    require_field(value, "width", is_number, "a number")
    require_field(value, "height", is_number, "a number")


register_converter(
    Size,
    _validate_size,
    lambda v: Size(width=int(v["width"]), height=int(v["height"])),
    lambda size: {"width": size.width, "height": size.height},
)


def _validate_position(value: Any) -> None:
    require_object(value, "Position")
    require_field(value, "x", is_number, "a number")
    require_field(value, "y", is_number, "a number")


register_converter(
    Position,
    _validate_position,
    lambda v: Position(x=int(v["x"]), y=int(v["y"])),
    lambda position: {"x": position.x, "y": position.y},
)


# Capabilities and sessions

register_converter(
    Capabilities,
    lambda v: require_object(v, "Capabilities"),
    Capabilities._from_json_object,
    lambda capabilities: capabilities._json_object(),
)


def _validate_session_information(value: Any) -> None:
    require_object(value, "Session information")
    require_field(value, "sessionId", _is_str, "a string")
    require_field(
        value, "capabilities", lambda v: isinstance(v, dict), "an object", optional=True
    )


def _extract_session_information(value: dict) -> SessionInformation:
    capabilities = value.get("capabilities") or {}
    return SessionInformation(
        id=value["sessionId"],
        capabilities=Capabilities._from_json_object(capabilities),
    )


register_converter(
    SessionInformation,
    _validate_session_information,
    _extract_session_information,
    lambda info: {"sessionId": info.id, "capabilities": info.capabilities._json_object()},
)


# Elements


def _element_key(value: dict) -> str:
    # W3C key wins when a server sends both
    return W3C_ELEMENT_KEY if W3C_ELEMENT_KEY in value else ELEMENT_KEY


def _validate_element_ref(value: Any) -> None:
    require_object(value, "Element reference")
    key = _element_key(value)
    require_field(value, key, _is_str, "a string")
    if not value[key]:
        raise ConversionError(f"Field '{key}' is empty", field=key)


def _extract_element_ref(value: dict) -> ElementRef:
    return ElementRef(value[_element_key(value)])


register_converter(
    ElementRef,
    _validate_element_ref,
    _extract_element_ref,
    lambda element: {ELEMENT_KEY: element.ref},
)


# Cookies


def _validate_cookie(value: Any) -> None:
    require_object(value, "Cookie")
    require_field(value, "name", _is_str, "a string")
    require_field(value, "value", _is_str, "a string")
    require_field(value, "path", _is_str, "a string", optional=True)
    require_field(value, "domain", _is_str, "a string", optional=True)
    require_field(value, "secure", _is_bool, "a boolean", optional=True)
    require_field(value, "httpOnly", _is_bool, "a boolean", optional=True)
    require_field(value, "expiry", is_number, "a number", optional=True)


def _extract_cookie(value: dict) -> Cookie:
    expiry = value.get("expiry")
    return Cookie(
        name=value["name"],
        value=value["value"],
        path=value.get("path"),
        domain=value.get("domain"),
        secure=bool(value.get("secure", False)),
        http_only=bool(value.get("httpOnly", False)),
        expiry=int(expiry) if expiry is not None else None,
    )


def _dump_cookie(cookie: Cookie) -> dict:
    result: dict[str, Any] = {"name": cookie.name, "value": cookie.value}
    if cookie.path is not None:
        result["path"] = cookie.path
    if cookie.domain is not None:
        result["domain"] = cookie.domain
    result["secure"] = cookie.secure
    result["httpOnly"] = cookie.http_only
    if cookie.expiry is not None:
        result["expiry"] = cookie.expiry
    return result


register_converter(Cookie, _validate_cookie, _extract_cookie, _dump_cookie)
