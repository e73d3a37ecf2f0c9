"""Diagnostic context stack.

Every public operation pushes a frame naming itself and its most useful
arguments. Frames live in a ``ContextVar`` so each thread or task sees only
its own call stack. When a ``WebDriverWireError`` escapes a frame, the frame
is attached to the error, which produces a call trail from the caller's
intent down to the failing request.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, TypeVar

from .exceptions import WebDriverWireError

F = TypeVar("F", bound=Callable[..., Any])

# Longest rendering of a single argument inside a frame
MAX_DETAIL_LENGTH = 200

_frames: ContextVar[tuple[ContextFrame, ...]] = ContextVar(
    "webdriver_wire_frames", default=()
)


@dataclass(frozen=True)
class ContextFrame:
    """One operation on the diagnostic stack."""

    operation: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if not self.details:
            return self.operation
        args = ", ".join(f"{k}={_shorten(v)}" for k, v in self.details.items())
        return f"{self.operation}({args})"


def _shorten(value: Any) -> str:
    text = repr(value)
    if len(text) > MAX_DETAIL_LENGTH:
        return text[: MAX_DETAIL_LENGTH - 3] + "..."
    return text


@contextmanager
def diagnostic_context(operation: str, **details: Any) -> Iterator[ContextFrame]:
    """
    Push a context frame for the duration of the block.

    On a ``WebDriverWireError`` the frame is added to the error and the
    error is re-raised unchanged. Other exceptions pass through untouched.
    """
    frame = ContextFrame(operation, details)
    token = _frames.set(_frames.get() + (frame,))
    try:
        yield frame
    except WebDriverWireError as exc:
        exc.add_context(frame)
        raise
    finally:
        _frames.reset(token)


def current_trail() -> tuple[ContextFrame, ...]:
    """Frames active in the current call stack, outermost first."""
    return _frames.get()


def traced(
    name: Optional[str] = None,
    describe: Optional[Callable[..., dict[str, Any]]] = None,
) -> Callable[[F], F]:
    """
    Decorate a function so every call runs inside a diagnostic context.

    Args:
        name: Operation name; defaults to the function's qualified name
        describe: Called with the function's arguments, returns the
            details to record on the frame

    Returns:
        Decorator
    """

    def decorator(func: F) -> F:
        operation = name or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            details = describe(*args, **kwargs) if describe else {}
            with diagnostic_context(operation, **details):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
