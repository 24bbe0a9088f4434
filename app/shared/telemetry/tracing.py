"""Span helpers for the use cases.

@traced wraps a coroutine method in a span named after the operation.
Arguments are bound to the signature so positional and keyword calls
record the same attributes; only allowlisted parameter names are kept,
so ID tokens, passwords and CSV bodies never reach an exporter.
"""

import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace

from app.domain.exceptions import FitmyphoneException

P = ParamSpec("P")
R = TypeVar("R")

ATTRIBUTE_PREFIX = "fitmyphone."

SPAN_ARGUMENTS = frozenset({
    "contribution_id",
    "accessory_id",
    "reviewer_uid",
    "points",
    "uid",
    "category",
    "term",
    "limit",
})

_tracer = trace.get_tracer("app.use_cases")


def span_attributes(signature: inspect.Signature, args: tuple, kwargs: dict) -> dict[str, str]:
    """Allowlisted call arguments as span attributes (None values dropped)."""
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return {}
    return {
        f"{ATTRIBUTE_PREFIX}{name}": str(value)
        for name, value in bound.arguments.items()
        if name in SPAN_ARGUMENTS and value is not None
    }


def traced(operation_name: str) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Run the decorated coroutine function inside a span called operation_name.

    Exceptions are recorded on the span and re-raised; domain errors also
    tag the span with their error code.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with _tracer.start_as_current_span(
                operation_name, attributes=span_attributes(signature, args, kwargs)
            ) as span:
                try:
                    return await func(*args, **kwargs)
                except FitmyphoneException as e:
                    span.set_attribute(f"{ATTRIBUTE_PREFIX}error_code", e.error_code)
                    raise

        return wrapper

    return decorator


def add_span_attributes(**attributes: Any) -> None:
    """Attach counts or ids to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(f"{ATTRIBUTE_PREFIX}{key}", value)
