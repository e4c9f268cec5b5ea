"""Handler invocation with arity sensing.

Combinators and dispatch arms accept callables that want the payload alone
or the payload together with the result's type tag. The decision is made from
the callable's signature, so callers opt into the tag just by declaring a
second parameter.
"""

from __future__ import annotations

import inspect
import typing

R = typing.TypeVar("R")

WANTS_NOTHING = 0
WANTS_PAYLOAD = 1
WANTS_PAYLOAD_AND_TAG = 2


def handler_arity(handler: typing.Callable[..., object]) -> int:
    """Return how many of ``(payload, tag)`` the handler should receive.

    - Two or more positional parameters: payload and tag.
    - One positional parameter, or only ``*args``: payload.
    - No positional parameters at all: nothing.
    - Signature not introspectable (some builtins): payload.
    """
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return WANTS_PAYLOAD

    positional = 0
    variadic = False
    for p in sig.parameters.values():
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
            positional += 1
        elif p.kind is p.VAR_POSITIONAL:
            variadic = True

    if positional >= WANTS_PAYLOAD_AND_TAG:
        return WANTS_PAYLOAD_AND_TAG
    if positional == 1 or variadic:
        return WANTS_PAYLOAD
    return WANTS_NOTHING


def invoke(
    handler: typing.Callable[..., R], payload: object, tag: typing.Hashable | None
) -> R:
    """Call ``handler`` with as much of ``(payload, tag)`` as it declares."""
    arity = handler_arity(handler)
    if arity == WANTS_PAYLOAD_AND_TAG:
        return handler(payload, tag)
    if arity == WANTS_PAYLOAD:
        return handler(payload)
    return handler()


def require_callable(handler: object, field_name: str) -> None:
    if not callable(handler):
        raise TypeError(f"{field_name}: must be callable, got {type(handler).__name__}")
