"""Handler arity sensing."""

from __future__ import annotations

import functools
from typing import Any

import pytest

from fservice import Success
from fservice._handlers import (
    WANTS_NOTHING,
    WANTS_PAYLOAD,
    WANTS_PAYLOAD_AND_TAG,
    handler_arity,
    invoke,
)

pytestmark = pytest.mark.unit


def _two(value: Any, tag: Any) -> tuple[Any, Any]:
    return value, tag


class _Greeter:
    def greet(self, name: str) -> str:
        return f"hi {name}"

    def __call__(self, name: str, tag: str) -> str:
        return f"{tag}:{name}"


@pytest.mark.parametrize(
    ("handler", "expected"),
    [
        (lambda: None, WANTS_NOTHING),
        (lambda v: v, WANTS_PAYLOAD),
        (lambda *args: args, WANTS_PAYLOAD),
        (lambda v, *rest: v, WANTS_PAYLOAD),
        (lambda v, t: v, WANTS_PAYLOAD_AND_TAG),
        (lambda v, t=None: v, WANTS_PAYLOAD_AND_TAG),
        (lambda v, t, extra=1: v, WANTS_PAYLOAD_AND_TAG),
        (lambda *, key=None: key, WANTS_NOTHING),
        (_two, WANTS_PAYLOAD_AND_TAG),
        (_Greeter().greet, WANTS_PAYLOAD),
        (_Greeter(), WANTS_PAYLOAD_AND_TAG),
        (functools.partial(_two, 1), WANTS_PAYLOAD),
        (str.upper, WANTS_PAYLOAD),
    ],
)
def test_handler_arity(handler: Any, expected: int) -> None:
    assert handler_arity(handler) == expected


def test_uninspectable_callables_receive_the_payload(monkeypatch) -> None:
    def boom(_obj: Any) -> None:
        raise ValueError("no signature found")

    monkeypatch.setattr("fservice._handlers.inspect.signature", boom)

    assert handler_arity(lambda v, t: v) == WANTS_PAYLOAD


def test_invoke_passes_only_what_is_declared() -> None:
    assert invoke(lambda: "none", "payload", "tag") == "none"
    assert invoke(lambda v: v, "payload", "tag") == "payload"
    assert invoke(_two, "payload", "tag") == ("payload", "tag")
    assert invoke(lambda *args: args, "payload", "tag") == ("payload",)


def test_result_classes_work_as_handlers() -> None:
    # Success(value, type) declares two positional parameters and keeps the tag.
    rewrapped = Success("v", "ok").then(Success)

    assert rewrapped == Success("v", "ok")
