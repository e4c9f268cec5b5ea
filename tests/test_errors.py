from __future__ import annotations

import pytest

from fservice import Failure, Success
from fservice.errors import (
    ConfigurationError,
    DeprecatedUsageError,
    FServiceError,
    IncompatibleResultError,
    UnwrapError,
)

pytestmark = pytest.mark.unit


def test_hint_is_appended_to_the_message() -> None:
    err = FServiceError("boom", hint="do this")

    assert str(err) == "boom. do this"
    assert err.args == ("boom",)


def test_hint_defaults_to_none() -> None:
    err = FServiceError("fail")

    assert err.hint is None
    assert str(err) == "fail"


def test_unwrap_error_keeps_the_result() -> None:
    failure = Failure("nope")
    err = UnwrapError("bad unwrap", result=failure)

    assert err.result is failure


def test_unwrap_messages_name_the_result() -> None:
    with pytest.raises(UnwrapError, match=r'Cannot unwrap an error from Success\("ok"\)'):
        Success("ok").unwrap_error()
    with pytest.raises(UnwrapError, match=r"Cannot unwrap a value from Failure\(3\)"):
        Failure(3).unwrap()


def test_incompatible_result_error_metadata() -> None:
    err = IncompatibleResultError("bad", service="Svc", returned=7)

    assert (err.service, err.returned) == ("Svc", 7)


def test_subclass_hierarchy() -> None:
    """Every library error is catchable as FServiceError."""
    for cls in (
        UnwrapError,
        ConfigurationError,
        IncompatibleResultError,
        DeprecatedUsageError,
    ):
        assert issubclass(cls, FServiceError)
