"""Result algebra: Success and Failure with chaining and tag dispatch.

A ``Result`` is the outcome of an operation expressed as data instead of an
exception. Two variants exist:

- ``Success(value, type=None)``
- ``Failure(error, type=None)``

``type`` is an optional hashable tag (usually a string or an enum member)
used only to route dispatch handlers. It is independent of the variant: a
``Success`` tagged ``"created"`` and one tagged ``"unchanged"`` are both
successes.

Chaining::

    Success(2).then(lambda v: Success(v * 10)).catch(recover)

Dispatch, an ordered pattern match where at most one arm runs::

    (result
        .on_success("created", handler=notify_created)
        .on_success("updated", handler=notify_updated)
        .on_success(unhandled=True, handler=log_other)
        .on_failure(unhandled=True, handler=report))

The first matching ``on_success``/``on_failure`` arm marks the instance
handled; every later dispatch call on it is a no-op.
"""

from __future__ import annotations

import abc
import dataclasses
import enum
import json
import logging
import typing

from fservice._handlers import invoke, require_callable
from fservice.deprecation import caller_origin, get_deprecator
from fservice.errors import UnwrapError

log = logging.getLogger(__name__)

Tag = typing.Hashable


class DispatchState(enum.Enum):
    """Whether a dispatch chain has already run an arm for a result."""

    UNHANDLED = "unhandled"
    HANDLED = "handled"


def _inspect(payload: object) -> str:
    # Strings render double-quoted: Success("Yay!")
    if isinstance(payload, str):
        return json.dumps(payload, ensure_ascii=False)
    return repr(payload)


class Result[T, E](abc.ABC):
    """Common surface of ``Success`` and ``Failure``."""

    __slots__ = ()

    # Provided by the variant dataclasses.
    type: Tag | None
    _state: DispatchState

    # --- Core accessors ---

    @abc.abstractmethod
    def successful(self) -> bool:
        """Return True for ``Success``."""

    def failed(self) -> bool:
        """Return True for ``Failure``."""
        return not self.successful()

    @property
    @abc.abstractmethod
    def _payload(self) -> object: ...

    @abc.abstractmethod
    def unwrap(self) -> T:
        """Return the value, or raise ``UnwrapError`` on ``Failure``."""

    @abc.abstractmethod
    def unwrap_error(self) -> E:
        """Return the error, or raise ``UnwrapError`` on ``Success``."""

    @property
    def state(self) -> DispatchState:
        return self._state

    @property
    def handled(self) -> bool:
        """True once an ``on_success``/``on_failure`` arm has run."""
        return self._state is DispatchState.HANDLED

    frozen = handled

    def __str__(self) -> str:
        """Render as ``Success(<payload>)`` or ``Failure(<payload>)``.

        A top-level string payload is double-quoted. Any other payload,
        including strings nested in containers, uses ``repr``.
        """
        return f"{type(self).__name__}({_inspect(self._payload)})"

    # --- Chaining ---

    def then(self, fn: typing.Callable[..., typing.Any]) -> typing.Any:
        """Bind: call ``fn`` with the value on ``Success``; pass ``Failure`` through.

        ``fn`` receives ``(value)`` or ``(value, type)`` depending on how many
        positional parameters it declares. Its return value is returned as is,
        so a step that wants the chain to continue returns a Result.
        """
        require_callable(fn, "fn")
        if self.failed():
            return self
        return invoke(fn, self._payload, self.type)

    # Terminal step of a chain; its return value need not be a Result.
    and_then = then

    def catch(self, fn: typing.Callable[..., typing.Any]) -> typing.Any:
        """Recover: call ``fn`` with the error on ``Failure``; pass ``Success`` through."""
        require_callable(fn, "fn")
        if self.successful():
            return self
        return invoke(fn, self._payload, self.type)

    or_else = catch

    # --- Dispatch ---

    def on[R](
        self,
        *,
        success: typing.Callable[..., R],
        failure: typing.Callable[..., R],
    ) -> R:
        """Total match: run ``success(value)`` or ``failure(error)`` and return its result.

        Does not take part in the handled state.
        """
        require_callable(success, "success")
        require_callable(failure, "failure")
        arm = success if self.successful() else failure
        return invoke(arm, self._payload, self.type)

    def on_success(
        self,
        *types: Tag,
        unhandled: bool = False,
        handler: typing.Callable[..., object],
    ) -> typing.Self:
        """Run ``handler`` on a ``Success`` whose tag matches.

        Args:
            *types: Tags this arm accepts.
            unhandled: Accept any tag as long as no earlier arm has run.
            handler: Called with ``(value)`` or ``(value, type)``.

        Returns:
            This same result, for further dispatch calls.

        Calling with neither ``types`` nor ``unhandled`` is the legacy form:
        the arm always matches and a deprecation notice is sent.
        """
        return self._dispatch(
            "on_success", types, unhandled, handler, active=self.successful()
        )

    def on_failure(
        self,
        *types: Tag,
        unhandled: bool = False,
        handler: typing.Callable[..., object],
    ) -> typing.Self:
        """Run ``handler`` on a ``Failure`` whose tag matches.

        Mirror of ``on_success``; a no-op on ``Success``.
        """
        return self._dispatch(
            "on_failure", types, unhandled, handler, active=self.failed()
        )

    def _dispatch(
        self,
        method: str,
        types: tuple[Tag, ...],
        unhandled: bool,
        handler: typing.Callable[..., object],
        *,
        active: bool,
    ) -> typing.Self:
        require_callable(handler, "handler")
        if not active or self.handled:
            return self

        if not types and not unhandled:
            self._notify_legacy(method)
        elif not unhandled and self.type not in types:
            return self

        # Recorded before the arm runs: a raising handler still counts.
        object.__setattr__(self, "_state", DispatchState.HANDLED)
        log.debug("%s matched %s (tag=%r)", method, type(self).__name__, self.type)
        invoke(handler, self._payload, self.type)
        return self

    def _notify_legacy(self, method: str) -> None:
        cls = type(self)
        qualified = f"{cls.__module__}.{cls.__qualname__}.{method}"
        # Frames: caller -> on_success/on_failure -> _dispatch -> here
        get_deprecator()(
            name=f"{qualified} without target type",
            alternative=f"{qualified}(unhandled=True)",
            origin=caller_origin(3),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T](Result[T, typing.Any]):
    """A successful outcome carrying ``value``."""

    value: T
    type: Tag | None = None
    _state: DispatchState = dataclasses.field(
        default=DispatchState.UNHANDLED, init=False, repr=False, compare=False
    )

    def successful(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    @property
    def _payload(self) -> T:
        return self.value

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> typing.NoReturn:
        raise UnwrapError(
            f"Cannot unwrap an error from {self}",
            result=self,
            hint="Check failed() first, or read .error, which is None on Success",
        )


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E](Result[typing.Any, E]):
    """A failed outcome carrying ``error``."""

    error: E
    type: Tag | None = None
    _state: DispatchState = dataclasses.field(
        default=DispatchState.UNHANDLED, init=False, repr=False, compare=False
    )

    def successful(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    @property
    def _payload(self) -> E:
        return self.error

    def unwrap(self) -> typing.NoReturn:
        raise UnwrapError(
            f"Cannot unwrap a value from {self}",
            result=self,
            hint="Check successful() first, or read .value, which is None on Failure",
        )

    def unwrap_error(self) -> E:
        return self.error


__all__ = ["DispatchState", "Failure", "Result", "Success", "Tag"]
