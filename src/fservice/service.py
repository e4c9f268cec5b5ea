"""Service objects: operations that always answer with a Result.

Subclass ``Service``, implement ``run()``, and call the class::

    class CreateUser(Service):
        def __init__(self, name: str) -> None:
            self.name = name

        def run(self) -> Result[User, str]:
            if not self.name:
                return self.failure("blank_name", data="name is required")
            return self.attempt(lambda: User.create(self.name), type="created")

    CreateUser.call("ada").on_success("created", handler=welcome)

The builder helpers (``success``, ``failure``, ``check``, ``attempt``) keep
``run()`` free of explicit ``Success``/``Failure`` construction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fservice.errors import IncompatibleResultError
from fservice.result import Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from fservice.result import Tag

log = logging.getLogger(__name__)


class Service:
    """Base class for service objects."""

    @classmethod
    def call(cls, *args: Any, **kwargs: Any) -> Result[Any, Any]:
        """Instantiate the service with the given arguments and run it.

        Raises:
            IncompatibleResultError: When ``run()`` does not return a Result.
        """
        result = cls(*args, **kwargs).run()
        if not isinstance(result, Result):
            log.error(
                "%s.run returned %s instead of a Result",
                cls.__qualname__,
                type(result).__name__,
            )
            raise IncompatibleResultError(
                f"{cls.__qualname__}.run must return a Result, "
                f"got {type(result).__name__}",
                service=cls.__qualname__,
                returned=result,
                hint="Return self.success(...) or self.failure(...) from run()",
            )
        return result

    def run(self) -> Result[Any, Any]:
        raise NotImplementedError(f"{type(self).__qualname__} must implement run()")

    # --- Result builders ---

    def success[T](self, type: Tag | None = None, data: T = None) -> Success[T]:
        return Success(data, type)

    def failure[E](self, type: Tag | None = None, data: E = None) -> Failure[E]:
        return Failure(data, type)

    def check(
        self,
        predicate: Callable[[], Any],
        type: Tag | None = None,
        data: Any = None,
    ) -> Result[Any, Any]:
        """Turn a predicate into a Result.

        A truthy outcome yields ``Success``, a falsy one ``Failure``. The
        payload is ``data`` when given, otherwise the predicate's outcome.
        """
        outcome = predicate()
        payload = data if data is not None else outcome
        if outcome:
            return Success(payload, type)
        return Failure(payload, type)

    def attempt[T](
        self,
        fn: Callable[[], T],
        type: Tag | None = None,
        catch: type[BaseException] | tuple[type[BaseException], ...] = Exception,
    ) -> Result[T, BaseException]:
        """Run ``fn``, capturing exceptions of ``catch`` as a ``Failure``.

        Exceptions outside ``catch`` propagate.
        """
        try:
            return Success(fn(), type)
        except catch as exc:
            log.debug("%s captured %r", self.__class__.__qualname__, exc)
            return Failure(exc, type)
