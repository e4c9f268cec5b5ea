"""Exception hierarchy for fservice."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fservice.result import Result


class FServiceError(Exception):
    """Base exception for all fservice errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, followed by the hint when one is attached."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class UnwrapError(FServiceError):
    """A payload was unwrapped from the wrong Result variant.

    Raised by ``Success.unwrap_error()`` and ``Failure.unwrap()``. The
    offending result is kept on ``result`` for inspection.
    """

    def __init__(
        self,
        message: str,
        *,
        result: Result[object, object],
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.result = result


class ConfigurationError(FServiceError):
    """Configuration validation or resolution failed."""


class IncompatibleResultError(FServiceError):
    """A service returned something other than a Result."""

    def __init__(
        self,
        message: str,
        *,
        service: str,
        returned: object,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.service = service
        self.returned = returned


class DeprecatedUsageError(FServiceError):
    """A deprecated call was made while deprecations are configured as errors."""
