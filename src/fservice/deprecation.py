"""Deprecation notices for legacy call forms.

The Result core never decides how a deprecation is shown. It calls the active
``Deprecator`` with three keyword arguments and moves on. The process default,
``deprecate``, formats a notice and delivers it according to the
``deprecations`` configuration mode. Hosts replace it with ``set_deprecator``;
tests swap in a capturing stub for a block with ``deprecator_scope``.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import logging
import os
import sys
from typing import TYPE_CHECKING, Protocol, runtime_checkable
import warnings

from fservice.config import current_config
from fservice.errors import DeprecatedUsageError

if TYPE_CHECKING:
    from collections.abc import Generator

log = logging.getLogger(__name__)

# Warnings are attributed to the first frame outside this package.
_PACKAGE_PREFIX = os.path.dirname(__file__) + os.sep


class FServiceDeprecationWarning(DeprecationWarning):
    """Warning category for fservice deprecations, filterable on its own."""


@runtime_checkable
class Deprecator(Protocol):
    """Callable notified whenever a deprecated call form is used."""

    def __call__(self, *, name: str, alternative: str, origin: str | None) -> None:
        """Receive one deprecation notice."""
        ...


def format_notice(name: str, alternative: str, origin: str | None = None) -> str:
    """Build the human-readable notice text."""
    parts = [f"[DEPRECATED] {name} is deprecated; "]
    if origin is not None:
        parts.append(f"called from {origin}; ")
    parts.append(f"use {alternative} instead. ")
    parts.append("It will be removed on the next release.")
    return "".join(parts)


def deprecate(*, name: str, alternative: str, origin: str | None = None) -> None:
    """Default deprecator: deliver the notice per the configured mode.

    Modes:
        ``warn``: emit an ``FServiceDeprecationWarning``.
        ``log``: log the notice at WARNING on the ``fservice.deprecation`` logger.
        ``error``: raise ``DeprecatedUsageError``.
        ``ignore``: drop the notice.
    """
    mode = current_config().deprecations
    if mode == "ignore":
        return
    message = format_notice(name, alternative, origin)
    if mode == "log":
        log.warning(message)
    elif mode == "error":
        raise DeprecatedUsageError(message, hint=f"Use {alternative}.")
    else:
        warnings.warn(
            message,
            FServiceDeprecationWarning,
            stacklevel=2,
            skip_file_prefixes=(_PACKAGE_PREFIX,),
        )


# --- Active deprecator ---

_process_default: Deprecator = deprecate

_SCOPED: ContextVar[Deprecator | None] = ContextVar(
    "fservice_deprecator", default=None
)


def get_deprecator() -> Deprecator:
    """Return the deprecator for the current context."""
    return _SCOPED.get() or _process_default


def set_deprecator(deprecator: Deprecator) -> Deprecator:
    """Replace the process-wide default deprecator.

    Returns:
        The previous default, so callers can restore it.
    """
    global _process_default
    if not callable(deprecator):
        raise TypeError("deprecator must be callable")
    previous, _process_default = _process_default, deprecator
    return previous


@contextmanager
def deprecator_scope(deprecator: Deprecator) -> Generator[Deprecator]:
    """Route deprecation notices to ``deprecator`` within the block."""
    token = _SCOPED.set(deprecator)
    try:
        yield deprecator
    finally:
        _SCOPED.reset(token)


def caller_origin(depth: int = 1) -> str:
    """Describe a caller's location as ``file:line:in function``.

    ``depth`` counts frames above the function calling ``caller_origin``:
    1 names that function's caller.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return "<unknown>"
    code = frame.f_code
    return f"{code.co_filename}:{frame.f_lineno}:in {code.co_name}"
