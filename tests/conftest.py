"""Pytest configuration and fixtures.

Provides environment isolation, a capturing deprecator double, and a reset
of process-wide deprecation routing. Fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import os

import pytest

from fservice.deprecation import deprecate, deprecator_scope, set_deprecator

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CapturingDeprecator:
    """Deprecator test double recording every notice it receives."""

    calls: list[dict[str, str | None]] = field(default_factory=list)

    def __call__(self, *, name: str, alternative: str, origin: str | None) -> None:
        self.calls.append({"name": name, "alternative": alternative, "origin": origin})

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def deprecations():
    """Capture deprecation notices for the duration of a test (not autouse)."""
    capture = CapturingDeprecator()
    with deprecator_scope(capture):
        yield capture


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_fservice_env(monkeypatch):
    """Clear FSERVICE_* variables so host settings never leak into tests."""
    for key in list(os.environ.keys()):
        if key.startswith("FSERVICE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_default_deprecator():
    """Undo any set_deprecator() a test performs."""
    yield
    set_deprecator(deprecate)
