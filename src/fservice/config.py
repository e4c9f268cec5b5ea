"""Configuration: resolve once, freeze, then flow.

Settings are resolved from three layers, lowest precedence first:

1. Schema defaults (``Settings``)
2. ``FSERVICE_*`` environment variables (a ``.env`` file is loaded once)
3. Explicit overrides passed to ``resolve_config``

The result is an immutable ``FrozenConfig``. ``config_scope`` installs one as
the ambient configuration for a block of code without touching global state.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
import os
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from fservice.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

ENV_PREFIX = "FSERVICE_"

DeprecationMode = Literal["warn", "log", "error", "ignore"]


class Settings(BaseModel):
    """Schema for configuration validation and defaults."""

    #: How the default deprecator delivers notices.
    deprecations: DeprecationMode = Field(default="warn")

    model_config = {"extra": "forbid"}

    @field_validator("deprecations", mode="before")
    @classmethod
    def normalize_mode(cls, v: Any) -> Any:
        """Accept ``" WARN "`` and friends."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration payload."""

    deprecations: DeprecationMode

    @classmethod
    def from_settings(cls, settings: Settings) -> FrozenConfig:
        return cls(deprecations=settings.deprecations)


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "fservice_ambient_config", default=None
)

_DOTENV_LOADED: bool = False


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Run a block of code with a specific configuration.

    Args:
        cfg_or_overrides: Either a FrozenConfig to use directly, or a mapping
            of overrides to apply during resolution.
        **overrides: Additional override values, merged over the mapping.

    Yields:
        The FrozenConfig active in this scope.

    Example:
        with config_scope(deprecations="error"):
            result.on_success(handler=print)  # raises DeprecatedUsageError
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)


def current_config() -> FrozenConfig:
    """Return the ambient configuration, resolving a fresh one if none is set."""
    return _AMBIENT.get() or resolve_config()


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve configuration from defaults, environment and overrides.

    Raises:
        ConfigurationError: When a value fails validation.
    """
    _try_load_dotenv()
    merged: dict[str, Any] = {**load_env(), **(overrides or {})}
    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ConfigurationError(
            f"Configuration validation failed for: {fields or 'settings'}",
            hint=f"Check the {ENV_PREFIX}* environment variables and overrides.",
        ) from e
    return FrozenConfig.from_settings(settings)


def load_env() -> dict[str, Any]:
    """Read ``FSERVICE_*`` variables into a plain mapping of field values.

    Variables that do not name a ``Settings`` field are skipped, so unrelated
    ``FSERVICE_`` variables in the environment never fail resolution.
    """
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in Settings.model_fields:
            config[field_name] = value
    return config


def _try_load_dotenv() -> None:
    """Load the application's ``.env`` file once per process.

    The search starts from the working directory, not from this package's
    install location.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    from dotenv import find_dotenv, load_dotenv

    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path)
    _DOTENV_LOADED = True
