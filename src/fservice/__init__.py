"""fservice: a Result algebra with chaining and tag-based dispatch.

Public API:
    - Success / Failure: the two Result variants
    - Result: common base, for isinstance checks and annotations
    - Service: base class for operations that answer with a Result
    - UnwrapError and the rest of the error hierarchy
    - deprecator_scope / set_deprecator: route legacy-usage notices
    - config_scope / resolve_config: configuration
"""

from __future__ import annotations

import logging

from fservice.config import FrozenConfig, Settings, config_scope, resolve_config
from fservice.deprecation import (
    Deprecator,
    FServiceDeprecationWarning,
    deprecate,
    deprecator_scope,
    get_deprecator,
    set_deprecator,
)
from fservice.errors import (
    ConfigurationError,
    DeprecatedUsageError,
    FServiceError,
    IncompatibleResultError,
    UnwrapError,
)
from fservice.result import DispatchState, Failure, Result, Success
from fservice.service import Service

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fservice")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fservice").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "DeprecatedUsageError",
    "Deprecator",
    "DispatchState",
    "FServiceDeprecationWarning",
    "FServiceError",
    "Failure",
    "FrozenConfig",
    "IncompatibleResultError",
    "Result",
    "Service",
    "Settings",
    "Success",
    "UnwrapError",
    "config_scope",
    "deprecate",
    "deprecator_scope",
    "get_deprecator",
    "resolve_config",
    "set_deprecator",
]
