"""Shared configuration helpers and dataclasses."""

from .errors import ConfigurationError
from .runtime import (
    env_bool,
    env_float,
    env_int,
    env_is_set,
    env_seconds,
    env_str,
    reset_default_values,
)
from .harness import HarnessSettings, get_harness_settings, load_harness_settings

__all__ = [
    "ConfigurationError",
    "HarnessSettings",
    "env_bool",
    "env_float",
    "env_int",
    "env_is_set",
    "env_seconds",
    "env_str",
    "get_harness_settings",
    "load_harness_settings",
    "reset_default_values",
]
