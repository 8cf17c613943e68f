"""Startup configuration models and the default config writer."""

from .models import (
    AccountConfig,
    ProgramConfig,
    RelayConfig,
    StartupConfig,
    StorageConfig,
    ValidatorConfig,
)
from .writer import ConfigWriter, write_startup_config

__all__ = [
    "AccountConfig",
    "ConfigWriter",
    "ProgramConfig",
    "RelayConfig",
    "StartupConfig",
    "StorageConfig",
    "ValidatorConfig",
    "write_startup_config",
]
