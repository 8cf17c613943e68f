"""Settings shared between the supervisor and the validator it launches."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .runtime import env_float, env_int, env_seconds, env_str

DEFAULT_EXECUTABLE = "amman"
DEFAULT_DUMP_OUTPUT_ENV = "DUMP_AMMAN"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_SERVICE_PORT = 8899
DEFAULT_RPC_PORT = 8900
DEFAULT_FIXTURES_DIR = "./tests/fixtures"
DEFAULT_ASSETS_SUBDIR = "assets"
DEFAULT_CONNECT_TIMEOUT_SECONDS = 1.0
DEFAULT_POLL_INTERVAL_SECONDS = 0.0
DEFAULT_POLL_MAX_INTERVAL_SECONDS = 1.0
DEFAULT_POLL_BACKOFF_MULTIPLIER = 1.0

_MAX_PORT = 65535


@dataclass(frozen=True)
class HarnessSettings:
    executable: str
    dump_output_env: str
    host: str
    service_port: int
    rpc_port: int
    fixtures_dir: Path
    assets_subdir: str
    connect_timeout_seconds: float
    poll_interval_seconds: float
    poll_max_interval_seconds: float
    poll_backoff_multiplier: float
    wait_timeout_seconds: Optional[float]

    @property
    def ports(self) -> tuple[int, int]:
        """Both well-known ports, service port first."""
        return (self.service_port, self.rpc_port)


def _validate_port(name: str, value: int) -> int:
    if not 0 < value <= _MAX_PORT:
        raise ConfigurationError.invalid_value(name, value, f"Ports must be between 1 and {_MAX_PORT}")
    return value


def load_harness_settings() -> HarnessSettings:
    """Read harness settings from the environment without caching."""
    service_port = _validate_port("VALIDATOR_PORT", int(env_int("VALIDATOR_PORT", or_value=DEFAULT_SERVICE_PORT)))
    rpc_port = _validate_port("VALIDATOR_RPC_PORT", int(env_int("VALIDATOR_RPC_PORT", or_value=DEFAULT_RPC_PORT)))
    if service_port == rpc_port:
        raise ConfigurationError(f"VALIDATOR_PORT and VALIDATOR_RPC_PORT must differ (both {service_port})")

    backoff_multiplier = float(env_float("VALIDATOR_POLL_BACKOFF_MULTIPLIER", or_value=DEFAULT_POLL_BACKOFF_MULTIPLIER))
    if backoff_multiplier < 1.0:
        raise ConfigurationError.invalid_value("VALIDATOR_POLL_BACKOFF_MULTIPLIER", backoff_multiplier, "Must be at least 1.0")

    connect_timeout = float(
        env_seconds("VALIDATOR_CONNECT_TIMEOUT_SECONDS", or_value=DEFAULT_CONNECT_TIMEOUT_SECONDS)
    )
    if connect_timeout <= 0:
        raise ConfigurationError.invalid_value("VALIDATOR_CONNECT_TIMEOUT_SECONDS", connect_timeout, "Must be greater than 0")

    return HarnessSettings(
        executable=str(env_str("VALIDATOR_EXECUTABLE", or_value=DEFAULT_EXECUTABLE)),
        dump_output_env=str(env_str("VALIDATOR_DUMP_ENV", or_value=DEFAULT_DUMP_OUTPUT_ENV)),
        host=str(env_str("VALIDATOR_HOST", or_value=DEFAULT_HOST)),
        service_port=service_port,
        rpc_port=rpc_port,
        fixtures_dir=Path(str(env_str("VALIDATOR_FIXTURES_DIR", or_value=DEFAULT_FIXTURES_DIR))).expanduser(),
        assets_subdir=str(env_str("VALIDATOR_ASSETS_SUBDIR", or_value=DEFAULT_ASSETS_SUBDIR)),
        connect_timeout_seconds=connect_timeout,
        poll_interval_seconds=float(env_seconds("VALIDATOR_POLL_INTERVAL_SECONDS", or_value=DEFAULT_POLL_INTERVAL_SECONDS)),
        poll_max_interval_seconds=float(
            env_seconds("VALIDATOR_POLL_MAX_INTERVAL_SECONDS", or_value=DEFAULT_POLL_MAX_INTERVAL_SECONDS)
        ),
        poll_backoff_multiplier=backoff_multiplier,
        wait_timeout_seconds=env_seconds("VALIDATOR_WAIT_TIMEOUT_SECONDS"),
    )


@lru_cache(maxsize=1)
def get_harness_settings() -> HarnessSettings:
    return load_harness_settings()


__all__ = [
    "DEFAULT_EXECUTABLE",
    "DEFAULT_RPC_PORT",
    "DEFAULT_SERVICE_PORT",
    "HarnessSettings",
    "get_harness_settings",
    "load_harness_settings",
]
