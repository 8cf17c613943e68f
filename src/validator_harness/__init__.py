"""Supervise a local validator process for integration test suites."""

from .exceptions import (
    ControlClientError,
    HarnessError,
    ValidatorAlreadyRunningError,
    ValidatorAlreadyStartedError,
    ValidatorKillError,
    ValidatorLaunchError,
    ValidatorNotRunningError,
    ValidatorProcessError,
    WaitTimeoutError,
)
from .process_supervisor import SupervisionState, ValidatorProcess
from .shutdown import shutdown_validator

__all__ = [
    "ControlClientError",
    "HarnessError",
    "SupervisionState",
    "ValidatorAlreadyRunningError",
    "ValidatorAlreadyStartedError",
    "ValidatorKillError",
    "ValidatorLaunchError",
    "ValidatorNotRunningError",
    "ValidatorProcessError",
    "ValidatorProcess",
    "WaitTimeoutError",
    "shutdown_validator",
]
