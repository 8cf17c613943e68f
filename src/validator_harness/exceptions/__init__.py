"""Exception classes for the validator harness.

All harness exceptions inherit from ``HarnessError`` so callers can catch the
whole family at once.

Exception classes support two patterns:
1. No-argument raise: raise ValidatorNotRunningError()
2. Contextual attributes: err = WaitTimeoutError(description="pid", timeout_seconds=5); raise err
"""

from typing import Any


class HarnessError(Exception):
    """Base exception for all harness errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Harness error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class ControlClientError(HarnessError):
    """Control channel request failed."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Control channel request failed"
        super().__init__(message, **kwargs)


class WaitTimeoutError(HarnessError):
    """Gave up waiting for the validator to change state."""

    def __init__(self, description: str, timeout_seconds: float, **kwargs: Any) -> None:
        message = f"Timed out after {timeout_seconds}s waiting for {description}"
        super().__init__(message, description=description, timeout_seconds=timeout_seconds, **kwargs)


from .process import (  # noqa: E402
    ValidatorAlreadyRunningError,
    ValidatorAlreadyStartedError,
    ValidatorKillError,
    ValidatorLaunchError,
    ValidatorNotRunningError,
    ValidatorProcessError,
)

__all__ = [
    "ControlClientError",
    "HarnessError",
    "ValidatorAlreadyRunningError",
    "ValidatorAlreadyStartedError",
    "ValidatorKillError",
    "ValidatorLaunchError",
    "ValidatorNotRunningError",
    "ValidatorProcessError",
    "WaitTimeoutError",
]
