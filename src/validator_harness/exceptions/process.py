"""Errors raised by the validator process supervisor."""

from typing import Any

from . import HarnessError


class ValidatorProcessError(HarnessError):
    """Validator supervision failed."""


class ValidatorAlreadyStartedError(ValidatorProcessError):
    """validator was already started"""


class ValidatorAlreadyRunningError(ValidatorProcessError):
    """A validator spawned elsewhere is already running on this machine."""

    def __init__(self, pid: int, **kwargs: Any) -> None:
        message = f"validator already running on this machine with pid {pid}, please kill it first and then continue"
        super().__init__(message, pid=pid, **kwargs)


class ValidatorNotRunningError(ValidatorProcessError):
    """validator is not running and thus cannot be killed"""


class ValidatorKillError(ValidatorProcessError):
    """failed to kill validator"""


class ValidatorLaunchError(ValidatorProcessError):
    """failed to launch validator"""


__all__ = [
    "ValidatorAlreadyRunningError",
    "ValidatorAlreadyStartedError",
    "ValidatorKillError",
    "ValidatorLaunchError",
    "ValidatorNotRunningError",
    "ValidatorProcessError",
]
