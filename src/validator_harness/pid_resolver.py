"""Resolve the pid of a validator running on this machine via the control channel."""

from __future__ import annotations

import logging
from typing import Optional

from .control_client import ControlClient
from .exceptions import ControlClientError
from .polling import PollPolicy, poll_until

logger = logging.getLogger(__name__)

CONTROL_REQUEST_ERRORS = (ControlClientError, OSError, TimeoutError, ValueError)


def pid_of_validator_running_on_machine(client: ControlClient) -> Optional[int]:
    """
    Ask the control channel for the validator pid.

    Any request failure is reported as ``None``: "not running" and "could not
    tell" are deliberately indistinguishable here.
    """
    try:
        return client.request_validator_pid()
    except CONTROL_REQUEST_ERRORS as exc:
        logger.debug("Validator pid request failed: %s", exc)
        return None


def wait_for_pid(client: ControlClient, *, policy: Optional[PollPolicy] = None) -> int:
    """Block until the control channel reports a pid and return it."""
    return poll_until(
        lambda: pid_of_validator_running_on_machine(client),
        description="validator pid",
        policy=policy,
    )


def wait_for_pid_cleared(client: ControlClient, *, policy: Optional[PollPolicy] = None) -> None:
    """Block until the control channel no longer reports a pid."""
    poll_until(
        lambda: pid_of_validator_running_on_machine(client) is None,
        description="validator pid to disappear",
        policy=policy,
    )


__all__ = [
    "CONTROL_REQUEST_ERRORS",
    "pid_of_validator_running_on_machine",
    "wait_for_pid",
    "wait_for_pid_cleared",
]
