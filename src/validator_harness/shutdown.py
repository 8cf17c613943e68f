"""
Global validator shutdown.

Stops whatever validator the control channel knows about, independent of any
supervisor instance. Meant for end-of-suite teardown.

Usage:
    from validator_harness.shutdown import shutdown_validator

    shutdown_validator(make_control_client)
"""

from __future__ import annotations

import logging
from typing import Optional

from .control_client import ControlClientFactory
from .pid_resolver import CONTROL_REQUEST_ERRORS, pid_of_validator_running_on_machine, wait_for_pid_cleared
from .polling import PollPolicy

logger = logging.getLogger(__name__)


def shutdown_validator(client_factory: ControlClientFactory, *, policy: Optional[PollPolicy] = None) -> bool:
    """
    Kill any running validator and block until the control channel reports no pid.

    Args:
        client_factory: Builds the disposable control client used for the shutdown
        policy: Spacing/timeout of the wait loop; settings-derived when omitted

    Returns:
        True when a running validator was found and stopped

    Raises:
        RuntimeError: If the control channel fails the kill request
    """
    client = client_factory()

    pid = pid_of_validator_running_on_machine(client)
    if pid is None:
        logger.debug("No validator running; nothing to shut down")
        return False

    logger.info("Shutting down validator with pid %s", pid)
    try:
        client.request_kill_validator()
    except CONTROL_REQUEST_ERRORS as exc:
        raise RuntimeError("failed to kill running validator") from exc

    wait_for_pid_cleared(client, policy=policy)
    logger.info("Validator with pid %s is gone", pid)
    return True


__all__ = ["shutdown_validator"]
