"""Wait for the validator to become reachable, or to go away."""

import logging
from typing import Optional

from ..config import HarnessSettings
from ..control_client import ControlClient
from ..pid_resolver import wait_for_pid
from ..polling import PollPolicy
from ..port_probe import wait_for_ports, wait_for_ports_free

logger = logging.getLogger(__name__)


def wait_until_ready(client: ControlClient, settings: HarnessSettings, *, policy: Optional[PollPolicy] = None) -> int:
    """
    Block until the control channel reports a pid and both well-known ports accept connections.

    Returns:
        The pid reported by the control channel
    """
    logger.info("Waiting for pid")
    pid = wait_for_pid(client, policy=policy)
    logger.info("Validator pid: %s", pid)

    logger.info("Waiting for validator to be ready on ports %s and %s", settings.service_port, settings.rpc_port)
    wait_for_ports(settings.ports, settings.host, timeout=settings.connect_timeout_seconds, policy=policy)
    logger.info("Validator ready ✔️")
    return pid


def wait_until_ports_closed(settings: HarnessSettings, *, policy: Optional[PollPolicy] = None) -> None:
    """Block until neither well-known port accepts connections."""
    logger.info("Waiting for validator to shut down")
    wait_for_ports_free(settings.ports, settings.host, timeout=settings.connect_timeout_seconds, policy=policy)


__all__ = ["wait_until_ports_closed", "wait_until_ready"]
