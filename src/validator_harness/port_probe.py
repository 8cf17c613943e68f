"""TCP port probing used as a readiness and shutdown signal for the validator."""

from __future__ import annotations

import logging
import socket
from typing import Iterable, Optional

from .config import get_harness_settings
from .polling import PollPolicy, poll_until

logger = logging.getLogger(__name__)


def scan_port(port: int, host: Optional[str] = None, *, timeout: Optional[float] = None) -> bool:
    """Return True when something accepts TCP connections on *port*.

    Any failure to connect counts as "not listening".
    """
    if host is None or timeout is None:
        settings = get_harness_settings()
        host = host if host is not None else settings.host
        timeout = timeout if timeout is not None else settings.connect_timeout_seconds
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def wait_for_port(
    port: int, host: Optional[str] = None, *, timeout: Optional[float] = None, policy: Optional[PollPolicy] = None
) -> None:
    """Block until *port* accepts connections."""
    poll_until(lambda: scan_port(port, host, timeout=timeout), description=f"port {port} to open", policy=policy)


def wait_for_port_free(
    port: int, host: Optional[str] = None, *, timeout: Optional[float] = None, policy: Optional[PollPolicy] = None
) -> None:
    """Block until *port* stops accepting connections."""
    poll_until(lambda: not scan_port(port, host, timeout=timeout), description=f"port {port} to close", policy=policy)


def wait_for_ports(
    ports: Iterable[int], host: Optional[str] = None, *, timeout: Optional[float] = None, policy: Optional[PollPolicy] = None
) -> None:
    for port in ports:
        wait_for_port(port, host, timeout=timeout, policy=policy)


def wait_for_ports_free(
    ports: Iterable[int], host: Optional[str] = None, *, timeout: Optional[float] = None, policy: Optional[PollPolicy] = None
) -> None:
    for port in ports:
        wait_for_port_free(port, host, timeout=timeout, policy=policy)


__all__ = ["scan_port", "wait_for_port", "wait_for_port_free", "wait_for_ports", "wait_for_ports_free"]
