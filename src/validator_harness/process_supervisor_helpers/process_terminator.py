"""Terminate and reap a validator process spawned by this supervisor."""

import logging
from typing import Any

import psutil

from ..exceptions import ValidatorKillError

logger = logging.getLogger(__name__)


def terminate_owned_process(process: Any) -> int:
    """
    Kill an owned process and wait for it to exit.

    The control channel usually stops the validator first, so a process that
    is already gone is not an error; it is still waited on to reap it.

    Returns:
        The process exit code

    Raises:
        ValidatorKillError: If the kill signal or the wait fails
    """
    pid = process.pid
    try:
        process.kill()
    except psutil.NoSuchProcess:
        logger.debug("Validator process %s exited before it was killed", pid)
    except (psutil.Error, OSError) as exc:
        raise ValidatorKillError(f"failed to kill validator process {pid}") from exc

    try:
        exit_code = process.wait()
    except (psutil.Error, OSError) as exc:
        raise ValidatorKillError(f"failed to wait for validator process {pid}") from exc

    logger.info("Validator process %s exited with %s", pid, exit_code)
    return exit_code


def process_has_exited(process: Any) -> bool:
    """Non-blocking check whether an owned process already terminated."""
    try:
        return process.poll() is not None
    except (psutil.Error, OSError):
        return True


__all__ = ["process_has_exited", "terminate_owned_process"]
