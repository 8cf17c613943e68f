"""Build and spawn validator launcher commands."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import psutil

from ..config import HarnessSettings, env_is_set
from ..exceptions import ValidatorKillError, ValidatorLaunchError

logger = logging.getLogger(__name__)

START_SUBCOMMAND = "start"
STOP_SUBCOMMAND = "stop"


@dataclass(frozen=True)
class LaunchCommand:
    args: List[str]
    cwd: Optional[Path] = None
    suppress_output: bool = True

    def popen_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if self.cwd is not None:
            kwargs["cwd"] = str(self.cwd)
        if self.suppress_output:
            kwargs["stdout"] = subprocess.DEVNULL
            kwargs["stderr"] = subprocess.DEVNULL
        return kwargs


def output_dump_requested(settings: HarnessSettings) -> bool:
    """True when the verbose-dump environment variable is present at all."""
    return env_is_set(settings.dump_output_env)


def build_start_command(settings: HarnessSettings, fixtures_root: Path, config_path: Optional[Path] = None) -> LaunchCommand:
    args = [settings.executable, START_SUBCOMMAND]
    if config_path is not None:
        args.append(str(config_path))
    return LaunchCommand(args=args, cwd=fixtures_root, suppress_output=not output_dump_requested(settings))


def build_stop_command(settings: HarnessSettings) -> LaunchCommand:
    return LaunchCommand(args=[settings.executable, STOP_SUBCOMMAND], suppress_output=False)


def spawn_process(command: LaunchCommand) -> psutil.Popen:
    """
    Spawn *command* and return its handle.

    Raises:
        ValidatorLaunchError: If the executable cannot be started
    """
    logger.info("Cmd: %s (cwd=%s)", " ".join(command.args), command.cwd)
    try:
        return psutil.Popen(command.args, **command.popen_kwargs())
    except (OSError, ValueError, psutil.Error) as exc:
        raise ValidatorLaunchError(f"failed to launch {command.args[0]}: {exc}") from exc


def run_stop_command(settings: HarnessSettings) -> int:
    """
    Invoke the launcher's stop subcommand and wait for it to exit.

    Returns:
        Exit code of the stop command

    Raises:
        ValidatorKillError: If the stop command cannot be run or waited on
    """
    command = build_stop_command(settings)
    logger.info("Cmd: %s", " ".join(command.args))
    try:
        process = psutil.Popen(command.args, **command.popen_kwargs())
        exit_code = process.wait()
    except (OSError, psutil.Error) as exc:
        raise ValidatorKillError(f"failed to run {' '.join(command.args)}: {exc}") from exc
    if exit_code:
        logger.warning("%s exited with status %s", " ".join(command.args), exit_code)
    return exit_code


__all__ = [
    "LaunchCommand",
    "START_SUBCOMMAND",
    "STOP_SUBCOMMAND",
    "build_start_command",
    "build_stop_command",
    "output_dump_requested",
    "run_stop_command",
    "spawn_process",
]
