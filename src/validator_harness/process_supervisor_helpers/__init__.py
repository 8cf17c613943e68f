"""Helpers used by the validator process supervisor."""

from .launch import (
    LaunchCommand,
    build_start_command,
    build_stop_command,
    output_dump_requested,
    run_stop_command,
    spawn_process,
)
from .process_terminator import process_has_exited, terminate_owned_process
from .readiness import wait_until_ports_closed, wait_until_ready

__all__ = [
    "LaunchCommand",
    "build_start_command",
    "build_stop_command",
    "output_dump_requested",
    "process_has_exited",
    "run_stop_command",
    "spawn_process",
    "terminate_owned_process",
    "wait_until_ports_closed",
    "wait_until_ready",
]
