"""
Validator Process Supervisor

Starts, detects, restarts and kills the local validator used by the test
suite while staying consistent with three signals that may disagree:

- the process handle this instance spawned (if any)
- the pid the control channel reports for a validator on this machine
- whether the two well-known ports accept connections

Usage:
    from validator_harness.process_supervisor import ValidatorProcess

    validator = ValidatorProcess(client)
    validator.restart(StartupConfig(validator=ValidatorConfig(accounts=[...])))
    ...
    validator.kill()
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from .config import HarnessSettings, get_harness_settings
from .control_client import ControlClient
from .exceptions import (
    ValidatorAlreadyRunningError,
    ValidatorAlreadyStartedError,
    ValidatorKillError,
    ValidatorNotRunningError,
)
from .fixtures import FixturePaths, resolve_fixture_paths
from .pid_resolver import CONTROL_REQUEST_ERRORS, pid_of_validator_running_on_machine
from .polling import PollPolicy
from .process_supervisor_helpers import (
    build_start_command,
    process_has_exited,
    run_stop_command,
    spawn_process,
    terminate_owned_process,
    wait_until_ports_closed,
    wait_until_ready,
)
from .startup_config import ConfigWriter, StartupConfig, write_startup_config

logger = logging.getLogger(__name__)


class SupervisionState(Enum):
    """What this supervisor knows about the validator."""

    NOT_STARTED = "not_started"
    OWNED_HANDLE = "owned_handle"
    EXTERNAL_PID = "external_pid"
    STALE_HANDLE = "stale_handle"


class ValidatorProcess:
    """
    Supervises a validator process reachable through a shared control client.

    Only the instance that spawned the process holds its handle and may kill
    and reap it directly. A pid learned from the control channel lets any
    instance report ``started()`` and stop the validator through the
    launcher's ``stop`` subcommand.

    Nothing is killed when an instance is discarded; call ``kill`` explicitly.
    """

    def __init__(
        self,
        client: ControlClient,
        *,
        settings: Optional[HarnessSettings] = None,
        fixtures: Optional[FixturePaths] = None,
        config_writer: ConfigWriter = write_startup_config,
        poll_policy: Optional[PollPolicy] = None,
    ):
        """
        Initialize the supervisor and adopt any validator already running.

        Args:
            client: Control channel shared with every clone of this supervisor
            settings: Harness settings; read from the environment when omitted
            fixtures: Fixture locations; resolved from settings when omitted
            config_writer: Serializes a StartupConfig to a readable file
            poll_policy: Spacing/timeout of wait loops; settings-derived when omitted

        Raises:
            ConfigurationError: If the fixture directories do not exist
        """
        self._settings = settings if settings is not None else get_harness_settings()
        self._client = client
        self._fixtures = (
            fixtures
            if fixtures is not None
            else resolve_fixture_paths(self._settings.fixtures_dir, self._settings.assets_subdir)
        )
        self._config_writer = config_writer
        self._poll_policy = poll_policy if poll_policy is not None else PollPolicy.from_settings(self._settings)
        self._process: Optional[Any] = None
        self._pid: Optional[int] = pid_of_validator_running_on_machine(client)

    def clone(self) -> "ValidatorProcess":
        """
        Copy everything except the process handle.

        The clone can observe and stop the known validator through the
        external path but can never reap a handle it did not spawn.
        """
        duplicate = object.__new__(type(self))
        duplicate.__dict__.update(self.__dict__)
        duplicate._process = None
        return duplicate

    __copy__ = clone

    @property
    def client(self) -> ControlClient:
        return self._client

    @property
    def fixtures(self) -> FixturePaths:
        return self._fixtures

    @property
    def pid(self) -> Optional[int]:
        """Validator pid last reported by the control channel, if known."""
        return self._pid

    @property
    def owns_process(self) -> bool:
        return self._process is not None

    @property
    def state(self) -> SupervisionState:
        if self._process is not None:
            if process_has_exited(self._process):
                return SupervisionState.STALE_HANDLE
            return SupervisionState.OWNED_HANDLE
        if self._pid is not None:
            return SupervisionState.EXTERNAL_PID
        return SupervisionState.NOT_STARTED

    def started(self) -> bool:
        return self._process is not None or self._pid is not None

    def ensure_started(self) -> None:
        """Start the validator unless this instance or another one already has."""
        if self._process is not None:
            return
        pid = pid_of_validator_running_on_machine(self._client)
        if pid is not None:
            logger.info("Using validator already running with pid %s", pid)
            self._pid = pid
            return
        self.start()

    def start(self, config: Optional[StartupConfig] = None) -> None:
        """
        Spawn the validator and block until it is reachable.

        Args:
            config: Optional startup config; its ``assets_folder`` is filled
                with the fixtures assets directory when unset

        Raises:
            ValidatorAlreadyStartedError: This instance already holds a process handle
            ValidatorAlreadyRunningError: The control channel reports a running validator
            ValidatorLaunchError: The launcher executable could not be spawned
            WaitTimeoutError: Only when a wait timeout is configured

        Any failure or interrupt while waiting kills and reaps the spawned
        process before the original exception propagates.
        """
        if self._process is not None:
            raise ValidatorAlreadyStartedError()
        running_pid = pid_of_validator_running_on_machine(self._client)
        if running_pid is not None:
            raise ValidatorAlreadyRunningError(running_pid)

        config_path = None
        config_handle = None
        if config is not None:
            if config.assets_folder is None:
                config.assets_folder = str(self._fixtures.assets)
            config_path, config_handle = self._config_writer(config)

        # The launched process reads the config file while starting up, so the
        # handle stays open until readiness is confirmed.
        try:
            command = build_start_command(self._settings, self._fixtures.root, config_path)
            process = spawn_process(command)
            try:
                pid = wait_until_ready(self._client, self._settings, policy=self._poll_policy)
            except BaseException:
                self._discard_unready_process(process)
                raise
        finally:
            if config_handle is not None:
                config_handle.close()

        self._process = process
        self._pid = pid

    def restart(self, config: StartupConfig) -> None:
        """
        Kill the validator if it is running, then start it with *config*.

        Not atomic: when the start fails after a successful kill the
        supervisor is left not started.
        """
        if self.started():
            self.kill(kill_external=True)
        self.start(config)

    def kill(self, kill_external: bool = False) -> bool:
        """
        Stop the validator.

        An owned process is stopped through the control channel and then
        killed and reaped directly. A validator this instance did not spawn is
        only stopped when *kill_external* is set, via the launcher's ``stop``
        subcommand followed by waiting for both ports to close.

        Returns:
            True when the validator was stopped, False when an external kill was refused

        Raises:
            ValidatorNotRunningError: Neither a handle nor a pid is known
            ValidatorKillError: Killing or waiting on the process failed
            RuntimeError: The control channel failed a kill request for an owned process
        """
        if not self.started():
            raise ValidatorNotRunningError()

        if self._process is not None:
            self._kill_owned_process()
            return True

        if not kill_external:
            logger.warning(
                "Refusing to kill process that was not created by this runner (%s). Please kill via `%s stop`",
                self._pid,
                self._settings.executable,
            )
            return False

        run_stop_command(self._settings)
        wait_until_ports_closed(self._settings, policy=self._poll_policy)
        self._pid = None
        return True

    @staticmethod
    def _discard_unready_process(process: Any) -> None:
        logger.error("Validator did not become ready; killing process %s", process.pid)
        try:
            terminate_owned_process(process)
        except ValidatorKillError:
            logger.exception("Failed to kill unready validator process %s", process.pid)

    def _kill_owned_process(self) -> None:
        try:
            self._client.request_kill_validator()
        except CONTROL_REQUEST_ERRORS as exc:
            raise RuntimeError("control channel failed to kill the validator") from exc

        terminate_owned_process(self._process)
        self._process = None
        self._pid = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self.state.value}, pid={self._pid})"


__all__ = ["SupervisionState", "ValidatorProcess"]
