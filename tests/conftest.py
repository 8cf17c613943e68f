"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from types import SimpleNamespace
from typing import List

import pytest

from tests.helpers.fake_validator import (
    FakeControlClient,
    FakePopen,
    FakeValidatorWorld,
    make_fixture_paths,
    make_settings,
)
from validator_harness import port_probe, process_supervisor
from validator_harness.config import harness, runtime

_HARNESS_ENV_PREFIXES = ("VALIDATOR_", "HARNESS_")
_HARNESS_ENV_NAMES = ("DUMP_AMMAN", "LOG_APPEND")


@pytest.fixture(autouse=True)
def _isolated_configuration(monkeypatch):
    """Keep developer .env files and exported variables out of the tests."""
    for name in list(os.environ):
        if name.startswith(_HARNESS_ENV_PREFIXES) or name in _HARNESS_ENV_NAMES:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(runtime, "_DEFAULT_VALUES", {})
    harness.get_harness_settings.cache_clear()
    yield
    harness.get_harness_settings.cache_clear()


@pytest.fixture
def world() -> FakeValidatorWorld:
    return FakeValidatorWorld()


@pytest.fixture
def client(world) -> FakeControlClient:
    return FakeControlClient(world)


@pytest.fixture
def fixture_paths(tmp_path):
    return make_fixture_paths(tmp_path / "fixtures")


@pytest.fixture
def settings(fixture_paths):
    return make_settings(fixture_paths.root)


@pytest.fixture
def launcher(monkeypatch, world):
    """Patch spawning, stopping and port scans so they act on the fake world."""
    record = SimpleNamespace(commands=[], processes=[], stop_calls=0)
    spawned: List[FakePopen] = record.processes

    def fake_spawn(command):
        record.commands.append(command)
        world.boot()
        process = FakePopen(command.args, pid=9000 + len(spawned))
        spawned.append(process)
        return process

    def fake_stop(settings):
        record.stop_calls += 1
        world.shut_down()
        return 0

    def fake_scan(port, host=None, *, timeout=None):
        return world.scan(port)

    monkeypatch.setattr(process_supervisor, "spawn_process", fake_spawn)
    monkeypatch.setattr(process_supervisor, "run_stop_command", fake_stop)
    monkeypatch.setattr(port_probe, "scan_port", fake_scan)
    return record
