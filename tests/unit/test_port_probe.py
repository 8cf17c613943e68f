import socket

import pytest

from validator_harness import port_probe
from validator_harness.polling import BUSY_POLL


@pytest.fixture
def listening_port():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    try:
        yield server.getsockname()[1]
    finally:
        server.close()


@pytest.fixture
def closed_port():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


def test_scan_port_detects_listener(listening_port):
    assert port_probe.scan_port(listening_port, "127.0.0.1", timeout=1.0) is True


def test_scan_port_reports_closed_port(closed_port):
    assert port_probe.scan_port(closed_port, "127.0.0.1", timeout=1.0) is False


def test_scan_port_uses_settings_host(monkeypatch, listening_port):
    monkeypatch.setenv("VALIDATOR_HOST", "127.0.0.1")

    assert port_probe.scan_port(listening_port) is True


def test_wait_for_port_returns_once_open(monkeypatch):
    answers = iter([False, False, True])
    monkeypatch.setattr(port_probe, "scan_port", lambda port, host=None, **_: next(answers))

    port_probe.wait_for_port(8899, policy=BUSY_POLL)


def test_wait_for_port_free_returns_once_closed(monkeypatch):
    answers = iter([True, True, False])
    monkeypatch.setattr(port_probe, "scan_port", lambda port, host=None, **_: next(answers))

    port_probe.wait_for_port_free(8899, policy=BUSY_POLL)


def test_wait_for_ports_checks_every_port(monkeypatch):
    scanned = []

    def fake_scan(port, host=None, **_):
        scanned.append((port, host))
        return True

    monkeypatch.setattr(port_probe, "scan_port", fake_scan)

    port_probe.wait_for_ports((8899, 8900), "127.0.0.1", policy=BUSY_POLL)

    assert scanned == [(8899, "127.0.0.1"), (8900, "127.0.0.1")]


def test_wait_for_ports_free_against_real_sockets(closed_port):
    port_probe.wait_for_ports_free((closed_port,), "127.0.0.1", policy=BUSY_POLL)
