from __future__ import annotations

from typing import Callable, Protocol


class ControlClient(Protocol):
    """Minimal contract for the request/response control channel.

    Implementations handle their own internal concurrency; one instance is
    shared by every supervisor clone. Request failures should raise
    ``validator_harness.exceptions.ControlClientError`` (``OSError`` and
    ``TimeoutError`` are tolerated as well).
    """

    def request_validator_pid(self) -> int: ...

    def request_kill_validator(self) -> None: ...


ControlClientFactory = Callable[[], ControlClient]
