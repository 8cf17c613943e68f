"""
Busy-poll primitive shared by every wait loop in the harness.

The default policy retries immediately, forever. Configuring an interval,
a backoff multiplier or a timeout turns the same loops into bounded
exponential-backoff waits that raise ``WaitTimeoutError``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .config import HarnessSettings, get_harness_settings
from .exceptions import WaitTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PollPolicy:
    """How a wait loop spaces its attempts and when it gives up."""

    interval_seconds: float = 0.0
    max_interval_seconds: float = 1.0
    backoff_multiplier: float = 1.0
    timeout_seconds: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: HarnessSettings) -> "PollPolicy":
        return cls(
            interval_seconds=settings.poll_interval_seconds,
            max_interval_seconds=settings.poll_max_interval_seconds,
            backoff_multiplier=settings.poll_backoff_multiplier,
            timeout_seconds=settings.wait_timeout_seconds,
        )

    @property
    def is_busy(self) -> bool:
        return self.interval_seconds <= 0

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number *attempt* (1-based)."""
        if self.is_busy:
            return 0.0
        delay = self.interval_seconds
        if self.backoff_multiplier > 1.0:
            # Stops growing once the cap is reached.
            for _ in range(attempt - 1):
                if delay >= self.max_interval_seconds:
                    break
                delay *= self.backoff_multiplier
        return min(delay, self.max_interval_seconds)


BUSY_POLL = PollPolicy()


def default_policy() -> PollPolicy:
    return PollPolicy.from_settings(get_harness_settings())


def poll_until(
    probe: Callable[[], Optional[T]],
    *,
    description: str,
    policy: Optional[PollPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """
    Call *probe* until it returns something other than ``None``/``False``.

    Args:
        probe: Zero-argument callable; a truthy or non-None result ends the wait
        description: What is being waited for (used in logs and timeout errors)
        policy: Retry spacing and timeout; defaults to the harness settings
        sleep: Sleep function, injectable for tests
        clock: Monotonic clock, injectable for tests

    Returns:
        The first accepted probe result

    Raises:
        WaitTimeoutError: Only when the policy defines a timeout and it elapses
    """
    active_policy = policy if policy is not None else default_policy()
    deadline = None
    if active_policy.timeout_seconds is not None:
        deadline = clock() + active_policy.timeout_seconds

    attempt = 0
    while True:
        result = probe()
        if result is not None and result is not False:
            if attempt:
                logger.debug("Finished waiting for %s after %d retries", description, attempt)
            return result

        attempt += 1
        if deadline is not None and clock() >= deadline:
            raise WaitTimeoutError(description, float(active_policy.timeout_seconds))

        delay = active_policy.delay_for(attempt)
        if delay > 0:
            sleep(delay)


__all__ = ["BUSY_POLL", "PollPolicy", "default_policy", "poll_until"]
