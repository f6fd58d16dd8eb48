"""
Blocking poller that waits for a dispatched deploy to finish.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from metalcloud_cli.exceptions import ValidationError
from metalcloud_cli.models.infrastructure import DeployOutcome, ResourceStatus


class Clock:
    """Monotonic clock with a blocking sleep."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


@dataclass
class PollResult:
    """Result of a blocking wait."""

    outcome: DeployOutcome
    polls: int
    elapsed_seconds: float
    last_status: Optional[ResourceStatus] = None

    @property
    def reason(self) -> str:
        if self.last_status is None:
            return ""
        return self.last_status.reason

    def __repr__(self) -> str:
        return f"PollResult(outcome={self.outcome.value}, polls={self.polls}, elapsed={self.elapsed_seconds:.2f}s)"


class BlockingPoller:
    """
    Polls a resource status until it is terminal or the timeout expires.

    The first status fetch happens immediately. The elapsed time is compared
    against the timeout right after each sleep, before the next fetch.

    Transport errors raised by `fetch_status` are not caught here.
    """

    def __init__(
        self,
        fetch_status: Callable[[], ResourceStatus],
        timeout_seconds: int,
        check_interval_seconds: int,
        clock: Optional[Clock] = None,
        logger=None,
    ):
        validate_blocking_parameters(timeout_seconds, check_interval_seconds)
        self.fetch_status = fetch_status
        self.timeout_seconds = timeout_seconds
        self.check_interval_seconds = check_interval_seconds
        self.clock = clock or Clock()
        self.logger = logger

    def wait(self) -> PollResult:
        """
        Block until a terminal status or timeout.

        Returns:
            PollResult with SUCCEEDED, FAILED or TIMED_OUT
        """
        start = self.clock.now()
        polls = 0

        while True:
            status = self.fetch_status()
            polls += 1
            elapsed = self.clock.now() - start

            if self.logger:
                self.logger.log(
                    f"Poll {polls}: deploy status '{status.deploy_status}' "
                    f"after {elapsed:.0f}s",
                    "DEBUG",
                )

            if status.is_success:
                return PollResult(DeployOutcome.SUCCEEDED, polls, elapsed, status)
            if status.is_failure:
                return PollResult(DeployOutcome.FAILED, polls, elapsed, status)

            self.clock.sleep(self.check_interval_seconds)

            elapsed = self.clock.now() - start
            if elapsed > self.timeout_seconds:
                return PollResult(DeployOutcome.TIMED_OUT, polls, elapsed, status)


def validate_blocking_parameters(timeout_seconds: int, check_interval_seconds: int) -> None:
    """
    Raises:
        ValidationError: If the timeout or interval is not positive
    """
    if timeout_seconds is None or timeout_seconds <= 0:
        raise ValidationError(
            f"Invalid block timeout: {timeout_seconds}",
            context="--block-timeout must be a positive number of seconds",
        )
    if check_interval_seconds is None or check_interval_seconds <= 0:
        raise ValidationError(
            f"Invalid block check interval: {check_interval_seconds}",
            context="--block-check-interval must be a positive number of seconds",
        )
