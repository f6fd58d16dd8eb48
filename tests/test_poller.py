"""
Tests for the blocking deploy poller.
"""

from unittest.mock import Mock

import pytest

from metalcloud_cli.core import BlockingPoller
from metalcloud_cli.exceptions import TransportError, ValidationError
from metalcloud_cli.models import DeployOutcome, ResourceStatus


def statuses(*values):
    return Mock(side_effect=[ResourceStatus(v) for v in values])


class TestBlockingPoller:
    def test_immediate_success_does_not_sleep(self, clock):
        fetch = statuses("finished")

        result = BlockingPoller(fetch, 10, 1, clock=clock).wait()

        assert result.outcome == DeployOutcome.SUCCEEDED
        assert result.polls == 1
        assert clock.sleeps == []
        assert result.elapsed_seconds == 0

    def test_ongoing_then_finished_fetches_twice(self, clock):
        fetch = statuses("ongoing", "finished")

        result = BlockingPoller(fetch, 3, 1, clock=clock).wait()

        assert result.outcome == DeployOutcome.SUCCEEDED
        assert fetch.call_count == 2
        assert clock.sleeps == [1]

    def test_never_terminal_times_out_after_several_checks(self, clock):
        fetch = Mock(return_value=ResourceStatus("ongoing"))

        result = BlockingPoller(fetch, 2, 1, clock=clock).wait()

        assert result.outcome == DeployOutcome.TIMED_OUT
        assert fetch.call_count == 3
        assert result.polls == 3
        assert clock.sleeps == [1, 1, 1]
        assert result.elapsed_seconds > 2

    def test_timeout_checked_after_sleep_before_next_fetch(self, clock):
        fetch = statuses("ongoing", "ongoing", "ongoing", "finished")

        result = BlockingPoller(fetch, 2, 1, clock=clock).wait()

        assert result.outcome == DeployOutcome.TIMED_OUT
        assert fetch.call_count == 3

    def test_timeout_shorter_than_interval_times_out_after_first_sleep(self, clock):
        fetch = Mock(return_value=ResourceStatus("ongoing"))

        result = BlockingPoller(fetch, 1, 5, clock=clock).wait()

        assert result.outcome == DeployOutcome.TIMED_OUT
        assert fetch.call_count == 1
        assert clock.sleeps == [5]

    @pytest.mark.parametrize("status", ["error", "failed"])
    def test_failure_status(self, clock, status):
        fetch = Mock(return_value=ResourceStatus(status, "disk controller offline"))

        result = BlockingPoller(fetch, 10, 1, clock=clock).wait()

        assert result.outcome == DeployOutcome.FAILED
        assert result.reason == f"{status}: disk controller offline"
        assert clock.sleeps == []

    def test_transport_error_propagates(self, clock):
        fetch = Mock(
            side_effect=[ResourceStatus("ongoing"), TransportError("connection reset")]
        )
        poller = BlockingPoller(fetch, 10, 1, clock=clock)

        with pytest.raises(TransportError):
            poller.wait()
        assert fetch.call_count == 2

    @pytest.mark.parametrize("timeout,interval", [(0, 1), (-5, 1), (10, 0), (10, -1)])
    def test_non_positive_parameters_rejected(self, clock, timeout, interval):
        fetch = Mock()

        with pytest.raises(ValidationError):
            BlockingPoller(fetch, timeout, interval, clock=clock)
        fetch.assert_not_called()

    def test_each_poll_is_logged(self, clock):
        fetch = statuses("ongoing", "finished")
        logger = Mock()

        BlockingPoller(fetch, 10, 1, clock=clock, logger=logger).wait()

        levels = [c.args[1] for c in logger.log.call_args_list]
        assert levels == ["DEBUG", "DEBUG"]
