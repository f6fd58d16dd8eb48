"""
Tests for shutdown policy resolution.
"""

import pytest

from metalcloud_cli.core import resolve_shutdown_policy
from metalcloud_cli.exceptions import ValidationError


class TestResolveShutdownPolicy:
    @pytest.mark.parametrize("attempt_soft", [True, False])
    @pytest.mark.parametrize("attempt_hard", [True, False])
    def test_force_never_attempts_soft_shutdown(self, attempt_soft, attempt_hard):
        policy = resolve_shutdown_policy(attempt_soft, attempt_hard, 180, force=True)

        assert policy.forced is True
        assert policy.attempt_soft is False
        assert policy.hard_after_timeout == attempt_hard

    @pytest.mark.parametrize(
        "attempt_soft,attempt_hard",
        [(True, True), (True, False), (False, True), (False, False)],
    )
    def test_flags_taken_verbatim_without_force(self, attempt_soft, attempt_hard):
        policy = resolve_shutdown_policy(attempt_soft, attempt_hard, 60)

        assert policy.forced is False
        assert policy.attempt_soft == attempt_soft
        assert policy.hard_after_timeout == attempt_hard
        assert policy.soft_timeout_seconds == 60

    def test_zero_timeout_is_allowed(self):
        assert resolve_shutdown_policy(True, True, 0).soft_timeout_seconds == 0

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValidationError):
            resolve_shutdown_policy(True, True, -1)

    def test_api_payload(self):
        policy = resolve_shutdown_policy(True, False, 120, force=True)

        assert policy.to_api() == {
            "attemptSoftShutdown": False,
            "attemptHardShutdown": False,
            "softShutdownTimeout": 120,
            "forceShutdown": True,
        }
