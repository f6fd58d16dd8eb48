"""
Shutdown policy resolution for infrastructure deploys.
"""

from metalcloud_cli.exceptions import ValidationError
from metalcloud_cli.models.infrastructure import ShutdownPolicy


def resolve_shutdown_policy(
    attempt_soft: bool,
    attempt_hard: bool,
    soft_timeout: int,
    force: bool = False,
) -> ShutdownPolicy:
    """
    Merge the shutdown flags into a single policy.

    `--force-shutdown` wins over the soft shutdown flags: a forced policy never
    attempts a soft shutdown. Without it the flags are taken verbatim.

    Args:
        attempt_soft: --attempt-soft-shutdown
        attempt_hard: --attempt-hard-shutdown
        soft_timeout: --soft-shutdown-timeout, in seconds
        force: --force-shutdown

    Returns:
        ShutdownPolicy

    Raises:
        ValidationError: If the soft shutdown timeout is negative
    """
    if soft_timeout is None or soft_timeout < 0:
        raise ValidationError(
            f"Invalid soft shutdown timeout: {soft_timeout}",
            context="--soft-shutdown-timeout must be zero or a positive number of seconds",
        )

    if force:
        return ShutdownPolicy(
            attempt_soft=False,
            soft_timeout_seconds=soft_timeout,
            hard_after_timeout=attempt_hard,
            forced=True,
        )

    return ShutdownPolicy(
        attempt_soft=attempt_soft,
        soft_timeout_seconds=soft_timeout,
        hard_after_timeout=attempt_hard,
        forced=False,
    )
