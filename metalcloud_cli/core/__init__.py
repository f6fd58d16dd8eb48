"""Core deploy orchestration components"""

from .shutdown import resolve_shutdown_policy
from .confirmation import (
    ConfirmationGuard,
    deploy_message,
    delete_message,
    revert_message,
)
from .poller import BlockingPoller, Clock, PollResult, validate_blocking_parameters

__all__ = [
    "resolve_shutdown_policy",
    "ConfirmationGuard",
    "deploy_message",
    "delete_message",
    "revert_message",
    "BlockingPoller",
    "Clock",
    "PollResult",
    "validate_blocking_parameters",
]
