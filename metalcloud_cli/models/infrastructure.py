"""
Infrastructure Models

Dataclass models for infrastructures, deploy requests and deploy outcomes.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum

from metalcloud_cli.constants import (
    DEPLOY_SUCCESS_STATUSES,
    DEPLOY_FAILURE_STATUSES,
)


class DeployOutcome(Enum):
    """Terminal result of a deploy invocation."""

    DISPATCHED = "dispatched"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ShutdownPolicy:
    """How running servers are powered down before a deploy."""

    attempt_soft: bool
    soft_timeout_seconds: int
    hard_after_timeout: bool
    forced: bool = False

    def to_api(self) -> Dict[str, Any]:
        """Convert to the API `shutdownOptions` body."""
        return {
            "attemptSoftShutdown": self.attempt_soft,
            "attemptHardShutdown": self.hard_after_timeout,
            "softShutdownTimeout": self.soft_timeout_seconds,
            "forceShutdown": self.forced,
        }


@dataclass(frozen=True)
class DeployRequest:
    """A deploy of one infrastructure, as requested on the command line."""

    infrastructure: str
    shutdown_policy: ShutdownPolicy
    allow_data_loss: bool = False
    confirmed: bool = False


@dataclass(frozen=True)
class BlockingOptions:
    """Whether and how long to wait for a dispatched deploy."""

    block_until_deployed: bool = False
    timeout_seconds: int = 0
    check_interval_seconds: int = 0


@dataclass(frozen=True)
class ResourceStatus:
    """Deploy status snapshot fetched on each poll."""

    deploy_status: str
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.deploy_status in DEPLOY_SUCCESS_STATUSES

    @property
    def is_failure(self) -> bool:
        return self.deploy_status in DEPLOY_FAILURE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.is_success or self.is_failure

    @property
    def reason(self) -> str:
        """Human-readable failure reason."""
        if self.message:
            return f"{self.deploy_status}: {self.message}"
        return f"deploy status '{self.deploy_status}'"


@dataclass
class Infrastructure:
    """An infrastructure as returned by the API."""

    id: int
    label: str
    site_id: Optional[int] = None
    service_status: Optional[str] = None
    user_id_owner: Optional[int] = None
    revision: Optional[int] = None
    deploy_status: Optional[str] = None
    deploy_message: Optional[str] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Infrastructure":
        """Create from an API payload."""
        config = data.get("config") or {}
        return cls(
            id=int(data.get("id", 0)),
            label=data.get("label", ""),
            site_id=data.get("siteId"),
            service_status=data.get("serviceStatus"),
            user_id_owner=data.get("userIdOwner"),
            revision=config.get("revision"),
            deploy_status=config.get("deployStatus"),
            deploy_message=config.get("deployStatusMessage"),
            created=data.get("createdTimestamp"),
            updated=data.get("updatedTimestamp"),
            raw=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "label": self.label,
            "siteId": self.site_id,
            "serviceStatus": self.service_status,
            "userIdOwner": self.user_id_owner,
            "revision": self.revision,
            "deployStatus": self.deploy_status,
            "createdTimestamp": self.created,
            "updatedTimestamp": self.updated,
        }

    def __repr__(self) -> str:
        return f"Infrastructure(id={self.id}, label={self.label}, status={self.service_status})"
