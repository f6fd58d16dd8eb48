"""
MetalCloud CLI Exception Hierarchy

Every error kind carries a stable message and its own exit code so scripts
wrapping the CLI can branch on the outcome.
"""

from typing import Optional


class MetalCloudError(Exception):
    """Base exception for all MetalCloud CLI errors."""

    exit_code = 1

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(MetalCloudError):
    """Raised when configuration is invalid or missing."""

    exit_code = 2


class ValidationError(MetalCloudError):
    """Raised when a flag or argument is invalid, before any remote call."""

    exit_code = 2


class NotConfirmedError(MetalCloudError):
    """Raised when the operator did not confirm a destructive operation."""

    exit_code = 3

    def __init__(self, context: Optional[str] = None):
        super().__init__("Operation not confirmed. Aborting", context)


class TransportError(MetalCloudError):
    """Raised when communicating with the MetalCloud API fails."""

    exit_code = 4

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        context: Optional[str] = None,
    ):
        self.status_code = status_code
        super().__init__(message, context)


class InfrastructureNotFoundError(MetalCloudError):
    """Raised when an infrastructure id or label does not resolve."""

    def __init__(self, infrastructure_id_or_label: str):
        self.infrastructure_id_or_label = infrastructure_id_or_label
        super().__init__(f"infrastructure '{infrastructure_id_or_label}' not found")


class DeployFailedError(MetalCloudError):
    """Raised when the API reports a terminal failure status for a deploy."""

    exit_code = 5

    def __init__(self, infrastructure_id: int, reason: str):
        self.infrastructure_id = infrastructure_id
        self.reason = reason
        super().__init__(
            f"Deploy of infrastructure {infrastructure_id} failed: {reason}"
        )


class DeployTimeoutError(MetalCloudError):
    """Raised when waiting for a deploy gave up before a terminal status."""

    exit_code = 6

    def __init__(self, infrastructure_id: int, timeout_seconds: int):
        self.infrastructure_id = infrastructure_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Timeout after {timeout_seconds} seconds while waiting for "
            f"infrastructure {infrastructure_id} to be deployed",
            context="The deploy may still be running on the server",
        )
