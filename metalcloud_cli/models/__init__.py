"""
MetalCloud CLI Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .config import CLIConfig
from .infrastructure import (
    BlockingOptions,
    DeployOutcome,
    DeployRequest,
    Infrastructure,
    ResourceStatus,
    ShutdownPolicy,
)

__all__ = [
    # Config
    "CLIConfig",
    # Infrastructure
    "BlockingOptions",
    "DeployOutcome",
    "DeployRequest",
    "Infrastructure",
    "ResourceStatus",
    "ShutdownPolicy",
]
