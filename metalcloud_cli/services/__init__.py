"""
MetalCloud CLI Services Layer

Centralized business logic and operations for CLI commands.
"""

from .api_client import MetalCloudClient
from .config_service import ConfigService
from .infrastructure_service import InfrastructureService
from .deploy_service import DeployOrchestrator

__all__ = [
    "MetalCloudClient",
    "ConfigService",
    "InfrastructureService",
    "DeployOrchestrator",
]
