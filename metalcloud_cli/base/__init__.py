"""
MetalCloud CLI Base Command Classes

Abstract base classes for consistent command structure.
"""

from .base_command import BaseCommand
from .api_command import ApiCommand

__all__ = [
    "BaseCommand",
    "ApiCommand",
]
