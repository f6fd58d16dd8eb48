"""
API Command Base Class

Base class for commands that talk to the MetalCloud API.
Provides lazy client construction and confirmation guards.
"""

from typing import Callable, Optional

from rich.console import Console

from .base_command import BaseCommand
from metalcloud_cli.core.confirmation import ConfirmationGuard
from metalcloud_cli.models.config import CLIConfig
from metalcloud_cli.services import MetalCloudClient


class ApiCommand(BaseCommand):
    """
    Base class for API-backed commands.

    Provides:
    - Lazy API client creation (configuration checked on first use)
    - Confirmation guards bound to the invocation's interactivity
    """

    def __init__(
        self,
        config: CLIConfig,
        client_factory: Optional[Callable[[CLIConfig], object]] = None,
        console: Optional[Console] = None,
    ):
        super().__init__(config, console=console)
        self.client_factory = client_factory or MetalCloudClient.from_config
        self._client = None

    def ensure_client(self):
        """
        Ensure the API client is initialized.

        Raises:
            ConfigurationError: If endpoint or API key are missing
        """
        if self._client is None:
            self._client = self.client_factory(self.config)
        return self._client

    def make_guard(self, autoconfirm: bool) -> ConfirmationGuard:
        return ConfirmationGuard(
            autoconfirm=autoconfirm,
            interactive=self.config.interactive,
            console=self.console,
        )
