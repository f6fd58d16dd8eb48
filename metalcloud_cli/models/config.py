"""
Configuration Models

Immutable per-invocation configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from metalcloud_cli.constants import (
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_VERIFY_SSL,
    DEFAULT_LOG_DIR,
)


@dataclass(frozen=True)
class CLIConfig:
    """Resolved CLI configuration, built once per invocation."""

    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    output_format: str = DEFAULT_OUTPUT_FORMAT
    verify_ssl: bool = DEFAULT_VERIFY_SSL
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    log_dir: Path = Path(DEFAULT_LOG_DIR).expanduser()
    verbose: bool = False
    interactive: bool = True

    @property
    def user_id(self) -> Optional[str]:
        """User id encoded as the API key prefix (`<user_id>:<secret>`)."""
        if not self.api_key or ":" not in self.api_key:
            return None
        return self.api_key.split(":", 1)[0]

    def __repr__(self) -> str:
        return (
            f"CLIConfig(endpoint={self.endpoint}, format={self.output_format}, "
            f"interactive={self.interactive})"
        )
