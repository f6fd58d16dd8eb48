"""
Configuration Service

Builds the immutable CLIConfig for one invocation from the config file,
a local .env file, environment variables and global CLI flags.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

from metalcloud_cli.constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_LOG_DIR,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_VERIFY_SSL,
    ENV_PREFIX,
    OUTPUT_FORMATS,
)
from metalcloud_cli.exceptions import ConfigurationError
from metalcloud_cli.models.config import CLIConfig

# config key -> environment variable suffix
CONFIG_KEYS = {
    "endpoint": "ENDPOINT",
    "api_key": "API_KEY",
    "format": "FORMAT",
    "verify_ssl": "VERIFY_SSL",
    "request_timeout": "REQUEST_TIMEOUT",
    "log_dir": "LOG_DIR",
}

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigService:
    """
    Configuration loading service.

    Precedence, lowest to highest:
    - built-in defaults
    - YAML config file
    - .env file in the working directory
    - process environment (METALCLOUD_*)
    - explicit overrides (CLI flags)
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.cwd = cwd or Path.cwd()
        self.config_path = self._resolve_config_path(config_path)

    def _resolve_config_path(self, config_path: Optional[Path]) -> Path:
        if config_path:
            return Path(config_path).expanduser()
        env_path = self.environ.get(f"{ENV_PREFIX}CONFIG")
        if env_path:
            return Path(env_path).expanduser()
        return Path(DEFAULT_CONFIG_FILE).expanduser()

    def load_file(self) -> Dict[str, Any]:
        """
        Load the YAML config file.

        Returns:
            Config dict (empty if the file does not exist)

        Raises:
            ConfigurationError: If the file cannot be parsed
        """
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Cannot read config file {self.config_path}",
                context=str(e),
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {self.config_path} must contain a mapping",
            )

        return {k: v for k, v in data.items() if k in CONFIG_KEYS}

    def load_env(self) -> Dict[str, Any]:
        """Collect METALCLOUD_* values from .env, then the process environment."""
        values: Dict[str, Any] = {}

        env_file = self.cwd / ".env"
        sources = []
        if env_file.exists():
            sources.append(dotenv_values(env_file))
        sources.append(self.environ)

        for source in sources:
            for key, suffix in CONFIG_KEYS.items():
                value = source.get(f"{ENV_PREFIX}{suffix}")
                if value not in (None, ""):
                    values[key] = value

        return values

    def load(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        verbose: bool = False,
        interactive: bool = True,
    ) -> CLIConfig:
        """
        Build the CLIConfig.

        Args:
            overrides: Values from CLI flags (None values are ignored)
            verbose: --verbose
            interactive: Whether prompts may be shown

        Returns:
            CLIConfig

        Raises:
            ConfigurationError: If a value is invalid
        """
        merged: Dict[str, Any] = {}
        merged.update(self.load_file())
        merged.update(self.load_env())
        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        output_format = str(merged.get("format", DEFAULT_OUTPUT_FORMAT)).lower()
        if output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unsupported output format '{output_format}'",
                context=f"Supported formats: {', '.join(OUTPUT_FORMATS)}",
            )

        return CLIConfig(
            endpoint=merged.get("endpoint"),
            api_key=merged.get("api_key"),
            output_format=output_format,
            verify_ssl=_parse_bool(
                merged.get("verify_ssl", DEFAULT_VERIFY_SSL), "verify_ssl"
            ),
            request_timeout=_parse_int(
                merged.get("request_timeout", DEFAULT_REQUEST_TIMEOUT),
                "request_timeout",
            ),
            log_dir=Path(str(merged.get("log_dir", DEFAULT_LOG_DIR))).expanduser(),
            verbose=verbose,
            interactive=interactive,
        )


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for '{key}': {value}")


def _parse_int(value: Any, key: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid integer for '{key}': {value}")
    if number <= 0:
        raise ConfigurationError(f"'{key}' must be positive, got {number}")
    return number
