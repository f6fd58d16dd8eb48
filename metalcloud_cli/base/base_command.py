"""
Base Command Class

Abstract base for all MetalCloud CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from typing import Optional
import os
import traceback

import click
from rich.console import Console
from rich.markup import escape

from metalcloud_cli.exceptions import MetalCloudError
from metalcloud_cli.logger import OperationLogger
from metalcloud_cli.models.config import CLIConfig
from metalcloud_cli.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling with per-error exit codes
    - Output emission
    """

    def __init__(self, config: CLIConfig, console: Optional[Console] = None):
        self.config = config
        self.verbose = config.verbose
        self.console = console or Console()
        self.error_console = Console(stderr=True)
        self.logger: Optional[OperationLogger] = None

    @property
    def text_output(self) -> bool:
        return self.config.output_format == "text"

    def init_logger(self, resource: str, operation: str) -> Optional[OperationLogger]:
        """
        Initialize operation logger (skip for machine-readable output).

        Args:
            resource: Infrastructure id or label
            operation: Operation name

        Returns:
            OperationLogger instance or None
        """
        if not self.text_output:
            return None
        self.logger = OperationLogger(
            self.config.log_dir,
            resource,
            operation,
            verbose=self.verbose,
            output=self.console,
        )
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        infrastructure: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose or machine-readable mode)."""
        if not self.verbose and self.text_output:
            show_header(
                title=title,
                subtitle=subtitle,
                infrastructure=infrastructure,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (text output only)."""
        if self.text_output:
            self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_dim(self, message: str) -> None:
        if self.text_output:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def emit(self, output: str) -> None:
        """Write command output to stdout."""
        if output:
            click.echo(output, nl=not output.endswith("\n"))

    def _close_logger(self) -> None:
        if self.logger:
            self.logger.close()
            if not self.verbose:
                self.print_dim(f"Logs saved to: {self.logger.log_path}")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.error_console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log_error("Operation cancelled by user")
            raise SystemExit(130)
        except SystemExit:
            raise
        except MetalCloudError as e:
            self.error_console.print(f"\n[bold red]✗ Error:[/bold red] {escape(e.message)}")
            if e.context:
                self.error_console.print(f"  [color(208)]{escape(e.context)}[/color(208)]")
            if self.logger:
                self.logger.log_error(f"{type(e).__name__}: {e.message}", context=e.context)
            raise SystemExit(e.exit_code)
        except Exception as e:
            error_type = type(e).__name__
            self.error_console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.verbose or os.environ.get("DEBUG"):
                self.error_console.print(traceback.format_exc())
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            raise SystemExit(1)
        finally:
            self._close_logger()
