#!/usr/bin/env python3
"""MetalCloud CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console
from rich.markup import escape

# Rich-Click: CLI help with colors
import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

# COMMANDS / OPTIONS
click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"

# HEADERS / HELP TEXT
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_HELPTEXT = ""
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_REQUIRED_SHORT = "bold red"
click.rich_click.STYLE_REQUIRED_LONG = "bold red"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"
click.rich_click.ERRORS_EPILOGUE = ""

from metalcloud_cli import __version__
from metalcloud_cli.commands.infrastructure import (
    infrastructure_list,
    infrastructure_get,
    infrastructure_create,
    infrastructure_update,
    infrastructure_delete,
    infrastructure_deploy,
    infrastructure_revert,
)
from metalcloud_cli.constants import OUTPUT_FORMATS
from metalcloud_cli.exceptions import MetalCloudError
from metalcloud_cli.services import ConfigService

console = Console(stderr=True)


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


class AliasedGroup(click.RichGroup):
    """Click group that resolves command aliases like 'ls' or 'infra'"""

    aliases = {}

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        target = self.aliases.get(cmd_name)
        if target is None:
            return None
        return super().get_command(ctx, target)

    def resolve_command(self, ctx, args):
        # Report the canonical name so help and errors are consistent
        _, command, args = super().resolve_command(ctx, args)
        return command.name if command else None, command, args


class RootGroup(AliasedGroup):
    aliases = {"infra": "infrastructure"}


class InfrastructureGroup(AliasedGroup):
    aliases = {
        "ls": "list",
        "show": "get",
        "new": "create",
        "edit": "update",
        "rm": "delete",
        "apply": "deploy",
        "undo": "revert",
    }


@click.group(cls=RootGroup)
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: ~/.metalcloud/config.yaml).",
)
@click.option("--endpoint", default=None, help="MetalCloud API endpoint URL.")
@click.option("--api-key", default=None, help="MetalCloud API key.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format.",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, config_path, endpoint, api_key, output_format, verbose) -> None:
    """
    MetalCloud CLI - Manage bare-metal infrastructures.

    \b
    Examples:
      metalcloud infrastructure list
      metalcloud infra get prod-cluster --format json
      metalcloud infra deploy prod-cluster --block-until-deployed
      metalcloud infra revert prod-cluster --autoconfirm
    """
    obj = ctx.ensure_object(dict)
    if "config" in obj:
        return

    interactive = obj.get("interactive")
    if interactive is None:
        interactive = sys.stdin.isatty()

    try:
        obj["config"] = ConfigService(config_path=config_path).load(
            overrides={
                "endpoint": endpoint,
                "api_key": api_key,
                "format": output_format,
            },
            verbose=verbose,
            interactive=interactive,
        )
    except MetalCloudError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {escape(e.message)}")
        if e.context:
            console.print(f"  [color(208)]{escape(e.context)}[/color(208)]")
        ctx.exit(e.exit_code)


@cli.group(name="infrastructure", cls=InfrastructureGroup)
def infrastructure():
    """Infrastructure management commands."""


infrastructure.add_command(infrastructure_list)
infrastructure.add_command(infrastructure_get)
infrastructure.add_command(infrastructure_create)
infrastructure.add_command(infrastructure_update)
infrastructure.add_command(infrastructure_delete)
infrastructure.add_command(infrastructure_deploy)
infrastructure.add_command(infrastructure_revert)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
