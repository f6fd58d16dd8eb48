"""
MetalCloud CLI - UI Components
Standardized headers and UI elements
"""

from rich.console import Console
from rich.markup import escape

LOGO = "metalcloud"

# Color scheme
BRAND_COLOR = "cyan"
SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"


def show_header(
    title: str,
    subtitle: str = None,
    infrastructure: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Deploy Infrastructure")
        subtitle: Optional subtitle line
        infrastructure: Infrastructure id or label (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy Infrastructure",
            infrastructure="prod-cluster",
            details={"Wait": "until deployed"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{escape(subtitle)}[/dim]")

    if infrastructure:
        console.print(f"{prefix} Infrastructure: [{BRAND_COLOR}]{escape(infrastructure)}[/{BRAND_COLOR}]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [{BRAND_COLOR}]{escape(str(value))}[/{BRAND_COLOR}]")

    console.print()
