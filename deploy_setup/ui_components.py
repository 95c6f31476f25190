"""
deploy-setup - UI Components

Standardized headers and closing blocks for every command.
"""

from typing import Dict, Optional

from rich.console import Console

LOGO = "deploy-setup"

BRAND_COLOR = "cyan"


def _prefix() -> str:
    return f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    project: Optional[str] = None,
    details: Optional[Dict[str, str]] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized command header.

    Example:
        show_header(
            title="Setup Server",
            project="shop-api",
            details={"Server": "root@203.0.113.10"}
        )
    """
    if console is None:
        console = Console()

    console.print(f"{_prefix()} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{_prefix()} [dim]{subtitle}[/dim]")

    if project:
        console.print(f"{_prefix()} Project: [cyan]{project}[/cyan]")

    if details:
        for key, value in details.items():
            console.print(f"{_prefix()} {key}: [cyan]{value}[/cyan]")

    console.print()


def show_section(title: str, console: Console) -> None:
    console.print(f"\n[bold cyan]━━━ {title} ━━━[/bold cyan]\n")

