#!/usr/bin/env python3
"""deploy-setup CLI - Main entry point"""

import functools
import os
import sys

import rich_click as click
from click.exceptions import ClickException, UsageError
from rich.console import Console

from deploy_setup import __version__
from deploy_setup.commands.check_dns import check_dns
from deploy_setup.commands.deploy_all import deploy_all
from deploy_setup.commands.init import init
from deploy_setup.commands.setup_secrets import setup_secrets
from deploy_setup.commands.setup_server import setup_server

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e.format_message()}\n")
            if e.ctx and e.ctx.command:
                console.print(
                    f"[dim]Run[/dim] [cyan]deploy-setup {e.ctx.command.name} --help[/cyan] [dim]for usage information[/dim]\n"
                )
            sys.exit(1)
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


@click.group()
@click.version_option(version=__version__, prog_name="deploy-setup")
def cli() -> None:
    """
    deploy-setup - git push to deploy on your own Linux VPS.

    \b
    Quick Start:
      deploy-setup all              # Everything below in one go
      deploy-setup init             # Generate Dockerfile, compose, workflow
      deploy-setup setup-secrets    # Store secrets with gh
      deploy-setup setup-server     # Prepare the server over SSH
      deploy-setup check-dns        # Verify the domain
    """


cli.add_command(deploy_all)
cli.add_command(init)
cli.add_command(check_dns)
cli.add_command(setup_server)
cli.add_command(setup_secrets)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli(standalone_mode=False)


if __name__ == "__main__":
    main()
