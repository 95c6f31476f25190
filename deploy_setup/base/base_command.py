"""
Base Command Class

Abstract base for all deploy-setup commands.
Provides logging, headers and exit-code mapping.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from rich.console import Console

from deploy_setup.exceptions import DeploySetupError
from deploy_setup.logger import DeployLogger
from deploy_setup.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization (or reuse of a parent command's logger)
    - Header display
    - Error handling with consistent exit codes
    """

    def __init__(
        self,
        project_dir: Union[str, Path] = ".",
        verbose: bool = False,
        logger: Optional[DeployLogger] = None,
        console: Optional[Console] = None,
    ):
        self.project_dir = Path(project_dir).resolve()
        self.verbose = verbose
        self.console = console or Console()
        self.logger = logger
        # Steps of `all` share the parent's logger and skip their own headers
        self.embedded = logger is not None
        self._owns_logger = False

    def init_logger(self, project_name: str, command_name: str) -> DeployLogger:
        """
        Initialize command logger unless one was handed in.

        Args:
            project_name: Project name
            command_name: Command name
        """
        if self.logger is None:
            self.logger = DeployLogger(project_name, command_name, verbose=self.verbose)
            self._owns_logger = True
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        project: Optional[str] = None,
        details: Optional[Dict[str, str]] = None,
    ) -> None:
        """Show command header (skip in verbose or embedded mode)."""
        if not self.verbose and not self.embedded:
            show_header(
                title=title,
                subtitle=subtitle,
                project=project,
                details=details,
                console=self.console,
            )

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def handle_error(self, message: str, context: Optional[str] = None) -> None:
        """Report an error through the logger when there is one."""
        if self.logger:
            self.logger.log_error(message, context=context)
        else:
            self.console.print(f"\n[bold red]✗ {message}[/bold red]")
            if context:
                self.console.print(f"  [color(208)]{context}[/color(208)]")

    def _fail(self, message: str, context: Optional[str] = None) -> None:
        self.handle_error(message, context)
        if self.logger:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")
        raise SystemExit(1)

    @abstractmethod
    def execute(self, **kwargs) -> Any:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """

    def run(self, **kwargs) -> Any:
        """
        Run command with error handling.

        Exit status: 130 on Ctrl-C, 1 on any reported error.
        """
        try:
            return self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log("Cancelled by user", "WARNING")
                self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")
            raise SystemExit(130)
        except SystemExit:
            raise
        except DeploySetupError as e:
            self._fail(e.message, e.context)
        except FileNotFoundError as e:
            self._fail(f"File not found: {e}")
        except PermissionError as e:
            self._fail(f"Permission denied: {e}", "Try running with appropriate permissions")
        except yaml.YAMLError as e:
            self._fail(f"Invalid YAML: {e}")
        except ValueError as e:
            # json.JSONDecodeError lands here too
            self._fail(f"Invalid value: {e}")
        except Exception as e:
            self._fail(f"{type(e).__name__}: {e}")
        finally:
            if self._owns_logger and self.logger:
                self.logger.close()
