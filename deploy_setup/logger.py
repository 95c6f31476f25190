"""
Logging system for deploy-setup
Writes every run to a log file with clean console output
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console

from deploy_setup.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT, get_home_dir

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class DeployLogger:
    """
    Manages logging for one command run
    - Writes all output to a log file in real-time
    - Shows compact step/success/warning lines in console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        project_name: str,
        operation: str,
        verbose: bool = False,
        logs_dir: Optional[Path] = None,
    ):
        """
        Initialize logger

        Args:
            project_name: Name of project
            operation: Operation name (e.g., 'init', 'setup-server')
            verbose: If True, mirror log lines to the console
            logs_dir: Root logs directory (default: <home>/logs)
        """
        self.project_name = project_name
        self.operation = operation
        self.verbose = verbose
        self.log_file: Optional[TextIO] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: logs/{project}/{date}/{time}_{operation}.log
        now = datetime.now()
        root = logs_dir or (get_home_dir() / "logs")
        project_logs_dir = root / project_name / now.strftime(LOG_DATE_FORMAT)
        project_logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = project_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"
        self.log_file = open(self.log_path, "w", buffering=1, encoding="utf-8")

        self._write_log_header()

    def _write_log_header(self):
        header = f"""
{"=" * 80}
deploy-setup Log
{"=" * 80}
Project: {self.project_name}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")

        if self.log_file:
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")
            self.log_file.flush()

        if self.verbose:
            if level == "ERROR":
                console.print(f"[red]{message}[/red]")
            elif level == "WARNING":
                console.print(f"[yellow]{message}[/yellow]")
            elif level == "DEBUG":
                console.print(f"[dim]{message}[/dim]")
            else:
                console.print(message)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output. Always written to the file, ANSI codes stripped.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output or not self.log_file:
            return

        for line in ANSI_ESCAPE.sub("", output).splitlines():
            self.log_file.write(f"  [{stream}] {line}\n")
        self.log_file.flush()

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"
        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if not self.verbose:
            console.print()

        console.print(f"[bold red]✗ {error}[/bold red]")
        if context:
            console.print(f"  [color(208)]{context}[/color(208)]")

    def step(self, step_name: str):
        """Start a new step"""
        if self.current_step and not self.verbose:
            console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            console.print(f"[color(214)]▶[/color(214)] [white]{step_name}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            console.print(f"  [dim]✓ {message}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            console.print(f"  [yellow]⚠[/yellow] [dim]{message}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        if exc_type is not None and exc_type is not SystemExit:
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=exc_type.__name__,
            )
        self.close()
        return False
