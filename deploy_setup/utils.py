"""
CLI Utilities

Core utility functions and classes for deploy-setup.
"""

import os
import re
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from deploy_setup.models.results import ExecutionResult


class CommandExecutor:
    """Executes external commands with error handling."""

    @staticmethod
    def run_command(
        cmd: List[str],
        cwd: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
        input_text: Optional[str] = None,
        capture_output: bool = True,
    ) -> ExecutionResult:
        """
        Run a command without a shell.

        Args:
            cmd: Program and arguments
            cwd: Working directory
            env: Extra environment variables
            input_text: Text fed to stdin
            capture_output: Capture stdout/stderr

        Returns:
            ExecutionResult; a missing binary is reported as exit code 127
        """
        command = " ".join(cmd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env={**os.environ, **(env or {})},
                input=input_text,
                capture_output=capture_output,
                text=True,
            )
        except FileNotFoundError as e:
            return ExecutionResult(returncode=127, stderr=str(e), command=command)

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            command=command,
        )


def derive_project_name(project_dir: Path) -> str:
    """Lower-cased directory name with anything outside [a-z0-9-] turned into '-'."""
    return re.sub(r"[^a-z0-9-]", "-", Path(project_dir).resolve().name.lower())

