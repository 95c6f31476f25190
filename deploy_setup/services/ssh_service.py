"""SSH service for running the server init script on a remote host."""

import subprocess
import time
from pathlib import Path
from typing import List, Optional

from deploy_setup.exceptions import SSHError
from deploy_setup.models.project import ServerConfig
from deploy_setup.models.results import SSHResult

# ssh reserves 255 for its own failures (connect, auth, host key)
SSH_CONNECTION_FAILED = 255


class SSHService:
    """Service for SSH operations."""

    def __init__(self, server: ServerConfig):
        """
        Initialize SSH service.

        Args:
            server: Server the session connects to
        """
        self.server = server

    @property
    def key_path(self) -> Optional[Path]:
        """Resolved private key, or None when it does not exist (password auth)."""
        if not self.server.ssh_key_path:
            return None
        path = Path(self.server.ssh_key_path).expanduser()
        return path if path.is_file() else None

    @property
    def target(self) -> str:
        return f"{self.server.user}@{self.server.host}"

    def build_command(self) -> List[str]:
        ssh_cmd = ["ssh"]
        if self.key_path:
            ssh_cmd.extend(["-i", str(self.key_path)])
        ssh_cmd.extend(
            [
                "-o",
                "StrictHostKeyChecking=accept-new",
                self.target,
                "bash",
                "-s",
            ]
        )
        return ssh_cmd

    def run_script(self, script: str) -> SSHResult:
        """
        Stream a shell script to ``bash -s`` on the server.

        Remote output goes straight to the terminal; without a key file ssh
        falls back to its own password prompt.

        Raises:
            SSHError: If ssh cannot connect or the script exits non-zero
        """
        start_time = time.time()
        try:
            result = subprocess.run(self.build_command(), input=script, text=True)
        except FileNotFoundError:
            raise SSHError("ssh client not found", context="Install OpenSSH and retry")
        duration = time.time() - start_time

        if result.returncode == SSH_CONNECTION_FAILED:
            raise SSHError(
                f"Could not connect to {self.target}",
                context="Check the host, user and SSH key",
            )
        if result.returncode != 0:
            raise SSHError(
                f"Init script failed on {self.server.host} (exit code {result.returncode})"
            )

        return SSHResult(
            returncode=result.returncode,
            host=self.server.host,
            user=self.server.user,
            duration_seconds=duration,
        )
