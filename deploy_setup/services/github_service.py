"""GitHub CLI (gh) wrapper: install, auth, secrets and Actions runs."""

import json
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from deploy_setup.exceptions import GitHubCLIError, SecretError
from deploy_setup.models.results import WorkflowRun

LINUX_INSTALL_SCRIPT = (
    "type -p curl >/dev/null || (apt-get update && apt-get install curl -y) && "
    "curl -fsSL https://cli.github.com/packages/githubcli-archive-keyring.gpg"
    " | dd of=/usr/share/keyrings/githubcli-archive-keyring.gpg && "
    "chmod go+r /usr/share/keyrings/githubcli-archive-keyring.gpg && "
    'echo "deb [arch=$(dpkg --print-architecture)'
    " signed-by=/usr/share/keyrings/githubcli-archive-keyring.gpg]"
    ' https://cli.github.com/packages stable main"'
    " | tee /etc/apt/sources.list.d/github-cli.list > /dev/null && "
    "apt-get update && apt-get install gh -y"
)


def install_command(platform: str = sys.platform) -> List[str]:
    """Installer invocation for the given ``sys.platform`` value."""
    if platform == "win32":
        return ["winget", "install", "--id", "GitHub.cli", "-e", "--source", "winget"]
    if platform == "darwin":
        return ["brew", "install", "gh"]
    return ["bash", "-c", LINUX_INSTALL_SCRIPT]


class GitHubCLI:
    """Runs gh inside the project directory so it picks up the repository."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)

    def _run(self, args: List[str], input_text: Optional[str] = None, capture: bool = True):
        return subprocess.run(
            ["gh", *args],
            cwd=self.project_dir,
            input=input_text,
            capture_output=capture,
            text=True,
        )

    def is_installed(self) -> bool:
        try:
            return self._run(["--version"]).returncode == 0
        except FileNotFoundError:
            return False

    def install(self, platform: str = sys.platform) -> bool:
        """Install gh with the platform's package manager. Output goes to the terminal."""
        try:
            result = subprocess.run(install_command(platform))
        except FileNotFoundError:
            return False
        return result.returncode == 0 and self.is_installed()

    def is_authenticated(self) -> bool:
        return self._run(["auth", "status"]).returncode == 0

    def login(self) -> None:
        """
        Interactive ``gh auth login``.

        Raises:
            GitHubCLIError: If login does not complete
        """
        if self._run(["auth", "login"], capture=False).returncode != 0:
            raise GitHubCLIError("gh auth login failed")

    def set_secret(self, name: str, value: str) -> None:
        """
        Store a repository secret; the value is passed on stdin.

        Raises:
            SecretError: If gh rejects the secret
        """
        result = self._run(["secret", "set", name], input_text=value)
        if result.returncode != 0:
            raise SecretError(
                f"Failed to set {name}", context=(result.stderr or "").strip() or None
            )

    def latest_run(self) -> Optional[WorkflowRun]:
        """
        Most recent Actions run, or None when the repository has none.

        Raises:
            GitHubCLIError: If gh fails or prints something that is not JSON
        """
        try:
            result = self._run(
                ["run", "list", "--limit", "1", "--json", "status,conclusion,name"]
            )
        except FileNotFoundError:
            raise GitHubCLIError("gh is not installed")

        if result.returncode != 0:
            raise GitHubCLIError(
                "gh run list failed", context=(result.stderr or "").strip() or None
            )

        try:
            runs = json.loads(result.stdout or "[]")
        except json.JSONDecodeError as e:
            raise GitHubCLIError(f"Unexpected gh output: {e}")

        if not runs:
            return None
        run = runs[0]
        return WorkflowRun(
            status=run.get("status", ""),
            conclusion=run.get("conclusion") or "",
            name=run.get("name", ""),
        )
