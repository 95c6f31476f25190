"""Git operations for committing and pushing the generated files."""

from pathlib import Path
from typing import Optional

from deploy_setup.constants import COMMIT_MESSAGE
from deploy_setup.exceptions import DeploymentError
from deploy_setup.logger import DeployLogger
from deploy_setup.utils import CommandExecutor


class GitService:
    """Thin wrapper over the git binary, run inside the project directory."""

    def __init__(self, repo_dir: Path, logger: Optional[DeployLogger] = None):
        self.repo_dir = Path(repo_dir)
        self.logger = logger

    def _git(self, *args: str):
        cmd = ["git", *args]
        if self.logger:
            self.logger.log_command(" ".join(cmd))
        result = CommandExecutor.run_command(cmd, cwd=self.repo_dir)
        if self.logger:
            self.logger.log_output(result.stdout, "stdout")
            self.logger.log_output(result.stderr, "stderr")
        return result

    def commit_all(self, message: str = COMMIT_MESSAGE) -> bool:
        """Stage everything and commit. False means there was nothing to commit."""
        self._git("add", ".")
        return self._git("commit", "-m", message).is_success

    def push(self, branch: str) -> None:
        """
        Push ``branch`` to origin.

        Raises:
            DeploymentError: If the push fails
        """
        result = self._git("push", "origin", branch)
        if not result.is_success:
            raise DeploymentError(
                f"git push origin {branch} failed",
                context=result.stderr.strip() or None,
            )
