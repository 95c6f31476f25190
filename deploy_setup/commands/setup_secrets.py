"""
Secrets setup - store the deployment secrets with the gh CLI
"""

from pathlib import Path
from typing import Dict, Optional

import click

from deploy_setup.base import ProjectCommand
from deploy_setup.constants import DEFAULT_SSH_KEY_PATH, GH_INSTALL_URL
from deploy_setup.exceptions import GitHubCLIError, SecretError
from deploy_setup.services.github_service import GitHubCLI
from deploy_setup.services.prompt_service import PromptService


class SetupSecretsCommand(ProjectCommand):
    """
    Upload SERVER_HOST, SERVER_USER and SSH_PRIVATE_KEY.

    gh is installed and logged in first when needed. The SSH key path is
    taken from ``--key``, then the cache, then a prompt.
    """

    command_name = "setup-secrets"

    def __init__(
        self,
        *args,
        key_path: Optional[str] = None,
        github: Optional[GitHubCLI] = None,
        prompts: Optional[PromptService] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.key_path = key_path
        self.github = github or GitHubCLI(self.project_dir)
        self.prompts = prompts or PromptService()

    def execute(self) -> Dict[str, bool]:
        config = self.load_config()
        self.show_header(title="Setup Secrets", project=config.project.name)

        self.ensure_gh()

        self.logger.step("Storing GitHub Secrets")
        secrets = {
            "SERVER_HOST": config.server.host,
            "SERVER_USER": config.server.user,
        }

        key_file = self.resolve_key_path(config.server.ssh_key_path)
        if key_file.is_file():
            secrets["SSH_PRIVATE_KEY"] = key_file.read_text(encoding="utf-8")
        else:
            self.logger.warning(
                f"Private key not found: {key_file}, skipping SSH_PRIVATE_KEY"
            )

        uploaded = {}
        for name, value in secrets.items():
            try:
                self.github.set_secret(name, value)
            except SecretError as e:
                self.logger.log_error(e.message, context=e.context)
                uploaded[name] = False
            else:
                self.logger.success(name)
                uploaded[name] = True

        if config.secrets:
            self.console.print("\n  [dim]Also store the values selected from your env file:[/dim]")
            for name in config.secrets:
                self.console.print(f"    [cyan]gh secret set {name}[/cyan]")

        return uploaded

    def ensure_gh(self) -> None:
        """
        Make sure gh is installed and authenticated.

        Raises:
            GitHubCLIError: If gh could not be installed or logged in
        """
        if not self.github.is_installed():
            self.logger.warning("gh CLI not found, installing")
            if not self.github.install():
                raise GitHubCLIError(
                    "Could not install the gh CLI",
                    context=f"Install it manually: {GH_INSTALL_URL}",
                )
            self.logger.success("gh CLI installed")

        if not self.github.is_authenticated():
            self.logger.warning("gh is not logged in, starting login")
            self.github.login()

    def resolve_key_path(self, cached: Optional[str]) -> Path:
        path = self.key_path or cached
        if not path:
            path = self.prompts.text("SSH private key path", default=DEFAULT_SSH_KEY_PATH)
        return Path(path).expanduser()


@click.command(name="setup-secrets")
@click.option(
    "--dir",
    "-d",
    "project_dir",
    default=".",
    type=click.Path(exists=True, file_okay=False),
    help="Project directory",
)
@click.option("--key", "-k", "key_path", help="SSH private key path")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def setup_secrets(project_dir, key_path, verbose):
    """Store deployment secrets with the gh CLI"""
    cmd = SetupSecretsCommand(project_dir, key_path=key_path, verbose=verbose)
    cmd.run()
