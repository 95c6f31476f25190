"""
Server setup - run server-init.sh on the configured host over SSH
"""

import click

from deploy_setup.base import ProjectCommand
from deploy_setup.constants import ERROR_INIT_SCRIPT_NOT_FOUND
from deploy_setup.exceptions import ConfigurationError
from deploy_setup.models.results import SSHResult
from deploy_setup.services.ssh_service import SSHService

INIT_SCRIPT = "server-init.sh"


class SetupServerCommand(ProjectCommand):
    """Stream the generated init script to the server."""

    command_name = "setup-server"

    def execute(self) -> SSHResult:
        config = self.load_config()
        ssh = SSHService(config.server)

        self.show_header(
            title="Setup Server",
            project=config.project.name,
            details={"Server": ssh.target},
        )

        script_path = self.project_dir / INIT_SCRIPT
        if not script_path.is_file():
            raise ConfigurationError(
                ERROR_INIT_SCRIPT_NOT_FOUND.format(path=self.project_dir),
                context="Run: deploy-setup init",
            )
        script = script_path.read_text(encoding="utf-8")

        self.logger.step(f"Connecting to {ssh.target}")
        if ssh.key_path:
            self.logger.log(f"Using key {ssh.key_path}")
            self.print_dim(f"  Using key: {ssh.key_path}")
        else:
            self.print_dim("  No key file found, ssh will ask for a password")

        self.logger.log_command(" ".join(ssh.build_command()) + f" < {INIT_SCRIPT}")
        result = ssh.run_script(script)

        self.logger.success(
            f"Server initialized ({result.duration_seconds:.0f}s)"
        )
        return result


@click.command(name="setup-server")
@click.option(
    "--dir",
    "-d",
    "project_dir",
    default=".",
    type=click.Path(exists=True, file_okay=False),
    help="Project directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def setup_server(project_dir, verbose):
    """Run server-init.sh on the server over SSH"""
    cmd = SetupServerCommand(project_dir, verbose=verbose)
    cmd.run()
