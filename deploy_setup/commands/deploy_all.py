"""
One-shot pipeline - init, DNS, server, secrets, push
"""

from pathlib import Path
from typing import Optional

import click

from deploy_setup.base import BaseCommand
from deploy_setup.commands.check_dns import CheckDnsCommand
from deploy_setup.commands.init import InitCommand
from deploy_setup.commands.setup_secrets import SetupSecretsCommand
from deploy_setup.commands.setup_server import SetupServerCommand
from deploy_setup.core.push_verifier import PushVerifier
from deploy_setup.exceptions import GitHubCLIError
from deploy_setup.models.results import RunOutcome, VerificationResult, WorkflowRun
from deploy_setup.services.git_service import GitService
from deploy_setup.services.github_service import GitHubCLI
from deploy_setup.utils import derive_project_name


class DeployAllCommand(BaseCommand):
    """
    Run every step in order with one shared log file.

    DNS problems are only reported. A missing gh CLI skips the secrets
    step. Remote script and push failures stop the pipeline.
    """

    def __init__(
        self,
        project_dir=".",
        config_file: Optional[Path] = None,
        key_path: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(project_dir, **kwargs)
        self.config_file = config_file
        self.key_path = key_path

    def execute(self) -> VerificationResult:
        self.init_logger(derive_project_name(self.project_dir), "all")
        self.show_header(
            title="Deploy",
            subtitle="init → DNS → server → secrets → push",
            details={"Directory": str(self.project_dir)},
        )
        shared = dict(verbose=self.verbose, logger=self.logger, console=self.console)

        self.logger.step("Step 1/5: Configuration")
        config = InitCommand(
            self.project_dir, config_file=self.config_file, **shared
        ).execute()

        self.logger.step("Step 2/5: DNS")
        CheckDnsCommand(self.project_dir, **shared).execute()

        self.logger.step("Step 3/5: Server")
        SetupServerCommand(self.project_dir, **shared).execute()

        self.logger.step("Step 4/5: Secrets")
        try:
            SetupSecretsCommand(
                self.project_dir, key_path=self.key_path, **shared
            ).execute()
        except GitHubCLIError as e:
            self.logger.warning(f"{e.message}, skipping secrets")

        self.logger.step(f"Step 5/5: Push ({config.branches.production})")
        result = self.push_and_verify(config.branches.production)

        if result.outcome == RunOutcome.SUCCESS:
            self.console.print(
                "\n[bold green]✓ Deployed! From now on git push deploys automatically.[/bold green]\n"
            )
        return result

    def push_and_verify(self, branch: str) -> VerificationResult:
        git = GitService(self.project_dir, logger=self.logger)
        if git.commit_all():
            self.logger.success("Committed")
        else:
            self.logger.warning("Nothing new to commit, pushing anyway")

        git.push(branch)
        self.logger.success("Pushed")

        self.console.print("\n  [cyan]Waiting for GitHub Actions...[/cyan]")
        verifier = PushVerifier(GitHubCLI(self.project_dir), on_poll=self._report_poll)
        result = verifier.wait_for_run()
        self._report_outcome(result)
        return result

    def _report_poll(self, run: WorkflowRun) -> None:
        self.logger.log(f"Run {run.name}: {run.status}")
        self.print_dim(f"  Running... ({run.status})")

    def _report_outcome(self, result: VerificationResult) -> None:
        run = result.run
        if result.outcome == RunOutcome.SUCCESS:
            self.logger.success(f"Actions run succeeded: {run.name}")
        elif result.outcome == RunOutcome.FAILURE:
            self.logger.log_error(
                f"Actions run failed: {run.name} ({run.conclusion})",
                context="Run: gh run view --log-failed",
            )
        elif result.outcome == RunOutcome.TIMEOUT:
            self.logger.warning("Timed out waiting, check the Actions tab manually")
        else:
            self.logger.warning("Could not query Actions status, check it manually")


@click.command(name="all")
@click.option(
    "--dir",
    "-d",
    "project_dir",
    default=".",
    type=click.Path(exists=True, file_okay=False),
    help="Project directory",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON/YAML config file (skips the prompts)",
)
@click.option("--key", "-k", "key_path", help="SSH private key path")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def deploy_all(project_dir, config_file, key_path, verbose):
    """
    Configure and deploy in one go

    Runs init, check-dns, setup-server and setup-secrets, then pushes
    and waits for the GitHub Actions run.
    """
    cmd = DeployAllCommand(
        project_dir, config_file=config_file, key_path=key_path, verbose=verbose
    )
    cmd.run()
