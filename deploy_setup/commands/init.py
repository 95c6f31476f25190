"""
Project initialization - detect, collect, generate
"""

import json
from pathlib import Path
from typing import Optional

import click
import yaml

from deploy_setup.base import BaseCommand
from deploy_setup.core.collector import CollectionCancelled, ConfigCollector
from deploy_setup.core.detector import ProjectDetector
from deploy_setup.core.generator import ConfigGenerator
from deploy_setup.exceptions import ConfigurationError, ValidationError
from deploy_setup.models.project import CollectedConfig, DetectionResult
from deploy_setup.models.results import GeneratedFile
from deploy_setup.services.cache_service import ProjectCache
from deploy_setup.services.config_store import GlobalConfigStore
from deploy_setup.services.prompt_service import PromptService
from deploy_setup.ui_components import show_section
from deploy_setup.utils import derive_project_name


def load_config_file(path: Path) -> CollectedConfig:
    """
    Read a CollectedConfig from JSON, or YAML when the suffix says so.

    Raises:
        ConfigurationError: If the document is not a usable configuration
        ValidationError: If the configuration breaks an invariant
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yml", ".yaml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain an object", context=str(path)
        )

    try:
        config = CollectedConfig.from_dict(data)
    except KeyError as e:
        raise ConfigurationError(f"Config file is missing {e}", context=str(path))
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Config file is invalid: {e}", context=str(path))

    result = config.validate()
    if not result.is_valid:
        raise ValidationError(result.errors)
    return config


class InitCommand(BaseCommand):
    """Detect the project, collect the configuration and generate the files."""

    def __init__(
        self,
        project_dir=".",
        config_file: Optional[Path] = None,
        prompts: Optional[PromptService] = None,
        store: Optional[GlobalConfigStore] = None,
        **kwargs,
    ):
        super().__init__(project_dir, **kwargs)
        self.config_file = Path(config_file) if config_file else None
        self.prompts = prompts
        self.store = store or GlobalConfigStore()
        self.project_name = derive_project_name(self.project_dir)

    def execute(self) -> CollectedConfig:
        """Execute init command."""
        self.init_logger(self.project_name, "init")
        self.show_header(
            title="Initialize",
            subtitle="CI/CD configuration generator",
            project=self.project_name,
            details={"Directory": str(self.project_dir)},
        )

        detection = self._detect()
        config = self._collect(detection)

        self.logger.step("Generating deployment files")
        generator = ConfigGenerator(config, on_write=self._report_file)
        generator.generate(self.project_dir)

        self.store.record_project(config.project.name, config.project.type)
        cache_path = ProjectCache(self.project_dir).save(config)
        self.logger.success(f"Configuration cached in {cache_path.name}")

        if not self.embedded:
            self._display_next_steps(config)
        return config

    def _detect(self) -> DetectionResult:
        with self.console.status("[cyan]Detecting project type...[/cyan]"):
            detection = ProjectDetector(self.project_dir).detect()

        if detection.is_known:
            self.logger.success(
                f"Detected: {detection.project_type.value} ({detection.language.value})"
            )
        else:
            self.logger.warning("Could not detect the project type")

        if detection.has_docker:
            self.logger.warning("Dockerfile exists, it will be backed up and overwritten")
        if detection.has_ci:
            self.logger.warning(
                "GitHub Actions config exists, it will be backed up and overwritten"
            )
        return detection

    def _collect(self, detection: DetectionResult) -> CollectedConfig:
        if self.config_file:
            config = load_config_file(self.config_file)
            self.logger.success(f"Using config file: {self.config_file.resolve()}")
            return config

        collector = ConfigCollector(
            detection, prompts=self.prompts, store=self.store, console=self.console
        )
        try:
            config = collector.collect(self.project_name)
        except CollectionCancelled:
            self.logger.log("Cancelled at review", "WARNING")
            self.console.print("[dim]Cancelled[/dim]")
            raise SystemExit(0)

        self.logger.log(f"Collected {config!r}")
        return config

    def _report_file(self, generated: GeneratedFile) -> None:
        if generated.backed_up:
            self.logger.success(f"{generated.path} (previous version saved as .backup)")
        else:
            self.logger.success(generated.path)

    def _display_next_steps(self, config: CollectedConfig) -> None:
        show_section("Next steps", self.console)
        self.console.print("  1. Store the GitHub Secrets")
        self.console.print("     [dim]deploy-setup setup-secrets[/dim]")
        self.console.print("  2. Prepare the server")
        self.console.print("     [dim]deploy-setup setup-server[/dim]")
        self.console.print("  3. Push to deploy")
        self.console.print(
            '     [dim]git add . && git commit -m "add CI/CD" && '
            f"git push origin {config.branches.production}[/dim]"
        )
        self.console.print("\n  [dim]Or do everything at once: deploy-setup all[/dim]\n")


@click.command(name="init")
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
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def init(project_dir, config_file, verbose):
    """
    Generate CI/CD configuration (interactive)

    Writes:
    - Dockerfile, .dockerignore, docker-compose.yml
    - .github/workflows/deploy.yml
    - server-init.sh (and nginx.conf for SPAs)
    """
    cmd = InitCommand(project_dir, config_file=config_file, verbose=verbose)
    cmd.run()
