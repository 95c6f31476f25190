"""
Interactive configuration collector.

Walks the operator through project, server, domain, secrets and branch
questions, then loops on a review screen until the configuration is confirmed
or the run is cancelled.

    collect-project -> collect-server -> collect-domain
        -> collect-secrets -> collect-branches -> review

Only ``review`` has edges back into earlier states (project, server, domain).
Secrets and branches cannot be edited from the review screen.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from deploy_setup.constants import (
    DEFAULT_DEPLOY_DIR,
    DEFAULT_PRODUCTION_BRANCH,
    DEFAULT_REGISTRY,
    DEFAULT_SSH_KEY_PATH,
    DEFAULT_SSH_USER,
    DEFAULT_STAGING_BRANCH,
    PROJECT_NAME_PATTERN,
    SECRET_KEY_PATTERN,
)
from deploy_setup.core.app_type_registry import app_type_registry
from deploy_setup.models.project import (
    BranchConfig,
    CollectedConfig,
    DetectionResult,
    DomainConfig,
    ProjectSettings,
    ProjectType,
    ServerConfig,
    is_valid_project_name,
)
from deploy_setup.services.config_store import GlobalConfigStore
from deploy_setup.services.prompt_service import PromptService

NEW_SERVER = "__new__"

_SECRET_KEY_RE = re.compile(SECRET_KEY_PATTERN, re.IGNORECASE)


class CollectorState(Enum):
    PROJECT = "collect-project"
    SERVER = "collect-server"
    DOMAIN = "collect-domain"
    SECRETS = "collect-secrets"
    BRANCHES = "collect-branches"
    REVIEW = "review"
    DONE = "done"


class ReviewAction(str, Enum):
    CONFIRM = "confirm"
    EDIT_PROJECT = "edit-project"
    EDIT_SERVER = "edit-server"
    EDIT_DOMAIN = "edit-domain"
    CANCEL = "cancel"


# First pass through the questions
FORWARD_TRANSITIONS = {
    CollectorState.PROJECT: CollectorState.SERVER,
    CollectorState.SERVER: CollectorState.DOMAIN,
    CollectorState.DOMAIN: CollectorState.SECRETS,
    CollectorState.SECRETS: CollectorState.BRANCHES,
    CollectorState.BRANCHES: CollectorState.REVIEW,
}

# Edges out of review; cancel has none
REVIEW_TRANSITIONS = {
    ReviewAction.CONFIRM: CollectorState.DONE,
    ReviewAction.EDIT_PROJECT: CollectorState.PROJECT,
    ReviewAction.EDIT_SERVER: CollectorState.SERVER,
    ReviewAction.EDIT_DOMAIN: CollectorState.DOMAIN,
}

REVIEW_CHOICES = [
    ("✓ Confirm and generate", ReviewAction.CONFIRM),
    ("✎ Edit project settings", ReviewAction.EDIT_PROJECT),
    ("✎ Edit server settings", ReviewAction.EDIT_SERVER),
    ("✎ Edit domain settings", ReviewAction.EDIT_DOMAIN),
    ("✗ Cancel", ReviewAction.CANCEL),
]


class CollectionCancelled(Exception):
    """Raised when the operator cancels from the review screen."""


def validate_project_name(value: str) -> Optional[str]:
    if is_valid_project_name(value):
        return None
    return f"Only lowercase letters, digits and hyphens ({PROJECT_NAME_PATTERN})"


def validate_port(value: str) -> Optional[str]:
    value = str(value).strip()
    if value.isdigit() and int(value) > 0:
        return None
    return "Port must be a positive integer"


def validate_required(value: str) -> Optional[str]:
    return None if str(value or "").strip() else "Cannot be empty"


def summarize(config: CollectedConfig) -> List[Tuple[str, str]]:
    """Human-readable summary rows for the review screen."""
    project = config.project
    rows = [
        ("Project", f"{project.name} ({project.type.value})"),
        ("Port", str(project.port)),
        ("Server", f"{config.server.user}@{config.server.host}"),
        ("Deploy directory", f"{config.server.deploy_dir}/{project.name}"),
    ]
    if config.domain.enabled:
        https = "yes" if config.domain.https else "no"
        rows.append(("Domain", f"{config.domain.name} (HTTPS: {https})"))
    branches = config.branches.production
    if config.branches.staging:
        branches += f" / {config.branches.staging}"
    rows.append(("Branches", branches))
    if config.secrets:
        rows.append(("Secrets", ", ".join(config.secrets)))
    return rows


@dataclass
class _Draft:
    """Sections collected so far."""

    candidate_name: str
    project: Optional[ProjectSettings] = None
    server: Optional[ServerConfig] = None
    domain: Optional[DomainConfig] = None
    secrets: List[str] = field(default_factory=list)
    branches: Optional[BranchConfig] = None
    reviewing: bool = False

    def to_config(self) -> CollectedConfig:
        return CollectedConfig(
            project=self.project,
            server=self.server,
            domain=self.domain,
            secrets=list(self.secrets),
            branches=self.branches,
            registry=DEFAULT_REGISTRY,
        )


class ConfigCollector:
    """
    Collects a complete, validated CollectedConfig.

    Server profiles added along the way are kept in ``pending_profiles`` and
    written to the global store only once the review is confirmed.
    """

    def __init__(
        self,
        detection: DetectionResult,
        prompts: Optional[PromptService] = None,
        store: Optional[GlobalConfigStore] = None,
        console: Optional[Console] = None,
    ):
        self.detection = detection
        self.prompts = prompts or PromptService()
        self.store = store or GlobalConfigStore()
        self.console = console or Console()
        self.pending_profiles: Dict[str, ServerConfig] = {}

        self._handlers: Dict[CollectorState, Callable[[_Draft], CollectorState]] = {
            CollectorState.PROJECT: self._on_project,
            CollectorState.SERVER: self._on_server,
            CollectorState.DOMAIN: self._on_domain,
            CollectorState.SECRETS: self._on_secrets,
            CollectorState.BRANCHES: self._on_branches,
            CollectorState.REVIEW: self._on_review,
        }

    def collect(self, project_name: str) -> CollectedConfig:
        """
        Run the state machine to completion.

        Raises:
            CollectionCancelled: If the operator cancels at review
        """
        self.console.print("\n[cyan]━━━ Deployment Configuration ━━━[/cyan]\n")

        draft = _Draft(candidate_name=project_name)
        state = CollectorState.PROJECT
        while state is not CollectorState.DONE:
            state = self._handlers[state](draft)

        self._persist_profiles()
        return draft.to_config()

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _next(self, draft: _Draft, state: CollectorState) -> CollectorState:
        if draft.reviewing:
            return CollectorState.REVIEW
        return FORWARD_TRANSITIONS[state]

    def _on_project(self, draft: _Draft) -> CollectorState:
        draft.project = self.collect_project(draft.candidate_name, current=draft.project)
        return self._next(draft, CollectorState.PROJECT)

    def _on_server(self, draft: _Draft) -> CollectorState:
        draft.server = self.collect_server()
        return self._next(draft, CollectorState.SERVER)

    def _on_domain(self, draft: _Draft) -> CollectorState:
        draft.domain = self.collect_domain()
        return self._next(draft, CollectorState.DOMAIN)

    def _on_secrets(self, draft: _Draft) -> CollectorState:
        draft.secrets = self.collect_secrets()
        return self._next(draft, CollectorState.SECRETS)

    def _on_branches(self, draft: _Draft) -> CollectorState:
        draft.branches = self.collect_branches()
        return self._next(draft, CollectorState.BRANCHES)

    def _on_review(self, draft: _Draft) -> CollectorState:
        action = self.review(draft.to_config())
        if action == ReviewAction.CANCEL:
            raise CollectionCancelled()
        draft.reviewing = True
        return REVIEW_TRANSITIONS[action]

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def collect_project(
        self, default_name: str, current: Optional[ProjectSettings] = None
    ) -> ProjectSettings:
        name = self.prompts.text(
            "Project name",
            default=current.name if current else default_name,
            validate=validate_project_name,
        )

        type_choices = [
            (config.label, project_type)
            for project_type, config in app_type_registry.all().items()
        ]
        default_type = current.type if current else self.detection.project_type
        project_type = ProjectType(
            self.prompts.select("Project type", type_choices, default=default_type)
        )

        port, build_cmd, start_cmd = self._runtime_defaults(project_type, current)
        port = self.prompts.text(
            "Application port", default=str(port), validate=validate_port
        )
        build_cmd = self.prompts.text(
            "Build command (leave empty for none)", default=build_cmd
        )
        start_cmd = self.prompts.text("Start command", default=start_cmd)

        return ProjectSettings(
            name=name,
            type=project_type,
            language=app_type_registry.language_for(project_type),
            port=int(str(port).strip()),
            build_cmd=(build_cmd or "").strip(),
            start_cmd=(start_cmd or "").strip(),
        )

    def _runtime_defaults(
        self, project_type: ProjectType, current: Optional[ProjectSettings]
    ) -> Tuple[int, str, str]:
        if current and current.type == project_type:
            return current.port, current.build_cmd, current.start_cmd
        if self.detection.project_type == project_type:
            d = self.detection
            return d.port, d.build_cmd, d.start_cmd
        defaults = app_type_registry.get(project_type)
        return defaults.port, defaults.build_cmd, defaults.start_cmd

    def collect_server(self) -> ServerConfig:
        saved = {**self.store.get_servers(), **self.pending_profiles}

        if saved:
            choices = [(f"{name} ({server.host})", name) for name, server in saved.items()]
            choices.append(("+ Add new server", NEW_SERVER))
            choice = self.prompts.select("Select server", choices)

            if choice != NEW_SERVER:
                profile = saved[choice]
                deploy_dir = self.prompts.text(
                    "Deploy directory", default=profile.deploy_dir
                )
                return ServerConfig(
                    host=profile.host,
                    user=profile.user,
                    ssh_key_path=profile.ssh_key_path,
                    deploy_dir=deploy_dir,
                )

        host = self.prompts.text("Server IP / hostname", validate=validate_required)
        user = self.prompts.text("SSH user", default=DEFAULT_SSH_USER)
        ssh_key_path = self.prompts.text(
            "SSH private key path", default=DEFAULT_SSH_KEY_PATH
        )
        deploy_dir = self.prompts.text("Deploy directory", default=DEFAULT_DEPLOY_DIR)
        server = ServerConfig(
            host=host.strip(),
            user=user.strip(),
            ssh_key_path=ssh_key_path.strip(),
            deploy_dir=deploy_dir.strip(),
        )

        label = self.prompts.text(
            "Name this server (for next time)",
            default=server.host,
            validate=validate_required,
        )
        # Same label silently replaces the earlier profile
        self.pending_profiles[label.strip()] = server
        return server

    def collect_domain(self) -> DomainConfig:
        if not self.prompts.confirm("Configure a domain?", default=False):
            return DomainConfig.disabled()

        name = self.prompts.text("Domain", validate=validate_required)
        https = self.prompts.confirm("Enable HTTPS (Let's Encrypt)?", default=True)
        return DomainConfig(enabled=True, name=name.strip(), https=https)

    def collect_secrets(self) -> List[str]:
        env_keys = list(self.detection.env_keys)
        if not env_keys:
            self.console.print(
                "  [yellow]⚠[/yellow] [dim]No .env file found, skipping secrets[/dim]"
            )
            return []

        self.console.print(f"\n  [cyan]Variables found in {self.detection.env_file}:[/cyan]")
        for key in env_keys:
            self.console.print(f"    {key}")

        return self.prompts.checkbox(
            "Select the variables to store as GitHub Secrets",
            [(key, key) for key in env_keys],
            checked=[key for key in env_keys if _SECRET_KEY_RE.search(key)],
        )

    def collect_branches(self) -> BranchConfig:
        production = self.prompts.text(
            "Production branch",
            default=DEFAULT_PRODUCTION_BRANCH,
            validate=validate_required,
        )

        staging = None
        if self.prompts.confirm("Configure a staging branch?", default=False):
            staging = self.prompts.text(
                "Staging branch", default=DEFAULT_STAGING_BRANCH
            ).strip() or None

        return BranchConfig(production=production.strip(), staging=staging)

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    def show_summary(self, config: CollectedConfig) -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="dim")
        table.add_column(style="cyan")
        for label, value in summarize(config):
            table.add_row(f"  {label}", value)

        self.console.print("\n[cyan]━━━ Configuration Summary ━━━[/cyan]")
        self.console.print(table)
        self.console.print("[cyan]━━━━━━━━━━━━━━━━━━━━━━━━━━━━━[/cyan]\n")

    def review(self, config: CollectedConfig) -> ReviewAction:
        self.show_summary(config)
        return ReviewAction(
            self.prompts.select("Confirm configuration?", REVIEW_CHOICES)
        )

    def _persist_profiles(self) -> None:
        for label, server in self.pending_profiles.items():
            self.store.save_server(label, server)
        self.pending_profiles.clear()
