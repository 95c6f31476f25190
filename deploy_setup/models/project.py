"""
Project Configuration Models

Dataclass models for detection output and the collected deployment configuration.
"""

import re
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional

from deploy_setup.constants import DEFAULT_REGISTRY, PROJECT_NAME_PATTERN
from deploy_setup.models.results import ValidationResult

_PROJECT_NAME_RE = re.compile(PROJECT_NAME_PATTERN)


class ProjectType(str, Enum):
    """Recognized project archetypes."""

    FLASK = "flask"
    DJANGO = "django"
    FASTAPI = "fastapi"
    NESTJS = "nestjs"
    NEXTJS = "nextjs"
    NUXTJS = "nuxtjs"
    VUE_SPA = "vue-spa"
    REACT_SPA = "react-spa"


class Language(str, Enum):
    """Project runtime language."""

    PYTHON = "python"
    NODE = "node"


def is_valid_project_name(name: str) -> bool:
    """Check a project name against ``^[a-z0-9-]+$``."""
    return bool(_PROJECT_NAME_RE.match(name or ""))


@dataclass(frozen=True)
class DetectionResult:
    """What the detector learned about a project directory."""

    project_type: Optional[ProjectType]
    language: Optional[Language]
    language_version: str
    port: int
    build_cmd: str
    start_cmd: str
    entry_file: str
    env_file: Optional[str] = None
    env_keys: tuple = ()
    has_docker: bool = False
    has_ci: bool = False

    @property
    def is_known(self) -> bool:
        """Check if an archetype was identified."""
        return self.project_type is not None


@dataclass
class ServerConfig:
    """SSH target for the deployment."""

    host: str
    user: str
    ssh_key_path: str
    deploy_dir: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerConfig":
        return cls(
            host=data.get("host", ""),
            user=data.get("user", ""),
            ssh_key_path=data.get("ssh_key_path", ""),
            deploy_dir=data.get("deploy_dir", ""),
        )

    def __repr__(self) -> str:
        return f"ServerConfig(target={self.user}@{self.host}, dir={self.deploy_dir})"


@dataclass
class DomainConfig:
    """Domain and HTTPS settings."""

    enabled: bool = False
    name: str = ""
    https: bool = False

    @classmethod
    def disabled(cls) -> "DomainConfig":
        return cls(enabled=False, name="", https=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DomainConfig":
        return cls(
            enabled=bool(data.get("enabled", False)),
            name=data.get("name", "") or "",
            https=bool(data.get("https", False)),
        )


@dataclass
class BranchConfig:
    """Branches that trigger deployments."""

    production: str
    staging: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BranchConfig":
        return cls(
            production=data.get("production", ""),
            staging=data.get("staging") or None,
        )


@dataclass
class ProjectSettings:
    """Project identity and runtime commands."""

    name: str
    type: ProjectType
    language: Language
    port: int
    build_cmd: str = ""
    start_cmd: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectSettings":
        return cls(
            name=data.get("name", ""),
            type=ProjectType(data["type"]),
            language=Language(data["language"]),
            port=int(data.get("port", 0)),
            build_cmd=data.get("build_cmd", "") or "",
            start_cmd=data.get("start_cmd", "") or "",
        )


@dataclass
class CollectedConfig:
    """
    The finalized deployment configuration.

    Consumed by the generator and persisted as the per-project cache; every
    later command reloads it from there.
    """

    project: ProjectSettings
    server: ServerConfig
    domain: DomainConfig
    secrets: List[str] = field(default_factory=list)
    branches: BranchConfig = field(
        default_factory=lambda: BranchConfig(production="main")
    )
    registry: str = DEFAULT_REGISTRY

    def validate(self) -> ValidationResult:
        """Check the configuration invariants."""
        result = ValidationResult(is_valid=True)

        if not is_valid_project_name(self.project.name):
            result.add_error(
                f"Project name '{self.project.name}' must match {PROJECT_NAME_PATTERN}"
            )
        if not isinstance(self.project.port, int) or self.project.port <= 0:
            result.add_error(f"Port must be a positive integer, got {self.project.port}")
        if self.domain.enabled and not self.domain.name.strip():
            result.add_error("Domain name is required when the domain is enabled")
        if not self.branches.production.strip():
            result.add_error("Production branch is required")
        if not self.server.host.strip():
            result.add_error("Server host is required")

        return result

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["project"]["type"] = self.project.type.value
        data["project"]["language"] = self.project.language.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CollectedConfig":
        """
        Build a config from its serialized form.

        Raises:
            KeyError: If a required section is missing
            ValueError: If the archetype or language is unknown
        """
        return cls(
            project=ProjectSettings.from_dict(data["project"]),
            server=ServerConfig.from_dict(data["server"]),
            domain=DomainConfig.from_dict(data.get("domain") or {}),
            secrets=list(data.get("secrets") or []),
            branches=BranchConfig.from_dict(data.get("branches") or {}),
            registry=data.get("registry") or DEFAULT_REGISTRY,
        )

    def __repr__(self) -> str:
        return (
            f"CollectedConfig(project={self.project.name}, "
            f"type={self.project.type.value}, server={self.server.host})"
        )
