"""
Global Store Models

Server profiles and project history kept in the user-global config file.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional

from deploy_setup.models.project import ServerConfig


@dataclass
class ProjectRecord:
    """History entry for a project that went through init."""

    type: str
    last_deploy: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectRecord":
        return cls(type=data.get("type", ""), last_deploy=data.get("last_deploy"))


@dataclass
class GlobalConfig:
    """Registry of server profiles plus the project log."""

    servers: Dict[str, ServerConfig] = field(default_factory=dict)
    projects: Dict[str, ProjectRecord] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlobalConfig":
        return cls(
            servers={
                name: ServerConfig.from_dict(server)
                for name, server in (data.get("servers") or {}).items()
            },
            projects={
                name: ProjectRecord.from_dict(record)
                for name, record in (data.get("projects") or {}).items()
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "servers": {name: asdict(s) for name, s in self.servers.items()},
            "projects": {name: asdict(p) for name, p in self.projects.items()},
        }
