"""
Global Config Store

Read/modify/write repository for ``<home>/config.json``: saved server
profiles and the log of initialized projects.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from deploy_setup.constants import GLOBAL_CONFIG_FILE, get_home_dir
from deploy_setup.models.project import ProjectType, ServerConfig
from deploy_setup.models.store import GlobalConfig, ProjectRecord


class ConfigStorage(ABC):
    """Backend holding the serialized global config."""

    @abstractmethod
    def read(self) -> Optional[Dict[str, Any]]:
        """Return the stored document, or None when nothing was saved yet."""

    @abstractmethod
    def write(self, data: Dict[str, Any]) -> None:
        """Replace the stored document."""


class JsonFileStorage(ConfigStorage):
    """Whole-file JSON storage. No locking; one interactive session at a time."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or (get_home_dir() / GLOBAL_CONFIG_FILE)

    def read(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        return json.loads(self.path.read_text(encoding="utf-8"))

    def write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )


class GlobalConfigStore:
    """
    Repository over the user-global config.

    Every mutation reloads the document, applies the change and writes the
    whole document back. Entries are only ever added or overwritten.
    """

    def __init__(self, storage: Optional[ConfigStorage] = None):
        self.storage = storage or JsonFileStorage()

    def load(self) -> GlobalConfig:
        data = self.storage.read()
        if not data:
            return GlobalConfig()
        return GlobalConfig.from_dict(data)

    def save(self, config: GlobalConfig) -> None:
        self.storage.write(config.to_dict())

    def update(self, mutate: Callable[[GlobalConfig], None]) -> GlobalConfig:
        config = self.load()
        mutate(config)
        self.save(config)
        return config

    def get_servers(self) -> Dict[str, ServerConfig]:
        return self.load().servers

    def save_server(self, name: str, server: ServerConfig) -> None:
        """Save a server profile; an existing label is overwritten."""

        def _apply(config: GlobalConfig) -> None:
            config.servers[name] = ServerConfig(**vars(server))

        self.update(_apply)

    def record_project(self, name: str, project_type: ProjectType) -> None:
        """Log the project with the current UTC timestamp."""
        timestamp = datetime.now(timezone.utc).isoformat()

        def _apply(config: GlobalConfig) -> None:
            config.projects[name] = ProjectRecord(
                type=ProjectType(project_type).value, last_deploy=timestamp
            )

        self.update(_apply)
