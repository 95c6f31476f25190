"""Per-project cache of the last collected configuration."""

import json
from pathlib import Path

from deploy_setup.constants import CACHE_FILE
from deploy_setup.exceptions import CacheNotFoundError, ConfigurationError
from deploy_setup.models.project import CollectedConfig


class ProjectCache:
    """
    ``.deploy-setup-cache.json`` next to the project.

    Written wholesale on every init and read back by the standalone
    commands (check-dns, setup-server, setup-secrets).
    """

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.path = self.project_dir / CACHE_FILE

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, config: CollectedConfig) -> Path:
        self.path.write_text(
            json.dumps(config.to_dict(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        return self.path

    def load(self) -> CollectedConfig:
        """
        Load the cached configuration.

        Raises:
            CacheNotFoundError: If init has not been run in this directory
            ConfigurationError: If the cache is not a usable configuration
        """
        if not self.exists():
            raise CacheNotFoundError(str(self.project_dir))

        data = json.loads(self.path.read_text(encoding="utf-8"))
        try:
            return CollectedConfig.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Cached configuration is corrupt: {e}", context=str(self.path)
            )
