"""
Project Command Base Class

Base class for commands that work from the cached configuration
written by ``deploy-setup init``.
"""

from typing import Optional

from deploy_setup.models.project import CollectedConfig
from deploy_setup.services.cache_service import ProjectCache

from .base_command import BaseCommand


class ProjectCommand(BaseCommand):
    """
    Base class for standalone project commands.

    Provides:
    - Cached configuration loading (missing cache is fatal)
    - A logger named after the cached project
    """

    command_name = "project"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cache = ProjectCache(self.project_dir)
        self.config: Optional[CollectedConfig] = None

    def load_config(self) -> CollectedConfig:
        """
        Load the cached configuration and open the logger.

        Raises:
            CacheNotFoundError: If init has not been run in this directory
        """
        if self.config is None:
            self.config = self.cache.load()
            self.init_logger(self.config.project.name, self.command_name)
        return self.config
