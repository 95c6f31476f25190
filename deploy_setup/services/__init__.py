"""
deploy-setup Services Layer

External collaborators and persisted state used by the commands.
"""

from .prompt_service import PromptService
from .config_store import ConfigStorage, JsonFileStorage, GlobalConfigStore
from .cache_service import ProjectCache
from .dns_service import DNSService
from .ssh_service import SSHService
from .github_service import GitHubCLI
from .git_service import GitService

__all__ = [
    "PromptService",
    "ConfigStorage",
    "JsonFileStorage",
    "GlobalConfigStore",
    "ProjectCache",
    "DNSService",
    "SSHService",
    "GitHubCLI",
    "GitService",
]
