"""Shared fixtures for the deploy-setup test suite."""

from typing import Any, Dict, List, Optional

import pytest

from deploy_setup.models.project import (
    BranchConfig,
    CollectedConfig,
    DomainConfig,
    Language,
    ProjectSettings,
    ProjectType,
    ServerConfig,
)
from deploy_setup.services.config_store import ConfigStorage, GlobalConfigStore


@pytest.fixture(autouse=True)
def deploy_setup_home(tmp_path, monkeypatch):
    """Keep config and logs out of the real home directory."""
    home = tmp_path / "deploy-setup-home"
    monkeypatch.setenv("DEPLOY_SETUP_HOME", str(home))
    return home


class InMemoryStorage(ConfigStorage):
    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data = data
        self.writes = 0

    def read(self):
        return self.data

    def write(self, data):
        self.data = data
        self.writes += 1


class ScriptedPrompter:
    """
    Stands in for PromptService.

    ``answers`` maps a prompt message to the answers given in order. Prompts
    without a scripted answer take their default. Text answers that fail
    validation are recorded in ``rejected`` and the next answer is used.
    """

    def __init__(self, answers: Optional[Dict[str, List[Any]]] = None):
        self.answers = {key: list(values) for key, values in (answers or {}).items()}
        self.asked: List[str] = []
        self.rejected: List[Any] = []

    def _next(self, message, default):
        self.asked.append(message)
        queue = self.answers.get(message)
        if queue:
            return queue.pop(0)
        return default

    def text(self, message, default=None, validate=None):
        while True:
            value = self._next(message, default)
            if value is None:
                value = ""
            if validate is None or validate(value) is None:
                return value
            self.rejected.append(value)

    def confirm(self, message, default=False):
        return self._next(message, default)

    def select(self, message, choices, default=None):
        if default is None:
            default = choices[0][1]
        return self._next(message, default)

    def checkbox(self, message, choices, checked=()):
        return self._next(message, list(checked))


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    return GlobalConfigStore(storage)


def make_config(
    project_type: ProjectType = ProjectType.FLASK,
    language: Language = Language.PYTHON,
    port: int = 5000,
    build_cmd: str = "",
    start_cmd: str = "gunicorn -w 4 -b 0.0.0.0:5000 app:app",
    domain: Optional[DomainConfig] = None,
    secrets: Optional[List[str]] = None,
    staging: Optional[str] = None,
    ssh_key_path: str = "~/.ssh/id_rsa",
) -> CollectedConfig:
    return CollectedConfig(
        project=ProjectSettings(
            name="shop-api",
            type=project_type,
            language=language,
            port=port,
            build_cmd=build_cmd,
            start_cmd=start_cmd,
        ),
        server=ServerConfig(
            host="203.0.113.10",
            user="deploy",
            ssh_key_path=ssh_key_path,
            deploy_dir="/opt/apps",
        ),
        domain=domain or DomainConfig.disabled(),
        secrets=secrets if secrets is not None else [],
        branches=BranchConfig(production="main", staging=staging),
    )


@pytest.fixture
def flask_config():
    return make_config()


@pytest.fixture
def config_factory():
    return make_config
