"""
Project detection - classify a directory and infer its runtime parameters.

Read-only: the detector only lists the top-level entries and reads a handful
of well-known files.
"""

import json
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from dotenv import dotenv_values

from deploy_setup.constants import (
    ENV_FILE_CANDIDATES,
    FALLBACK_PORT,
    NODE_VERSION,
    PYTHON_VERSION,
)
from deploy_setup.core.app_type_registry import app_type_registry
from deploy_setup.models.project import DetectionResult, Language, ProjectType

PYTHON_MARKERS = ("requirements.txt", "pyproject.toml", "Pipfile")
NODE_MARKERS = ("package.json",)

# Checked in order, first substring hit wins
PYTHON_DEPENDENCY_HINTS = (
    ("fastapi", ProjectType.FASTAPI),
    ("django", ProjectType.DJANGO),
    ("flask", ProjectType.FLASK),
)

PYTHON_FILE_HINTS = (
    ("manage.py", ProjectType.DJANGO),
    ("app.py", ProjectType.FLASK),
    ("main.py", ProjectType.FASTAPI),
)

PORT_PATTERNS = (
    re.compile(r"port\s*[=:]\s*(\d{4,5})", re.IGNORECASE),
    re.compile(r"listen\s*\(\s*(\d{4,5})", re.IGNORECASE),
    re.compile(r"PORT\s*[=:]\s*[\"']?(\d{4,5})"),
)

PORT_SOURCE_CANDIDATES = {
    Language.PYTHON: ("app.py", "main.py", "manage.py", "config.py", "settings.py"),
    Language.NODE: ("src/main.ts", "src/index.ts", "server.js", "index.js", "app.js"),
}

LANGUAGE_VERSIONS = {
    Language.PYTHON: PYTHON_VERSION,
    Language.NODE: NODE_VERSION,
}


class ProjectDetector:
    """Detects project archetype, language, port and commands."""

    def __init__(self, root_dir: Union[str, Path]):
        self.root_dir = Path(root_dir)

    def detect(self) -> DetectionResult:
        """
        Inspect the directory.

        Returns:
            DetectionResult; ``project_type`` is None when nothing matched

        Raises:
            FileNotFoundError: If the directory does not exist
            json.JSONDecodeError: If package.json is malformed
        """
        entries = {entry.name for entry in self.root_dir.iterdir()}

        env_file = next((f for f in ENV_FILE_CANDIDATES if f in entries), None)
        env_keys = self._parse_env_keys(self.root_dir / env_file) if env_file else []

        language: Optional[Language] = None
        project_type: Optional[ProjectType] = None
        if any(marker in entries for marker in PYTHON_MARKERS):
            language = Language.PYTHON
            project_type = self._detect_python_framework(entries)
        elif any(marker in entries for marker in NODE_MARKERS):
            language = Language.NODE
            project_type = self._detect_node_framework()

        port = FALLBACK_PORT
        build_cmd = start_cmd = entry_file = ""
        if project_type is not None:
            defaults = app_type_registry.get(project_type)
            port = defaults.port
            build_cmd = defaults.build_cmd
            start_cmd = defaults.start_cmd
            entry_file = defaults.entry_file

            # Application factory: run.py calling create_app()
            if project_type == ProjectType.FLASK and self._uses_app_factory():
                start_cmd = start_cmd.replace("app:app", "run:app")
                entry_file = "run.py"

        detected_port = self._detect_port(language)
        if detected_port:
            port = detected_port

        return DetectionResult(
            project_type=project_type,
            language=language,
            language_version=LANGUAGE_VERSIONS.get(language, ""),
            port=port,
            build_cmd=build_cmd,
            start_cmd=start_cmd,
            entry_file=entry_file,
            env_file=env_file,
            env_keys=tuple(env_keys),
            has_docker="Dockerfile" in entries,
            has_ci=(self.root_dir / ".github" / "workflows").exists(),
        )

    def _read(self, relative: str) -> str:
        return (self.root_dir / relative).read_text(encoding="utf-8", errors="replace")

    def _detect_python_framework(self, entries: set) -> Optional[ProjectType]:
        manifest = next((m for m in PYTHON_MARKERS if m in entries), None)
        deps = self._read(manifest).lower() if manifest else ""

        for needle, project_type in PYTHON_DEPENDENCY_HINTS:
            if needle in deps:
                return project_type

        for filename, project_type in PYTHON_FILE_HINTS:
            if filename in entries:
                return project_type

        return None

    def _detect_node_framework(self) -> Optional[ProjectType]:
        package = json.loads(self._read("package.json"))
        deps: Dict[str, str] = {
            **(package.get("dependencies") or {}),
            **(package.get("devDependencies") or {}),
        }

        if "@nestjs/core" in deps:
            return ProjectType.NESTJS
        if "next" in deps:
            return ProjectType.NEXTJS
        if "nuxt" in deps or "nuxt3" in deps:
            return ProjectType.NUXTJS
        if "vue" in deps and "nuxt" not in deps:
            return ProjectType.VUE_SPA
        if "react" in deps and "next" not in deps:
            return ProjectType.REACT_SPA

        return None

    def _uses_app_factory(self) -> bool:
        run_py = self.root_dir / "run.py"
        return run_py.is_file() and "create_app" in self._read("run.py")

    def _detect_port(self, language: Optional[Language]) -> Optional[int]:
        for candidate in PORT_SOURCE_CANDIDATES.get(language, ()):
            path = self.root_dir / candidate
            if not path.is_file():
                continue
            content = path.read_text(encoding="utf-8", errors="replace")
            for pattern in PORT_PATTERNS:
                match = pattern.search(content)
                if match:
                    return int(match.group(1))
        return None

    @staticmethod
    def _parse_env_keys(env_path: Path) -> List[str]:
        # dotenv yields None for lines without "="
        values = dotenv_values(env_path)
        return [key for key, value in values.items() if value is not None]


def detect_project(root_dir: Union[str, Path]) -> DetectionResult:
    """Detect the project in ``root_dir``."""
    return ProjectDetector(root_dir).detect()
