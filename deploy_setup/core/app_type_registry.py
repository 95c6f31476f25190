"""
App Type Registry - lookup table for the supported project archetypes.

Each archetype carries its runtime defaults (port, build/start commands, entry
file) and the template category the generator renders for it.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from deploy_setup.models.project import Language, ProjectType


class TemplateCategory(str, Enum):
    """Dockerfile family used for an archetype."""

    PYTHON = "python"
    NODE = "node"
    SPA = "spa"


@dataclass(frozen=True)
class AppTypeConfig:
    """Configuration for an application type."""

    type: ProjectType
    label: str
    language: Language
    port: int
    build_cmd: str
    start_cmd: str
    entry_file: str
    template_category: TemplateCategory

    @property
    def is_spa(self) -> bool:
        """SPAs are served by nginx and get a reverse-proxy config."""
        return self.template_category == TemplateCategory.SPA


class AppTypeRegistry:
    """
    Registry for supported application types.

    Built once from the built-in table; lookups are exhaustive over
    ``ProjectType`` and the mapping is exposed read-only.
    """

    def __init__(self):
        types = {config.type: config for config in _BUILTIN_TYPES}
        missing = [t.value for t in ProjectType if t not in types]
        if missing:
            raise RuntimeError(f"No defaults registered for: {', '.join(missing)}")
        self._types: Mapping[ProjectType, AppTypeConfig] = MappingProxyType(types)

    def get(self, app_type) -> AppTypeConfig:
        """
        Get app type config.

        Args:
            app_type: ProjectType member or its string value (e.g. "flask")

        Returns:
            AppTypeConfig for the requested type

        Raises:
            ValueError: If app type is not registered
        """
        try:
            return self._types[ProjectType(app_type)]
        except ValueError:
            supported = ", ".join(self.list_types())
            raise ValueError(
                f"Unsupported app type: '{app_type}'. Supported types: {supported}"
            )

    def list_types(self) -> list[str]:
        """List all registered app type names."""
        return [t.value for t in self._types]

    def all(self) -> Mapping[ProjectType, AppTypeConfig]:
        return self._types

    def language_for(self, app_type) -> Language:
        return self.get(app_type).language


_BUILTIN_TYPES = (
    AppTypeConfig(
        type=ProjectType.FLASK,
        label="Flask",
        language=Language.PYTHON,
        port=5000,
        build_cmd="",
        start_cmd="gunicorn -w 4 -b 0.0.0.0:5000 app:app",
        entry_file="app.py",
        template_category=TemplateCategory.PYTHON,
    ),
    AppTypeConfig(
        type=ProjectType.DJANGO,
        label="Django",
        language=Language.PYTHON,
        port=8000,
        build_cmd="python manage.py collectstatic --noinput",
        start_cmd="gunicorn -w 4 -b 0.0.0.0:8000 config.wsgi:application",
        entry_file="manage.py",
        template_category=TemplateCategory.PYTHON,
    ),
    AppTypeConfig(
        type=ProjectType.FASTAPI,
        label="FastAPI",
        language=Language.PYTHON,
        port=8000,
        build_cmd="",
        start_cmd="uvicorn main:app --host 0.0.0.0 --port 8000",
        entry_file="main.py",
        template_category=TemplateCategory.PYTHON,
    ),
    AppTypeConfig(
        type=ProjectType.NESTJS,
        label="NestJS",
        language=Language.NODE,
        port=3000,
        build_cmd="npm run build",
        start_cmd="node dist/main",
        entry_file="src/main.ts",
        template_category=TemplateCategory.NODE,
    ),
    AppTypeConfig(
        type=ProjectType.NEXTJS,
        label="Next.js",
        language=Language.NODE,
        port=3000,
        build_cmd="npm run build",
        start_cmd="npm start",
        entry_file="pages/index.tsx",
        template_category=TemplateCategory.NODE,
    ),
    AppTypeConfig(
        type=ProjectType.NUXTJS,
        label="Nuxt.js",
        language=Language.NODE,
        port=3000,
        build_cmd="npm run build",
        start_cmd="node .output/server/index.mjs",
        entry_file="nuxt.config.ts",
        template_category=TemplateCategory.NODE,
    ),
    AppTypeConfig(
        type=ProjectType.VUE_SPA,
        label="Vue SPA",
        language=Language.NODE,
        port=80,
        build_cmd="npm run build",
        start_cmd="",
        entry_file="src/main.ts",
        template_category=TemplateCategory.SPA,
    ),
    AppTypeConfig(
        type=ProjectType.REACT_SPA,
        label="React SPA",
        language=Language.NODE,
        port=80,
        build_cmd="npm run build",
        start_cmd="",
        entry_file="src/index.tsx",
        template_category=TemplateCategory.SPA,
    ),
)


# Global registry instance
app_type_registry = AppTypeRegistry()
