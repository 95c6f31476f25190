"""
Deployment file generator.

Renders the packaged stubs for a CollectedConfig into the project directory.
Existing files are copied to ``<name>.backup`` before being overwritten.
"""

import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from jinja2 import StrictUndefined, Template

from deploy_setup.constants import NODE_VERSION, PROXY_UPSTREAM_PORT, PYTHON_VERSION
from deploy_setup.core.app_type_registry import app_type_registry
from deploy_setup.exceptions import TemplateNotFoundError
from deploy_setup.models.project import CollectedConfig
from deploy_setup.models.results import GeneratedFile


@dataclass(frozen=True)
class OutputSpec:
    """One generated file: where the stub lives and where it is written."""

    template: str
    output: str
    executable: bool = False


class ConfigGenerator:
    """Turns a CollectedConfig into the fixed set of deployment files."""

    STUBS_DIR = Path(__file__).parent.parent / "stubs"

    def __init__(
        self,
        config: CollectedConfig,
        on_write: Optional[Callable[[GeneratedFile], None]] = None,
    ):
        self.config = config
        self.app_type = app_type_registry.get(config.project.type)
        self.on_write = on_write

    def outputs(self) -> List[OutputSpec]:
        """Files to write, in order."""
        category = self.app_type.template_category.value
        language = self.config.project.language.value

        specs = [
            OutputSpec(f"dockerfile/{category}.Dockerfile.j2", "Dockerfile"),
            OutputSpec(f"dockerignore/{language}.dockerignore.j2", ".dockerignore"),
            OutputSpec("compose/default.yml.j2", "docker-compose.yml"),
            OutputSpec("workflows/github-deploy.yml.j2", ".github/workflows/deploy.yml"),
        ]
        if self.app_type.is_spa:
            specs.append(OutputSpec("nginx/default.conf.j2", "nginx.conf"))
        specs.append(
            OutputSpec("scripts/server-init.sh.j2", "server-init.sh", executable=True)
        )
        return specs

    def template_vars(self) -> Dict[str, Any]:
        config = self.config
        project = config.project
        return {
            "APP_NAME": project.name,
            "APP_PORT": str(project.port),
            "HOST_PORT": str(self._host_port()),
            "BUILD_CMD": project.build_cmd,
            "START_CMD": project.start_cmd,
            "START_CMD_DOCKER": ", ".join(f'"{part}"' for part in project.start_cmd.split()),
            "PYTHON_VERSION": PYTHON_VERSION,
            "NODE_VERSION": NODE_VERSION,
            "REGISTRY": config.registry,
            # Resolved by docker compose on the server
            "GITHUB_USER": "${GITHUB_USER}",
            "DEPLOY_DIR": config.server.deploy_dir,
            "SERVER_HOST": config.server.host,
            "SERVER_USER": config.server.user,
            "BRANCH_PRODUCTION": config.branches.production,
            "BRANCH_STAGING": config.branches.staging or "",
            "DOMAIN_NAME": config.domain.name or "localhost",
            "DOMAIN_ENABLED": str(config.domain.enabled).lower(),
            "HTTPS_ENABLED": str(config.domain.https).lower(),
            "SECRETS": list(config.secrets),
        }

    def _host_port(self) -> int:
        # Caddy owns 80/443 once a domain is configured
        if self.config.domain.enabled and self.config.project.port == 80:
            return PROXY_UPSTREAM_PORT
        return self.config.project.port

    @classmethod
    def load_template(cls, name: str) -> str:
        """
        Load a stub from the package.

        Raises:
            TemplateNotFoundError: If the stub does not exist
        """
        stub_file = cls.STUBS_DIR / name
        if not stub_file.exists():
            raise TemplateNotFoundError(str(stub_file))
        return stub_file.read_text(encoding="utf-8")

    def render(self, template_name: str) -> str:
        template = Template(
            self.load_template(template_name),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        return template.render(**self.template_vars())

    def generate(self, output_dir: Path) -> List[GeneratedFile]:
        """Render every output into ``output_dir``."""
        output_dir = Path(output_dir)
        generated = []
        for spec in self.outputs():
            content = self.render(spec.template)
            generated.append(self._write(output_dir, spec, content))
        return generated

    def _write(self, output_dir: Path, spec: OutputSpec, content: str) -> GeneratedFile:
        full_path = output_dir / spec.output
        backed_up = False

        if full_path.exists():
            shutil.copyfile(full_path, full_path.with_name(full_path.name + ".backup"))
            backed_up = True

        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        if spec.executable:
            mode = full_path.stat().st_mode
            full_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

        result = GeneratedFile(path=spec.output, backed_up=backed_up)
        if self.on_write:
            self.on_write(result)
        return result


def generate_files(config: CollectedConfig, output_dir: Path) -> List[GeneratedFile]:
    """Generate all deployment files for ``config`` into ``output_dir``."""
    return ConfigGenerator(config).generate(output_dir)
