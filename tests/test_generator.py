"""Tests for deployment file generation."""

import os

import pytest
import yaml

from deploy_setup.core.generator import ConfigGenerator, generate_files
from deploy_setup.exceptions import TemplateNotFoundError
from deploy_setup.models.project import DomainConfig, Language, ProjectType

SPA_KWARGS = dict(
    project_type=ProjectType.REACT_SPA,
    language=Language.NODE,
    port=80,
    build_cmd="npm run build",
    start_cmd="",
)


class TestOutputs:
    def test_python_project_files(self, tmp_path, flask_config):
        generated = generate_files(flask_config, tmp_path)

        assert [g.path for g in generated] == [
            "Dockerfile",
            ".dockerignore",
            "docker-compose.yml",
            ".github/workflows/deploy.yml",
            "server-init.sh",
        ]
        assert not any(g.backed_up for g in generated)
        for g in generated:
            assert (tmp_path / g.path).is_file()

    def test_spa_adds_nginx_conf(self, tmp_path, config_factory):
        generated = generate_files(config_factory(**SPA_KWARGS), tmp_path)

        paths = [g.path for g in generated]
        assert "nginx.conf" in paths
        assert paths[-1] == "server-init.sh"
        assert "try_files $uri $uri/ /index.html;" in (tmp_path / "nginx.conf").read_text()

    def test_existing_files_backed_up(self, tmp_path, flask_config):
        (tmp_path / "Dockerfile").write_text("FROM scratch\n")

        generated = generate_files(flask_config, tmp_path)

        by_path = {g.path: g for g in generated}
        assert by_path["Dockerfile"].backed_up
        assert not by_path["docker-compose.yml"].backed_up
        assert (tmp_path / "Dockerfile.backup").read_text() == "FROM scratch\n"
        assert "FROM python:3.11-slim" in (tmp_path / "Dockerfile").read_text()

    def test_init_script_executable(self, tmp_path, flask_config):
        generate_files(flask_config, tmp_path)

        assert os.access(tmp_path / "server-init.sh", os.X_OK)

    def test_on_write_callback(self, tmp_path, flask_config):
        seen = []

        ConfigGenerator(flask_config, on_write=seen.append).generate(tmp_path)

        assert len(seen) == 5

    def test_missing_template(self, tmp_path, flask_config, monkeypatch):
        monkeypatch.setattr(ConfigGenerator, "STUBS_DIR", tmp_path / "empty")

        with pytest.raises(TemplateNotFoundError):
            generate_files(flask_config, tmp_path)


class TestRendering:
    def test_python_dockerfile(self, tmp_path, flask_config):
        generate_files(flask_config, tmp_path)
        dockerfile = (tmp_path / "Dockerfile").read_text()

        assert "EXPOSE 5000" in dockerfile
        assert 'CMD ["gunicorn", "-w", "4", "-b", "0.0.0.0:5000", "app:app"]' in dockerfile
        assert "RUN \n" not in dockerfile

    def test_build_command_included(self, tmp_path, config_factory):
        config = config_factory(
            project_type=ProjectType.DJANGO,
            port=8000,
            build_cmd="python manage.py collectstatic --noinput",
            start_cmd="gunicorn -w 4 -b 0.0.0.0:8000 config.wsgi:application",
        )
        generate_files(config, tmp_path)

        assert "RUN python manage.py collectstatic --noinput" in (tmp_path / "Dockerfile").read_text()

    def test_node_dockerfile(self, tmp_path, config_factory):
        config = config_factory(
            project_type=ProjectType.NEXTJS,
            language=Language.NODE,
            port=3000,
            build_cmd="npm run build",
            start_cmd="npm start",
        )
        generate_files(config, tmp_path)
        dockerfile = (tmp_path / "Dockerfile").read_text()

        assert "FROM node:20-alpine AS build" in dockerfile
        assert 'CMD ["npm", "start"]' in dockerfile
        assert "node_modules" in (tmp_path / ".dockerignore").read_text()

    def test_compose_without_domain(self, tmp_path, flask_config):
        generate_files(flask_config, tmp_path)
        compose = yaml.safe_load((tmp_path / "docker-compose.yml").read_text())

        service = compose["services"]["shop-api"]
        assert service["image"] == "ghcr.io/${GITHUB_USER}/shop-api:latest"
        assert service["ports"] == ["5000:5000"]

    def test_compose_behind_proxy(self, tmp_path, config_factory):
        config = config_factory(domain=DomainConfig(enabled=True, name="shop.example.com", https=True), **SPA_KWARGS)
        generate_files(config, tmp_path)
        compose = yaml.safe_load((tmp_path / "docker-compose.yml").read_text())

        assert compose["services"]["shop-api"]["ports"] == ["127.0.0.1:8080:80"]

    def test_workflow(self, tmp_path, config_factory):
        config = config_factory(staging="develop", secrets=["API_KEY", "DB_PASSWORD"])
        generate_files(config, tmp_path)
        text = (tmp_path / ".github/workflows/deploy.yml").read_text()
        workflow = yaml.safe_load(text)

        # PyYAML reads the bare "on" key as True
        assert workflow[True]["push"]["branches"] == ["main", "develop"]
        assert set(workflow["jobs"]) == {"build", "deploy"}
        assert "${{ secrets.SERVER_HOST }}" in text
        assert "${{ secrets.SSH_PRIVATE_KEY }}" in text
        assert "--args API_KEY DB_PASSWORD" in text
        assert "target: /opt/apps/shop-api" in text

    def test_workflow_production_only(self, tmp_path, flask_config):
        generate_files(flask_config, tmp_path)
        workflow = yaml.safe_load((tmp_path / ".github/workflows/deploy.yml").read_text())

        assert workflow[True]["push"]["branches"] == ["main"]

    def test_server_init_script(self, tmp_path, config_factory):
        config = config_factory(domain=DomainConfig(enabled=True, name="shop.example.com", https=True))
        generate_files(config, tmp_path)
        script = (tmp_path / "server-init.sh").read_text()

        assert script.startswith("#!/usr/bin/env bash")
        assert 'APP_DIR="/opt/apps/shop-api"' in script
        assert 'DOMAIN_ENABLED="true"' in script
        assert 'DOMAIN_NAME="shop.example.com"' in script
        assert 'HOST_PORT="5000"' in script


class TestTemplateVars:
    def test_domain_defaults(self, flask_config):
        variables = ConfigGenerator(flask_config).template_vars()

        assert variables["DOMAIN_NAME"] == "localhost"
        assert variables["DOMAIN_ENABLED"] == "false"
        assert variables["HTTPS_ENABLED"] == "false"
        assert variables["BRANCH_STAGING"] == ""
        assert variables["GITHUB_USER"] == "${GITHUB_USER}"
        assert variables["PYTHON_VERSION"] == "3.11"
        assert variables["NODE_VERSION"] == "20"

    def test_host_port_only_moves_for_proxied_port_80(self, config_factory):
        proxied = config_factory(domain=DomainConfig(enabled=True, name="a.example.com"), **SPA_KWARGS)
        direct = config_factory(**SPA_KWARGS)

        assert ConfigGenerator(proxied).template_vars()["HOST_PORT"] == "8080"
        assert ConfigGenerator(direct).template_vars()["HOST_PORT"] == "80"
