"""Tests for the DNS, SSH, git and gh wrappers."""

import json
import subprocess
from unittest.mock import MagicMock, patch

import dns.resolver
import pytest

from deploy_setup.exceptions import DeploymentError, GitHubCLIError, SecretError, SSHError
from deploy_setup.models.project import DomainConfig, ServerConfig
from deploy_setup.models.results import DNSStatus
from deploy_setup.services.dns_service import DNSService
from deploy_setup.services.git_service import GitService
from deploy_setup.services.github_service import GitHubCLI, install_command
from deploy_setup.services.ssh_service import SSHService


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestDNSService:
    def domain_config(self, config_factory):
        return config_factory(domain=DomainConfig(enabled=True, name="shop.example.com", https=True))

    def test_skipped_without_domain(self, flask_config):
        resolver = MagicMock()

        result = DNSService(resolver).check(flask_config)

        assert result.status == DNSStatus.SKIPPED
        resolver.resolve.assert_not_called()

    def test_match(self, config_factory):
        resolver = MagicMock()
        resolver.resolve.return_value = ["203.0.113.10", "203.0.113.11"]

        result = DNSService(resolver).check(self.domain_config(config_factory))

        assert result.status == DNSStatus.MATCH
        resolver.resolve.assert_called_once_with("shop.example.com", "A")

    def test_mismatch(self, config_factory):
        resolver = MagicMock()
        resolver.resolve.return_value = ["192.0.2.1"]

        result = DNSService(resolver).check(self.domain_config(config_factory))

        assert result.status == DNSStatus.MISMATCH
        assert result.addresses == ["192.0.2.1"]
        assert result.expected_ip == "203.0.113.10"

    def test_lookup_failure_is_not_raised(self, config_factory):
        resolver = MagicMock()
        resolver.resolve.side_effect = dns.resolver.NXDOMAIN()

        result = DNSService(resolver).check(self.domain_config(config_factory))

        assert result.status == DNSStatus.LOOKUP_FAILED
        assert result.error


class TestSSHService:
    def server(self, key_path):
        return ServerConfig("203.0.113.10", "deploy", str(key_path), "/opt/apps")

    def test_command_with_key(self, tmp_path):
        key = tmp_path / "id_ed25519"
        key.write_text("KEY")

        cmd = SSHService(self.server(key)).build_command()

        assert cmd == [
            "ssh",
            "-i",
            str(key),
            "-o",
            "StrictHostKeyChecking=accept-new",
            "deploy@203.0.113.10",
            "bash",
            "-s",
        ]

    def test_command_without_key_file(self, tmp_path):
        cmd = SSHService(self.server(tmp_path / "missing")).build_command()

        assert "-i" not in cmd

    def test_script_streamed_on_stdin(self, tmp_path):
        with patch("deploy_setup.services.ssh_service.subprocess.run", return_value=completed()) as run:
            result = SSHService(self.server(tmp_path / "missing")).run_script("echo hi\n")

        assert result.returncode == 0
        assert result.user == "deploy"
        assert run.call_args.kwargs["input"] == "echo hi\n"

    def test_connection_failure(self, tmp_path):
        with patch("deploy_setup.services.ssh_service.subprocess.run", return_value=completed(255)):
            with pytest.raises(SSHError, match="Could not connect"):
                SSHService(self.server(tmp_path / "missing")).run_script("true")

    def test_script_failure(self, tmp_path):
        with patch("deploy_setup.services.ssh_service.subprocess.run", return_value=completed(2)):
            with pytest.raises(SSHError, match="exit code 2"):
                SSHService(self.server(tmp_path / "missing")).run_script("false")


class TestGitService:
    def test_commit_reports_nothing_to_commit(self, tmp_path):
        results = [completed(), completed(1, stdout="nothing to commit")]
        with patch("deploy_setup.utils.subprocess.run", side_effect=results) as run:
            assert GitService(tmp_path).commit_all() is False

        assert run.call_args_list[0].args[0] == ["git", "add", "."]
        assert run.call_args_list[1].args[0] == [
            "git",
            "commit",
            "-m",
            "add CI/CD config (deploy-setup)",
        ]

    def test_push_failure(self, tmp_path):
        with patch("deploy_setup.utils.subprocess.run", return_value=completed(1, stderr="rejected")):
            with pytest.raises(DeploymentError) as exc:
                GitService(tmp_path).push("main")

        assert exc.value.context == "rejected"

    def test_missing_git_binary(self, tmp_path):
        with patch("deploy_setup.utils.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(DeploymentError):
                GitService(tmp_path).push("main")


class TestGitHubCLI:
    @pytest.mark.parametrize(
        "platform, program",
        [("win32", "winget"), ("darwin", "brew"), ("linux", "bash")],
    )
    def test_install_command(self, platform, program):
        assert install_command(platform)[0] == program

    def test_not_installed(self, tmp_path):
        with patch("deploy_setup.services.github_service.subprocess.run", side_effect=FileNotFoundError):
            assert GitHubCLI(tmp_path).is_installed() is False

    def test_install_failure(self, tmp_path):
        with patch("deploy_setup.services.github_service.subprocess.run", return_value=completed(1)):
            assert GitHubCLI(tmp_path).install("darwin") is False

    def test_set_secret_uses_stdin(self, tmp_path):
        with patch("deploy_setup.services.github_service.subprocess.run", return_value=completed()) as run:
            GitHubCLI(tmp_path).set_secret("SERVER_HOST", "203.0.113.10")

        assert run.call_args.args[0] == ["gh", "secret", "set", "SERVER_HOST"]
        assert run.call_args.kwargs["input"] == "203.0.113.10"
        assert run.call_args.kwargs["cwd"] == tmp_path

    def test_set_secret_failure(self, tmp_path):
        with patch(
            "deploy_setup.services.github_service.subprocess.run",
            return_value=completed(1, stderr="HTTP 403"),
        ):
            with pytest.raises(SecretError):
                GitHubCLI(tmp_path).set_secret("SERVER_HOST", "x")

    def test_latest_run(self, tmp_path):
        output = json.dumps([{"status": "completed", "conclusion": "success", "name": "Deploy"}])
        with patch("deploy_setup.services.github_service.subprocess.run", return_value=completed(stdout=output)):
            run = GitHubCLI(tmp_path).latest_run()

        assert run.is_completed
        assert run.conclusion == "success"
        assert run.name == "Deploy"

    def test_latest_run_in_progress_has_no_conclusion(self, tmp_path):
        output = json.dumps([{"status": "in_progress", "conclusion": None, "name": "Deploy"}])
        with patch("deploy_setup.services.github_service.subprocess.run", return_value=completed(stdout=output)):
            run = GitHubCLI(tmp_path).latest_run()

        assert not run.is_completed
        assert run.conclusion == ""

    def test_no_runs(self, tmp_path):
        with patch("deploy_setup.services.github_service.subprocess.run", return_value=completed(stdout="[]")):
            assert GitHubCLI(tmp_path).latest_run() is None

    @pytest.mark.parametrize("result", [completed(1, stderr="not a repo"), completed(stdout="oops")])
    def test_latest_run_errors(self, tmp_path, result):
        with patch("deploy_setup.services.github_service.subprocess.run", return_value=result):
            with pytest.raises(GitHubCLIError):
                GitHubCLI(tmp_path).latest_run()
