"""
DNS check - verify the configured domain points at the server
"""

from typing import Optional

import click

from deploy_setup.base import ProjectCommand
from deploy_setup.models.results import DNSCheckResult, DNSStatus
from deploy_setup.services.dns_service import DNSService


class CheckDnsCommand(ProjectCommand):
    """Resolve the domain's A records. Purely informative, never fails."""

    command_name = "check-dns"

    def __init__(self, *args, dns_service: Optional[DNSService] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.dns_service = dns_service or DNSService()

    def execute(self) -> DNSCheckResult:
        config = self.load_config()
        self.show_header(title="Check DNS", project=config.project.name)

        if not config.domain.enabled:
            self.logger.warning("No domain configured, skipping DNS check")
            return DNSCheckResult(status=DNSStatus.SKIPPED)

        self.logger.step(f"Checking DNS: {config.domain.name} → {config.server.host}")
        result = self.dns_service.check(config)

        if result.status == DNSStatus.MATCH:
            self.logger.success(
                f"DNS OK: {result.domain} → {', '.join(result.addresses)}"
            )
        elif result.status == DNSStatus.MISMATCH:
            self.logger.warning(
                f"DNS mismatch (current: {', '.join(result.addresses) or 'none'}, "
                f"expected: {result.expected_ip})"
            )
            self.logger.warning("Deployment will continue, but the domain may not work yet")
        else:
            self.logger.warning(f"DNS lookup failed: {result.error}, skipping")

        return result


@click.command(name="check-dns")
@click.option(
    "--dir",
    "-d",
    "project_dir",
    default=".",
    type=click.Path(exists=True, file_okay=False),
    help="Project directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def check_dns(project_dir, verbose):
    """Check that the domain resolves to the server"""
    cmd = CheckDnsCommand(project_dir, verbose=verbose)
    cmd.run()
