"""DNS verification for the configured domain."""

import dns.exception
import dns.resolver

from deploy_setup.models.project import CollectedConfig
from deploy_setup.models.results import DNSCheckResult, DNSStatus


class DNSService:
    """Resolves a domain's A records and compares them with the server host."""

    def __init__(self, resolver=None):
        self.resolver = resolver or dns.resolver

    def resolve_a(self, domain: str) -> list[str]:
        answer = self.resolver.resolve(domain, "A")
        return [str(record) for record in answer]

    def check(self, config: CollectedConfig) -> DNSCheckResult:
        """
        Check that the domain points at the server.

        Never raises for lookup problems: a failed lookup is reported as
        LOOKUP_FAILED so the pipeline can carry on.
        """
        if not config.domain.enabled or not config.domain.name:
            return DNSCheckResult(status=DNSStatus.SKIPPED)

        domain = config.domain.name
        expected_ip = config.server.host

        try:
            addresses = self.resolve_a(domain)
        except dns.exception.DNSException as e:
            return DNSCheckResult(
                status=DNSStatus.LOOKUP_FAILED,
                domain=domain,
                expected_ip=expected_ip,
                error=str(e) or type(e).__name__,
            )

        status = DNSStatus.MATCH if expected_ip in addresses else DNSStatus.MISMATCH
        return DNSCheckResult(
            status=status, domain=domain, expected_ip=expected_ip, addresses=addresses
        )
