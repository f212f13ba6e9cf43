"""
DNS record checks.

Checkers:
- DnsAChecker: the name resolves to public addresses (http-01, tls-sni-*)
- TxtRecordChecker: the _acme-challenge TXT name is resolvable (dns-01)
"""

from __future__ import annotations

import ipaddress
import logging
from typing import TYPE_CHECKING

from acmecheck.checkers.base import BaseChecker
from acmecheck.checkers.gates import ValidDomainChecker
from acmecheck.domain.exceptions import CheckerError, LookupFailedError
from acmecheck.domain.models import Problem, Severity, ValidationMethod
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.engine.context import ScanContext

logger = logging.getLogger(__name__)


def is_reserved_address(address: str) -> bool:
    """Whether an address is not publicly routable."""
    ip = ipaddress.ip_address(address)
    return (
        ip.is_private
        or ip.is_reserved
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_multicast
        or ip.is_unspecified
    )


class DnsAChecker(BaseChecker):
    """
    Checks the A and AAAA records the CA will connect to.

    Not applicable to dns-01, to wildcard names or to names that
    ValidDomainChecker rejects. If the A lookup itself fails nothing
    useful can be said about reachability, so the check fails rather
    than reporting a problem.
    """

    description = "The domain has public A or AAAA records"

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if method == ValidationMethod.DNS_01.value or domain.startswith("*."):
            return CheckResult.not_applicable()
        if ValidDomainChecker.syntax_error(domain) is not None:
            return CheckResult.not_applicable()

        problems: list[Problem] = []

        try:
            a_records = ctx.lookup(domain, "A")
        except LookupFailedError as e:
            return CheckResult.failure(CheckerError(e.message, checker=self.name))

        try:
            aaaa_records = ctx.lookup(domain, "AAAA")
        except LookupFailedError as e:
            aaaa_records = []
            problems.append(
                self._problem(
                    "AAAALookupFailed",
                    f"The AAAA records for {domain} could not be looked up. The certificate "
                    "authority prefers IPv6 and may fail validation.",
                    detail=e.reason,
                    severity=Severity.WARNING,
                )
            )

        addresses = a_records + aaaa_records
        if not addresses:
            problems.append(
                self._problem(
                    "NoRecords",
                    f"No A or AAAA records were found for {domain}.",
                    detail="The certificate authority needs an address to connect to for "
                    f"{method} validation.",
                    severity=Severity.FATAL,
                )
            )
            return CheckResult.success(problems)

        reserved = [a for a in addresses if is_reserved_address(a)]
        if reserved:
            problems.append(
                self._problem(
                    "ReservedAddress",
                    f"{domain} resolves to addresses that are not publicly routable, so "
                    "the certificate authority cannot reach them.",
                    detail="\n".join(reserved),
                    severity=Severity.FATAL,
                )
            )

        logger.debug("%s resolves to %s", domain, addresses)
        return CheckResult.success(problems)


class TxtRecordChecker(BaseChecker):
    """Checks the dns-01 challenge name for lookup errors and leftover records."""

    description = "The _acme-challenge TXT records can be resolved"

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if method != ValidationMethod.DNS_01.value:
            return CheckResult.not_applicable()
        if ValidDomainChecker.syntax_error(domain) is not None:
            return CheckResult.not_applicable()

        base = domain[2:] if domain.startswith("*.") else domain
        challenge_name = f"_acme-challenge.{base}"

        try:
            records = ctx.lookup(challenge_name, "TXT")
        except LookupFailedError as e:
            return CheckResult.success(
                [
                    self._problem(
                        "TXTRecordError",
                        f"The TXT records at {challenge_name} could not be looked up, so "
                        "dns-01 validation will fail.",
                        detail=e.reason,
                        severity=Severity.ERROR,
                    )
                ]
            )

        if not records:
            return CheckResult.success()

        return CheckResult.success(
            [
                self._problem(
                    "TXTRecordsPresent",
                    f"There are {len(records)} TXT record(s) at {challenge_name}. Stale "
                    "records are harmless but are usually left over from earlier attempts.",
                    detail="\n".join(records),
                    severity=Severity.DEBUG,
                )
            ]
        )
