"""
Gate checks.

Cheap, offline checks on the request itself. Each either reports a Fatal
problem that makes issuance impossible or is not applicable.

Checkers:
- ValidMethodChecker: the method is one acmecheck knows
- ValidDomainChecker: the name is a syntactically valid DNS name
- TlsSniDisabledChecker: TLS-SNI methods are no longer offered
- WildcardDns01OnlyChecker: wildcard names need dns-01
"""

from __future__ import annotations

import ipaddress
import re
from typing import TYPE_CHECKING

from acmecheck.checkers.base import BaseChecker
from acmecheck.domain.models import VALID_METHODS, Severity, ValidationMethod, is_valid_method
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.engine.context import ScanContext


class ValidMethodChecker(BaseChecker):
    """Rejects validation methods outside the known set."""

    description = "The validation method is a known ACME challenge type"

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if is_valid_method(method):
            return CheckResult.not_applicable()

        return CheckResult.success(
            [
                self._problem(
                    "InvalidMethod",
                    f'"{method}" is not a supported validation method.',
                    detail=f"Supported methods: {', '.join(sorted(VALID_METHODS))}",
                    severity=Severity.FATAL,
                )
            ]
        )


class ValidDomainChecker(BaseChecker):
    """
    Rejects names that a CA would refuse on syntax alone.

    Only the shape of the name is checked here. Whether it resolves is
    the business of the DNS checks.
    """

    description = "The domain is a syntactically valid, non-IP DNS name"

    MAX_LENGTH = 253
    LABEL_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        reason = self.syntax_error(domain)
        if reason is None:
            return CheckResult.not_applicable()

        return CheckResult.success(
            [
                self._problem(
                    "InvalidDomain",
                    f'"{domain}" is not a valid domain name that a certificate can be issued for.',
                    detail=reason,
                    severity=Severity.FATAL,
                )
            ]
        )

    @classmethod
    def syntax_error(cls, domain: str) -> str | None:
        """Return why a name is invalid, or None if it is fine."""
        name = domain.strip().lower().rstrip(".")
        if not name:
            return "The domain name is empty."
        if len(name) > cls.MAX_LENGTH:
            return f"The name is {len(name)} characters long; the limit is {cls.MAX_LENGTH}."

        try:
            ipaddress.ip_address(name.strip("[]"))
        except ValueError:
            pass
        else:
            return "IP addresses cannot be validated with these methods."

        labels = name.split(".")
        if labels[0] == "*":
            labels = labels[1:]
        if any("*" in label for label in labels):
            return "A wildcard may only appear as the entire leftmost label."
        if len(labels) < 2:
            return "The name must have at least two labels, e.g., example.com."

        for label in labels:
            if not cls.LABEL_PATTERN.match(label):
                return (
                    f'"{label}" is not a valid label: use 1-63 letters, digits or hyphens, '
                    "not starting or ending with a hyphen (encode IDNs as punycode)."
                )

        tld = labels[-1]
        if not (tld.isalpha() or tld.startswith("xn--")):
            return f'"{tld}" is not a valid top-level domain.'
        return None


class TlsSniDisabledChecker(BaseChecker):
    """TLS-SNI-01 and TLS-SNI-02 are known methods that are no longer allowed."""

    description = "The TLS-SNI validation methods have been removed"

    DISABLED = frozenset({ValidationMethod.TLS_SNI_01.value, ValidationMethod.TLS_SNI_02.value})

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if method not in self.DISABLED:
            return CheckResult.not_applicable()

        return CheckResult.success(
            [
                self._problem(
                    "TLSSNIRemoved",
                    f"The {method} validation method has been disabled because of a "
                    "security vulnerability and can no longer be used.",
                    detail="Switch to http-01, dns-01 or tls-alpn-01.",
                    severity=Severity.FATAL,
                )
            ]
        )


class WildcardDns01OnlyChecker(BaseChecker):
    """Wildcard certificates can only be validated over DNS."""

    description = "Wildcard names are only validated with dns-01"

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if not domain.startswith("*.") or method == ValidationMethod.DNS_01.value:
            return CheckResult.not_applicable()

        return CheckResult.success(
            [
                self._problem(
                    "MethodNotSuitable",
                    f"A wildcard domain like {domain} can only be validated with dns-01, "
                    f"not {method}.",
                    detail="Request the certificate using the dns-01 challenge.",
                    severity=Severity.FATAL,
                )
            ]
        )
