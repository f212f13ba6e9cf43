"""
Checkers for acmecheck.

Each checker is an independent, testable unit that looks at one aspect
of a domain's readiness for a validation method.
"""

from acmecheck.checkers.base import BaseChecker, Checker
from acmecheck.checkers.gates import (
    TlsSniDisabledChecker,
    ValidDomainChecker,
    ValidMethodChecker,
    WildcardDns01OnlyChecker,
)
from acmecheck.checkers.caa import CaaChecker
from acmecheck.checkers.dns import DnsAChecker, TxtRecordChecker
from acmecheck.checkers.http import CloudflareChecker, HttpAccessibilityChecker
from acmecheck.checkers.status import StatusPageChecker
from acmecheck.checkers.ratelimit import RateLimitChecker

__all__ = [
    # Base
    "BaseChecker",
    "Checker",
    # Gates
    "ValidMethodChecker",
    "ValidDomainChecker",
    "TlsSniDisabledChecker",
    "WildcardDns01OnlyChecker",
    # DNS
    "CaaChecker",
    "DnsAChecker",
    "TxtRecordChecker",
    # HTTP
    "HttpAccessibilityChecker",
    "CloudflareChecker",
    # Third-party services
    "StatusPageChecker",
    "RateLimitChecker",
]
