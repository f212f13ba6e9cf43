"""
CAA policy check.

Finds the CAA record set that governs the name (the first non-empty set
walking up from the name towards the root) and decides whether it lets
the configured certificate authority issue for this method.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from acmecheck.checkers.base import BaseChecker
from acmecheck.checkers.gates import ValidDomainChecker
from acmecheck.domain.exceptions import LookupFailedError
from acmecheck.domain.models import Severity
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.engine.context import ScanContext

logger = logging.getLogger(__name__)

KNOWN_TAGS = frozenset({"issue", "issuewild", "iodef"})
CRITICAL_FLAG = 128


@dataclass(frozen=True)
class CaaRecord:
    flags: int
    tag: str
    value: str
    raw: str

    @property
    def critical(self) -> bool:
        return bool(self.flags & CRITICAL_FLAG)

    @property
    def issuer(self) -> str:
        # Parameters such as accounturi= follow the issuer after ';'
        return self.value.split(";", 1)[0].strip().lower()

    @property
    def parameters(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if ";" not in self.value:
            return params
        for part in self.value.split(";")[1:]:
            key, sep, val = part.strip().partition("=")
            if sep:
                params[key.strip().lower()] = val.strip()
        return params


@dataclass
class CaaPolicy:
    """The record set that applies to a name and where it was found."""

    zone: str
    records: list[CaaRecord] = field(default_factory=list)


def parse_caa(rdata_text: str) -> CaaRecord | None:
    """Parse presentation format, e.g. ``0 issue "letsencrypt.org"``."""
    parts = rdata_text.split(None, 2)
    if len(parts) < 3:
        return None
    try:
        flags = int(parts[0])
    except ValueError:
        return None
    value = parts[2].strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return CaaRecord(flags=flags, tag=parts[1].strip().lower(), value=value, raw=rdata_text)


class CaaChecker(BaseChecker):
    """
    Checks that CAA records permit issuance.

    Applies to every method, but not to names ValidDomainChecker
    rejects. The issuewild property takes precedence for wildcard names
    when present; the validationmethods parameter restricts which
    challenge types a matching record allows.
    """

    description = "CAA records allow the certificate authority to issue"

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if ValidDomainChecker.syntax_error(domain) is not None:
            return CheckResult.not_applicable()

        wildcard = domain.startswith("*.")
        name = domain[2:] if wildcard else domain

        try:
            policy = self.find_policy(ctx, name)
        except LookupFailedError as e:
            return CheckResult.success(
                [
                    self._problem(
                        "CAALookupFailed",
                        f"The CAA records for {e.name} could not be looked up. A certificate "
                        "authority must refuse to issue when this lookup fails.",
                        detail=e.reason,
                        severity=Severity.FATAL,
                    )
                ]
            )

        if not policy.records:
            return CheckResult.success()

        detail = "\n".join(f"{policy.zone}. CAA {r.raw}" for r in policy.records)

        unknown = [r for r in policy.records if r.critical and r.tag not in KNOWN_TAGS]
        if unknown:
            return CheckResult.success(
                [
                    self._problem(
                        "CAACriticalUnknown",
                        f"The CAA records at {policy.zone} carry a critical property "
                        f"({', '.join(sorted({r.tag for r in unknown}))}) that certificate "
                        "authorities do not understand, so issuance is forbidden.",
                        detail=detail,
                        severity=Severity.FATAL,
                    )
                ]
            )

        if self.allows(policy, ctx.settings.caa_identities, method, wildcard):
            return CheckResult.success()

        identities = ", ".join(ctx.settings.caa_identities)
        return CheckResult.success(
            [
                self._problem(
                    "CAAIssuanceNotAllowed",
                    f"No CAA record at {policy.zone} allows {identities} to issue "
                    f"{'a wildcard ' if wildcard else ''}certificate for {domain} using {method}.",
                    detail=detail,
                    severity=Severity.FATAL,
                )
            ]
        )

    def find_policy(self, ctx: ScanContext, name: str) -> CaaPolicy:
        """
        Walk up the labels of a name and return the first non-empty CAA set.

        Raises:
            LookupFailedError: If any lookup on the way fails.
        """
        labels = [x for x in name.lower().rstrip(".").split(".") if x]
        for i in range(len(labels)):
            zone = ".".join(labels[i:])
            parsed = [p for p in (parse_caa(x) for x in ctx.lookup(zone, "CAA")) if p]
            if parsed:
                logger.debug("CAA for %s found at %s: %d record(s)", name, zone, len(parsed))
                return CaaPolicy(zone=zone, records=parsed)
        return CaaPolicy(zone="")

    @staticmethod
    def allows(policy: CaaPolicy, identities: list[str], method: str, wildcard: bool) -> bool:
        issue = [r for r in policy.records if r.tag == "issue"]
        issuewild = [r for r in policy.records if r.tag == "issuewild"]
        relevant = issuewild if wildcard and issuewild else issue

        # Only iodef (or nothing relevant): no restriction on issuers
        if not relevant:
            return True

        for record in relevant:
            if record.issuer not in identities:
                continue
            methods = record.parameters.get("validationmethods")
            if methods is not None and method not in [m.strip() for m in methods.split(",")]:
                continue
            return True
        return False
