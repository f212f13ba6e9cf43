"""
Domain models for acmecheck.

This module contains the core values exchanged between checkers:
validation methods, problem severities and the problems themselves.
All models are Pydantic v2 for validation and serialization.

The domain layer has ZERO external dependencies beyond Pydantic.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidationMethod(str, Enum):
    """ACME challenge methods known to acmecheck."""

    HTTP_01 = "http-01"
    DNS_01 = "dns-01"
    TLS_SNI_01 = "tls-sni-01"
    TLS_SNI_02 = "tls-sni-02"

    def __str__(self) -> str:
        return self.value


# Explicit membership table. Known is not the same as allowed: the TLS-SNI
# methods are valid here and rejected later by TlsSniDisabledChecker.
VALID_METHODS: frozenset[str] = frozenset(
    {
        ValidationMethod.HTTP_01.value,
        ValidationMethod.DNS_01.value,
        ValidationMethod.TLS_SNI_01.value,
        ValidationMethod.TLS_SNI_02.value,
    }
)


def is_valid_method(method: Any) -> bool:
    """
    Check whether a value names a known validation method.

    Total and side-effect free: anything that is not exactly one of the
    four method literals (including near misses such as "http-02", the
    empty string and non-string values) returns False.
    """
    if isinstance(method, ValidationMethod):
        return True
    if not isinstance(method, str):
        return False
    return method in VALID_METHODS


class Severity(str, Enum):
    """How serious a problem is for certificate issuance."""

    FATAL = "Fatal"  # Issuance will fail
    ERROR = "Error"  # Issuance will very likely fail
    WARNING = "Warning"  # Issuance may fail or behave unexpectedly
    DEBUG = "Debug"  # Informational only

    def _get_order(self) -> int:
        order = [Severity.DEBUG, Severity.WARNING, Severity.ERROR, Severity.FATAL]
        return order.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self._get_order() < other._get_order()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self._get_order() <= other._get_order()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self._get_order() > other._get_order()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self._get_order() >= other._get_order()


class Problem(BaseModel):
    """
    A diagnostic finding produced by a checker.

    Problems are immutable and are passed around as plain values. The
    engine concatenates them and never deduplicates or reorders them.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Problem identifier, e.g., CAAIssuanceNotAllowed",
        pattern=r"^[A-Z][A-Za-z0-9]*$",
    )
    explanation: str = Field(..., description="Human-readable explanation", min_length=1)
    detail: str = Field(default="", description="Supporting detail, e.g., DNS records seen")
    severity: Severity = Field(..., description="Severity level of the problem")

    @property
    def blocking(self) -> bool:
        """Whether this problem is expected to prevent issuance."""
        return self.severity >= Severity.ERROR
