"""
Domain layer for acmecheck.

Contains all core data structures with zero external dependencies
beyond Pydantic.
"""

from acmecheck.domain.models import (
    VALID_METHODS,
    Problem,
    Severity,
    ValidationMethod,
    is_valid_method,
)
from acmecheck.domain.result import CheckResult, Outcome
from acmecheck.domain.report import ScanReport, ScanSummary
from acmecheck.domain.exceptions import (
    AcmeCheckError,
    CheckerError,
    CheckerFaultError,
    ConfigError,
    LookupFailedError,
)

__all__ = [
    # Models
    "VALID_METHODS",
    "Problem",
    "Severity",
    "ValidationMethod",
    "is_valid_method",
    # Results
    "CheckResult",
    "Outcome",
    # Reports
    "ScanReport",
    "ScanSummary",
    # Exceptions
    "AcmeCheckError",
    "CheckerError",
    "CheckerFaultError",
    "ConfigError",
    "LookupFailedError",
]
