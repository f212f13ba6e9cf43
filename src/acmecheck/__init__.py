"""
acmecheck — ACME challenge readiness diagnostics

Checks whether a domain is ready to obtain a certificate with a given
ACME validation method, and reports actionable problems.

Usage:
    # CLI
    $ acmecheck check example.com --method http-01

    # Python API
    from acmecheck import diagnose

    report = diagnose("example.com", "http-01")
    print(report.outcome, report.summary)

    # Composing checkers
    from acmecheck import CheckerPipeline, ConcurrentCheckerGroup
"""

from acmecheck.domain.models import (
    Problem,
    Severity,
    ValidationMethod,
    is_valid_method,
)
from acmecheck.domain.result import CheckResult, Outcome
from acmecheck.domain.report import ScanReport, ScanSummary
from acmecheck.engine.context import ScanContext
from acmecheck.engine.group import ConcurrentCheckerGroup
from acmecheck.engine.pipeline import CheckerPipeline, build_default_pipeline
from acmecheck.engine.scanner import diagnose

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Problem",
    "Severity",
    "ValidationMethod",
    "is_valid_method",
    "CheckResult",
    "Outcome",
    # Reports
    "ScanReport",
    "ScanSummary",
    # Engine
    "ScanContext",
    "ConcurrentCheckerGroup",
    "CheckerPipeline",
    "build_default_pipeline",
    "diagnose",
]
