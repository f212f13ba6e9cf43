"""
Scan driver.

Runs a checker pipeline for one domain and method and turns the result
into a scan report.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from acmecheck.domain.models import ValidationMethod
from acmecheck.domain.report import ScanReport, ScanSummary
from acmecheck.engine.context import ScanContext
from acmecheck.engine.group import run_contained
from acmecheck.engine.pipeline import build_default_pipeline

if TYPE_CHECKING:
    from acmecheck.checkers.base import Checker
    from acmecheck.config import Settings

logger = logging.getLogger(__name__)


def normalize_domain(domain: str) -> str:
    """Strip whitespace and the trailing dot, and lowercase."""
    return domain.strip().rstrip(".").lower()


def diagnose(
    domain: str,
    method: str | ValidationMethod = ValidationMethod.HTTP_01,
    pipeline: Checker | None = None,
    context: ScanContext | None = None,
    settings: Settings | None = None,
) -> ScanReport:
    """
    Diagnose whether a domain is ready for a validation method.

    This is the primary public API.

    Args:
        domain: Domain name to diagnose, e.g., "example.com" or "*.example.com".
        method: Validation method, e.g., "http-01".
        pipeline: Checker to run. Defaults to a new default pipeline.
        context: Scan context to share. A new one is created if omitted.
        settings: Settings for a newly created context.

    Returns:
        ScanReport whose ``outcome`` is "failed", "clean" or "findings".

    Example:
        >>> report = diagnose("example.com", "http-01")
        >>> if not report.passed:
        ...     sys.exit(report.exit_code)
    """
    name = normalize_domain(domain)
    method_value = method.value if isinstance(method, ValidationMethod) else str(method).strip()
    checker = pipeline if pipeline is not None else build_default_pipeline()
    ctx = context if context is not None else ScanContext(settings=settings)

    logger.info("[%s] diagnosing %s for %s", ctx.scan_id, name, method_value)
    start_time = time.perf_counter()

    result = run_contained(checker, ctx, name, method_value)

    duration_ms = (time.perf_counter() - start_time) * 1000
    error = None
    if result.failed:
        error = str(result.error)
        logger.info("[%s] diagnosis failed: %s", ctx.scan_id, error)

    # Most severe first, for display. Stable, so checker order is kept within a severity.
    problems = sorted(result.problems, key=lambda p: p.severity, reverse=True)

    return ScanReport(
        scan_id=ctx.scan_id,
        domain=name,
        method=method_value,
        duration_ms=duration_ms,
        summary=ScanSummary.from_problems(problems),
        problems=problems,
        error=error,
        metadata={
            "checker": checker.name,
            "outcome": result.outcome.value,
        },
    )
