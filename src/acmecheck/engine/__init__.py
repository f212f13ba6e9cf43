"""
Engine layer for acmecheck.

Contains the scan context, checker composition and the scan driver.
"""

from acmecheck.engine.context import ScanContext
from acmecheck.engine.group import ConcurrentCheckerGroup, run_contained
from acmecheck.engine.pipeline import CheckerPipeline, build_default_pipeline
from acmecheck.engine.scanner import diagnose, normalize_domain

__all__ = [
    "ScanContext",
    "ConcurrentCheckerGroup",
    "run_contained",
    "CheckerPipeline",
    "build_default_pipeline",
    "diagnose",
    "normalize_domain",
]
