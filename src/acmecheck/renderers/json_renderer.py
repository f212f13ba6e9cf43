"""
JSON renderer for acmecheck.

Outputs machine-readable scan reports.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from acmecheck.domain.report import ScanReport


class JsonRenderer:
    """Renders scan reports as JSON."""

    def __init__(self, indent: int = 2, include_metadata: bool = True) -> None:
        self.indent = indent
        self.include_metadata = include_metadata

    def render(self, report: ScanReport) -> str:
        """Render a scan report as a JSON string."""
        return json.dumps(self.to_dict(report), indent=self.indent, default=str)

    def to_dict(self, report: ScanReport) -> dict[str, Any]:
        """Convert a scan report to a dictionary."""
        result: dict[str, Any] = {
            "scan_id": report.scan_id,
            "scanned_at": report.scanned_at.isoformat(),
            "domain": report.domain,
            "method": report.method,
            "outcome": report.outcome,
            "passed": report.passed,
            "error": report.error,
            "summary": {
                "fatal": report.summary.fatal,
                "error": report.summary.error,
                "warning": report.summary.warning,
                "debug": report.summary.debug,
                "total": report.summary.total,
            },
            "problems": [
                {
                    "name": p.name,
                    "severity": p.severity.value,
                    "explanation": p.explanation,
                    "detail": p.detail,
                }
                for p in report.problems
            ],
        }

        if self.include_metadata:
            result["metadata"] = {
                "duration_ms": report.duration_ms,
                **report.metadata,
            }

        return result
