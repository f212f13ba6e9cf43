"""
Scan report models.

These models represent the outcome of diagnosing one domain for one
validation method, including summary statistics and the problems found.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from acmecheck.domain.models import Problem, Severity


class ScanSummary(BaseModel):
    """Summary statistics for a scan."""

    model_config = ConfigDict(frozen=True)

    fatal: int = Field(default=0, ge=0, description="Number of Fatal problems")
    error: int = Field(default=0, ge=0, description="Number of Error problems")
    warning: int = Field(default=0, ge=0, description="Number of Warning problems")
    debug: int = Field(default=0, ge=0, description="Number of Debug problems")

    @property
    def total(self) -> int:
        """Total number of problems."""
        return self.fatal + self.error + self.warning + self.debug

    @property
    def has_blocking_problems(self) -> bool:
        """Whether there are Fatal or Error problems that will break issuance."""
        return self.fatal > 0 or self.error > 0

    @classmethod
    def from_problems(cls, problems: list[Problem] | tuple[Problem, ...]) -> ScanSummary:
        """Create a summary from a sequence of problems."""
        counts = {
            Severity.FATAL: 0,
            Severity.ERROR: 0,
            Severity.WARNING: 0,
            Severity.DEBUG: 0,
        }
        for problem in problems:
            counts[problem.severity] += 1

        return cls(
            fatal=counts[Severity.FATAL],
            error=counts[Severity.ERROR],
            warning=counts[Severity.WARNING],
            debug=counts[Severity.DEBUG],
        )


class ScanReport(BaseModel):
    """
    Complete scan report.

    A report is in exactly one of three states: the diagnosis itself
    failed (``error`` is set), the domain is clean, or problems were found.
    Zero problems never means "failed to check".
    """

    model_config = ConfigDict(frozen=True)

    scan_id: str = Field(
        default_factory=lambda: f"sc_{uuid4().hex[:12]}",
        description="Unique scan identifier",
    )
    scanned_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the scan was performed",
    )
    domain: str = Field(..., description="Domain that was diagnosed")
    method: str = Field(..., description="Validation method that was diagnosed")
    duration_ms: float = Field(default=0.0, ge=0, description="Scan duration in milliseconds")
    summary: ScanSummary = Field(
        default_factory=ScanSummary,
        description="Summary statistics",
    )
    problems: list[Problem] = Field(
        default_factory=list,
        description="All problems from the scan, most severe first",
    )
    error: str | None = Field(
        default=None,
        description="Why the diagnosis could not be completed, if it could not",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional scan metadata",
    )

    @property
    def outcome(self) -> str:
        """One of "failed", "clean" or "findings"."""
        if self.error is not None:
            return "failed"
        if not self.problems:
            return "clean"
        return "findings"

    @property
    def passed(self) -> bool:
        """Whether the scan completed with no blocking problems."""
        return self.error is None and not self.summary.has_blocking_problems

    @property
    def exit_code(self) -> int:
        """Exit code for CLI (0 = passed, 1 = blocking problems, 2 = diagnosis failed)."""
        if self.error is not None:
            return 2
        return 0 if self.passed else 1

    def problems_by_name(self, name: str) -> list[Problem]:
        """Get problems filtered by name."""
        return [p for p in self.problems if p.name == name]

    def to_json(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return self.model_dump(mode="json")
