"""
Checker results.

A checker reports one of three outcomes. NOT_APPLICABLE is a distinct
variant rather than an error, so it can never be mistaken for a failure.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from acmecheck.domain.models import Problem


class Outcome(str, Enum):
    """How a checker invocation ended."""

    SUCCESS = "success"
    NOT_APPLICABLE = "not-applicable"
    FAILURE = "failure"


class CheckResult(BaseModel):
    """
    The result of a single checker invocation.

    Use the ``success``, ``not_applicable`` and ``failure`` constructors
    rather than building instances by hand.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    outcome: Outcome = Field(..., description="How the check ended")
    problems: tuple[Problem, ...] = Field(
        default=(), description="Problems found, in the order they were produced"
    )
    error: BaseException | None = Field(
        default=None, description="The malfunction, set only for FAILURE"
    )

    @model_validator(mode="after")
    def _error_matches_outcome(self) -> CheckResult:
        if self.outcome is Outcome.FAILURE and self.error is None:
            raise ValueError("a FAILURE result requires an error")
        if self.outcome is not Outcome.FAILURE and self.error is not None:
            raise ValueError(f"a {self.outcome.value} result cannot carry an error")
        return self

    @classmethod
    def success(cls, problems: Iterable[Problem] = ()) -> CheckResult:
        return cls(outcome=Outcome.SUCCESS, problems=tuple(problems))

    @classmethod
    def not_applicable(cls, problems: Iterable[Problem] = ()) -> CheckResult:
        return cls(outcome=Outcome.NOT_APPLICABLE, problems=tuple(problems))

    @classmethod
    def failure(cls, error: BaseException, problems: Iterable[Problem] = ()) -> CheckResult:
        return cls(outcome=Outcome.FAILURE, problems=tuple(problems), error=error)

    @property
    def failed(self) -> bool:
        """Whether the check itself could not be completed."""
        return self.outcome is Outcome.FAILURE

    @property
    def clean(self) -> bool:
        """Completed and found nothing. Never true for a failure."""
        return not self.failed and not self.problems

    @property
    def has_findings(self) -> bool:
        """Completed and found at least one problem."""
        return not self.failed and bool(self.problems)
