"""
Base checker infrastructure.

Defines the Checker protocol and the base class for all checks. A check
returns a CheckResult: SUCCESS with its problems, NOT_APPLICABLE when it
has nothing to say for this domain and method, or FAILURE when it could
not do its job.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from acmecheck.domain.models import Problem, Severity
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.engine.context import ScanContext


@runtime_checkable
class Checker(Protocol):
    """
    Protocol for everything that can diagnose a domain.

    Single checks, concurrent groups and whole pipelines all satisfy it,
    so any of them can be invoked the same way. Implementations must be
    safe to run concurrently with other checkers sharing a ScanContext.
    """

    @property
    def name(self) -> str:
        """Short identifier, e.g., CaaChecker."""
        ...

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        """
        Check a domain for one validation method.

        Args:
            ctx: Shared state for the current scan.
            domain: Normalized domain name, possibly a wildcard.
            method: Validation method literal, e.g., "http-01".

        Returns:
            The outcome of the check and any problems found.
        """
        ...


class BaseChecker:
    """
    Base class for checks.

    Subclasses implement `check()` and set `description`. Expected
    operational errors should be returned as `CheckResult.failure`;
    anything raised is treated as a crash by the engine.
    """

    description: str = ""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        """Check a domain for one validation method."""
        raise NotImplementedError

    def _problem(
        self,
        name: str,
        explanation: str,
        detail: str = "",
        severity: Severity = Severity.ERROR,
    ) -> Problem:
        """Helper to create a problem."""
        return Problem(name=name, explanation=explanation, detail=detail, severity=severity)

    def __repr__(self) -> str:
        return f"<{self.name}>"
