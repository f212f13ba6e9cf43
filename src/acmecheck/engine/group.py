"""
Concurrent checker group.

Runs a fixed set of independent checkers in parallel and presents the
aggregate through the ordinary Checker interface, so callers cannot tell
a group from a single check.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Iterable, Iterator

from acmecheck.domain.exceptions import CheckerFaultError
from acmecheck.domain.models import Problem
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.checkers.base import Checker
    from acmecheck.engine.context import ScanContext

logger = logging.getLogger(__name__)


def run_contained(checker: Checker, ctx: ScanContext, domain: str, method: str) -> CheckResult:
    """
    Invoke a checker, turning anything it raises into a FAILURE result.

    An exception never unwinds past this call. The original exception is
    kept as the ``__cause__`` of the CheckerFaultError.
    """
    try:
        result = checker.check(ctx, domain, method)
        if not isinstance(result, CheckResult):
            raise TypeError(f"expected CheckResult, got {type(result).__name__}")
        return result
    except Exception as e:
        return _fault(checker, domain, method, e)


def _run_member(checker: Checker, ctx: ScanContext, domain: str, method: str) -> CheckResult:
    """
    Worker body for a group member.

    Also contains BaseException (SystemExit, KeyboardInterrupt) so that
    nothing a member raises is re-raised by ``future.result()``.
    """
    try:
        return run_contained(checker, ctx, domain, method)
    except BaseException as e:
        return _fault(checker, domain, method, e)


def _fault(checker: Checker, domain: str, method: str, error: BaseException) -> CheckResult:
    name = getattr(checker, "name", type(checker).__name__)
    logger.warning("Checker %s crashed on %s (%s)", name, domain, method, exc_info=error)
    fault = CheckerFaultError(name, error)
    fault.__cause__ = error
    return CheckResult.failure(fault)


class ConcurrentCheckerGroup:
    """
    A checker composed of checkers that can run simultaneously.

    Every invocation starts one worker thread per member. Problems are
    collected in completion order, each member's problems kept together.
    The first member failure ends the call at once with the problems
    gathered so far; members still running are left to finish and their
    results are dropped. There is no timeout here: a hung member hangs
    the call.
    """

    def __init__(self, checkers: Iterable[Checker], name: str = "ConcurrentCheckerGroup") -> None:
        """
        Initialize the group.

        Args:
            checkers: Members to run. The order is kept but does not
                determine the order of the aggregated problems.
            name: Identifier used in logs and listings.
        """
        self._checkers: tuple[Checker, ...] = tuple(checkers)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def checkers(self) -> tuple[Checker, ...]:
        return self._checkers

    def __iter__(self) -> Iterator[Checker]:
        return iter(self._checkers)

    def __len__(self) -> int:
        return len(self._checkers)

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if not self._checkers:
            return CheckResult.success()

        start_time = time.perf_counter()
        problems: list[Problem] = []

        executor = ThreadPoolExecutor(
            max_workers=len(self._checkers),
            thread_name_prefix="acmecheck-group",
        )
        try:
            futures = {
                executor.submit(_run_member, checker, ctx, domain, method): checker
                for checker in self._checkers
            }

            for future in as_completed(futures):
                result = future.result()
                if result.failed:
                    logger.info(
                        "%s: %s failed, abandoning %d pending member(s): %s",
                        self._name,
                        futures[future].name,
                        sum(1 for f in futures if not f.done()),
                        result.error,
                    )
                    return CheckResult.failure(result.error, problems)
                problems.extend(result.problems)
        finally:
            # Never wait here: on failure, stragglers finish on their own.
            executor.shutdown(wait=False)

        logger.debug(
            "%s: %d member(s) finished in %.1fms",
            self._name,
            len(self._checkers),
            (time.perf_counter() - start_time) * 1000,
        )
        return CheckResult.success(problems)

    def __repr__(self) -> str:
        members = ", ".join(getattr(c, "name", repr(c)) for c in self._checkers)
        return f"<{self._name} [{members}]>"
