"""
Checker pipeline.

An ordered, immutable sequence of checkers that is itself a checker.
Pipelines are built explicitly with ``build_default_pipeline`` rather
than registered globally, so several can coexist.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Iterable, Iterator

from acmecheck.domain.models import Problem
from acmecheck.domain.result import CheckResult
from acmecheck.engine.group import ConcurrentCheckerGroup, run_contained

if TYPE_CHECKING:
    from acmecheck.checkers.base import Checker
    from acmecheck.engine.context import ScanContext

logger = logging.getLogger(__name__)


class CheckerPipeline:
    """
    Runs checkers one after another in insertion order.

    Problems are accumulated in order. NOT_APPLICABLE entries contribute
    their problems and are otherwise skipped. The first failing entry
    stops the pipeline; its own partial problems (a group may have
    gathered some) are kept along with everything before it. Whether a
    Fatal problem should stop later checks is left to the caller.
    """

    def __init__(self, checkers: Iterable[Checker], name: str = "CheckerPipeline") -> None:
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
        problems: list[Problem] = []

        for checker in self._checkers:
            start_time = time.perf_counter()
            result = run_contained(checker, ctx, domain, method)
            logger.debug(
                "%s: %s -> %s in %.1fms",
                self._name,
                checker.name,
                result.outcome.value,
                (time.perf_counter() - start_time) * 1000,
            )

            problems.extend(result.problems)
            if result.failed:
                return CheckResult.failure(result.error, problems)

        return CheckResult.success(problems)

    def __repr__(self) -> str:
        return f"<{self._name} ({len(self._checkers)} entries)>"


def build_default_pipeline() -> CheckerPipeline:
    """
    Assemble the standard diagnosis pipeline.

    The gates run first, then the DNS address check, then the checks that
    are independent of each other run together in one concurrent group.
    Each call returns a new pipeline with fresh checker instances.
    """
    from acmecheck.checkers import (
        CaaChecker,
        CloudflareChecker,
        DnsAChecker,
        HttpAccessibilityChecker,
        RateLimitChecker,
        StatusPageChecker,
        TlsSniDisabledChecker,
        TxtRecordChecker,
        ValidDomainChecker,
        ValidMethodChecker,
        WildcardDns01OnlyChecker,
    )

    return CheckerPipeline(
        [
            # Show-stopping checks
            ValidMethodChecker(),
            ValidDomainChecker(),
            TlsSniDisabledChecker(),
            WildcardDns01OnlyChecker(),
            CaaChecker(),
            # Others
            DnsAChecker(),
            ConcurrentCheckerGroup(
                [
                    HttpAccessibilityChecker(),
                    CloudflareChecker(),
                    StatusPageChecker(),
                    TxtRecordChecker(),
                    RateLimitChecker(),
                ]
            ),
        ]
    )
