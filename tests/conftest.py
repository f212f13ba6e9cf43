"""
Pytest configuration and shared fixtures for acmecheck tests.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

import httpx
import pytest

from acmecheck.checkers.base import BaseChecker
from acmecheck.config import Settings
from acmecheck.domain.exceptions import LookupFailedError
from acmecheck.domain.models import Problem, Severity
from acmecheck.domain.result import CheckResult
from acmecheck.engine.context import ScanContext


# --- Fakes ---

class FakeResolver:
    """
    In-memory resolver.

    ``records`` maps (name, rdtype) to a list of rdata strings, or to an
    exception instance to raise. Missing keys resolve to nothing.
    """

    def __init__(self, records: dict[tuple[str, str], Any] | None = None) -> None:
        self.records = records or {}
        self.queries: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def query(self, name: str, rdtype: str) -> list[str]:
        with self._lock:
            self.queries.append((name, rdtype))
        answer = self.records.get((name, rdtype), [])
        if isinstance(answer, Exception):
            raise answer
        return list(answer)


def lookup_failure(name: str, rdtype: str, reason: str = "no nameserver answered (SERVFAIL)") -> LookupFailedError:
    return LookupFailedError(name, rdtype, reason)


class FakeHttp:
    """
    In-memory HTTP client.

    ``responses`` maps URL prefixes to an httpx.Response, an exception
    instance, or a callable taking the URL. ``json`` maps exact URLs to
    decoded JSON or an exception instance.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> None:
        self.responses = responses or {}
        self.json = json or {}
        self.requests: list[str] = []
        self._lock = threading.Lock()

    def get(self, url: str, follow_redirects: bool = False) -> httpx.Response:
        with self._lock:
            self.requests.append(url)
        matches = [prefix for prefix in self.responses if url.startswith(prefix)]
        if not matches:
            raise httpx.ConnectError(f"no route to {url}")
        answer = self.responses[max(matches, key=len)]
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            answer = answer(url)
        return answer

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        with self._lock:
            self.requests.append(url)
        if url not in self.json:
            raise httpx.ConnectError(f"no route to {url}")
        answer = self.json[url]
        if isinstance(answer, Exception):
            raise answer
        return answer


def make_response(status_code: int, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status_code, headers=headers or {}, request=httpx.Request("GET", url))


class StubChecker(BaseChecker):
    """
    Checker with scripted behaviour for engine tests.

    Runs ``before`` (if any), then raises ``raises`` or returns ``result``.
    """

    description = "Scripted checker"

    def __init__(
        self,
        name: str,
        result: CheckResult | None = None,
        raises: Exception | None = None,
        before: Callable[[], None] | None = None,
        calls: list[str] | None = None,
    ) -> None:
        self._name = name
        self.result = result if result is not None else CheckResult.success()
        self.raises = raises
        self.before = before
        self.calls = calls

    @property
    def name(self) -> str:
        return self._name

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if self.calls is not None:
            self.calls.append(self._name)
        if self.before is not None:
            self.before()
        if self.raises is not None:
            raise self.raises
        return self.result


def problem(name: str, severity: Severity = Severity.ERROR) -> Problem:
    return Problem(name=name, explanation=f"{name} happened", severity=severity)


# --- Fixtures ---

@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the environment's .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def ctx(resolver: FakeResolver, http: FakeHttp, settings: Settings) -> ScanContext:
    """A scan context wired to the fakes."""
    return ScanContext(resolver=resolver, http=http, settings=settings)
