"""
Duplicate certificate rate limit check.

Counts recent certificates for exactly this name in Certificate
Transparency logs (via crt.sh). The CA refuses further certificates for
the same set of names once the weekly limit is reached.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable

import httpx

from acmecheck.checkers.base import BaseChecker
from acmecheck.domain.models import Severity
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.engine.context import ScanContext

logger = logging.getLogger(__name__)

WINDOW = timedelta(days=7)
ISSUER_MARKER = "Let's Encrypt"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class RateLimitChecker(BaseChecker):
    """
    Checks the duplicate certificate limit for the exact name.

    Certificate Transparency results are cached per name for the life of
    the checker instance, so one instance can serve many scans. The cache
    is guarded by a lock since scans may run concurrently. Lookup
    failures make the check not applicable.
    """

    description = "The domain has not hit the duplicate certificate rate limit"

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._cache: dict[str, list[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if domain.startswith("*."):
            return CheckResult.not_applicable()

        try:
            entries = self._entries(ctx, domain)
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("crt.sh lookup for %s failed: %s", domain, e)
            return CheckResult.not_applicable()

        since = self._clock() - WINDOW
        recent = self.recent_duplicates(entries, domain, since)
        limit = ctx.settings.duplicate_certificate_limit

        if len(recent) < limit:
            return CheckResult.success()

        return CheckResult.success(
            [
                self._problem(
                    "RateLimit",
                    f"{len(recent)} certificates were issued for exactly {domain} in the last "
                    f"7 days. The limit is {limit}, so new requests will be refused.",
                    detail="\n".join(f"{ts.isoformat()} serial {serial}" for serial, ts in recent),
                    severity=Severity.FATAL,
                )
            ]
        )

    def _entries(self, ctx: ScanContext, domain: str) -> list[dict[str, Any]]:
        with self._lock:
            cached = self._cache.get(domain)
        if cached is not None:
            return cached

        data = ctx.http.get_json(
            ctx.settings.crtsh_url,
            params={"q": domain, "output": "json", "exclude": "expired"},
        )
        if not isinstance(data, list):
            raise ValueError(f"unexpected crt.sh response: {type(data).__name__}")
        entries = [e for e in data if isinstance(e, dict)]

        with self._lock:
            self._cache[domain] = entries
        return entries

    @staticmethod
    def recent_duplicates(
        entries: list[dict[str, Any]], domain: str, since: datetime
    ) -> list[tuple[str, datetime]]:
        """
        Certificates for exactly ``{domain}`` issued since a point in time.

        Precertificate and final certificate entries share a serial and
        are counted once.
        """
        seen: dict[str, datetime] = {}
        for entry in entries:
            if ISSUER_MARKER not in str(entry.get("issuer_name", "")):
                continue
            names = {n.strip().lower() for n in str(entry.get("name_value", "")).split("\n") if n.strip()}
            if names != {domain}:
                continue
            try:
                issued = _parse_timestamp(str(entry["not_before"]))
            except (KeyError, ValueError):
                continue
            if issued < since:
                continue
            serial = str(entry.get("serial_number") or entry.get("id"))
            seen.setdefault(serial, issued)
        return sorted(seen.items(), key=lambda item: item[1])
