"""
Per-scan shared state.

One ScanContext is created per scan and passed by reference to every
checker, including checkers running concurrently in a group.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Protocol
from uuid import uuid4

from acmecheck.config import Settings, get_settings

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """What checkers need from a DNS adapter."""

    def query(self, name: str, rdtype: str) -> list[str]:
        ...


class HttpClient(Protocol):
    """What checkers need from an HTTP adapter."""

    def get(self, url: str, follow_redirects: bool = False) -> httpx.Response:
        ...

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        ...


class ScanContext:
    """
    Shared state for one scan.

    Holds the adapters and settings, and caches successful DNS lookups so
    that checkers asking the same question share one query. The cache is
    the only state the context mutates and it is guarded by a lock;
    anything else checkers keep here is their own to synchronize.
    """

    def __init__(
        self,
        resolver: Resolver | None = None,
        http: HttpClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if resolver is None:
            from acmecheck.adapters.dns import DnsAdapter

            resolver = DnsAdapter.from_settings(self.settings)
        if http is None:
            from acmecheck.adapters.http import HttpAdapter

            http = HttpAdapter.from_settings(self.settings)

        self.resolver = resolver
        self.http = http
        self.scan_id = f"sc_{uuid4().hex[:12]}"
        self._lookups: dict[tuple[str, str], list[str]] = {}
        self._lock = threading.Lock()

    def lookup(self, name: str, rdtype: str) -> list[str]:
        """
        Resolve records, answering repeats from the per-scan cache.

        Failed lookups are not cached.

        Raises:
            LookupFailedError: If the resolver could not answer.
        """
        key = (name.rstrip(".").lower(), rdtype.upper())
        with self._lock:
            cached = self._lookups.get(key)
        if cached is not None:
            return list(cached)

        records = self.resolver.query(key[0], key[1])
        logger.debug("[%s] %s %s -> %s", self.scan_id, key[1], key[0], records)

        with self._lock:
            self._lookups.setdefault(key, list(records))
        return list(records)
