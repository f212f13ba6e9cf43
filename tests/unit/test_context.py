"""
Unit tests for ScanContext and the DNS/HTTP adapters.
"""

from __future__ import annotations

import threading

import dns.exception
import dns.resolver
import httpx
import pytest

from conftest import FakeHttp, FakeResolver, lookup_failure

from acmecheck.adapters.dns import DnsAdapter
from acmecheck.adapters.http import HttpAdapter
from acmecheck.config import Settings
from acmecheck.domain.exceptions import LookupFailedError
from acmecheck.engine.context import ScanContext


class TestScanContext:
    """Tests for per-scan shared state."""

    def test_repeated_lookup_queries_once(self, settings: Settings) -> None:
        resolver = FakeResolver({("example.com", "A"): ["93.184.216.34"]})
        ctx = ScanContext(resolver=resolver, http=FakeHttp(), settings=settings)

        assert ctx.lookup("example.com", "A") == ["93.184.216.34"]
        assert ctx.lookup("Example.COM.", "a") == ["93.184.216.34"]
        assert resolver.queries == [("example.com", "A")]

    def test_failures_are_not_cached(self, settings: Settings) -> None:
        resolver = FakeResolver({("example.com", "CAA"): lookup_failure("example.com", "CAA")})
        ctx = ScanContext(resolver=resolver, http=FakeHttp(), settings=settings)

        with pytest.raises(LookupFailedError):
            ctx.lookup("example.com", "CAA")
        resolver.records[("example.com", "CAA")] = []

        assert ctx.lookup("example.com", "CAA") == []
        assert len(resolver.queries) == 2

    def test_returned_lists_are_copies(self, ctx: ScanContext, resolver: FakeResolver) -> None:
        resolver.records[("example.com", "TXT")] = ['"a"']

        ctx.lookup("example.com", "TXT").append("mutated")

        assert ctx.lookup("example.com", "TXT") == ['"a"']

    def test_concurrent_lookups(self, ctx: ScanContext, resolver: FakeResolver) -> None:
        resolver.records[("example.com", "A")] = ["93.184.216.34"]
        results: list[list[str]] = []
        threads = [
            threading.Thread(target=lambda: results.append(ctx.lookup("example.com", "A")))
            for _ in range(8)
        ]

        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == [["93.184.216.34"]] * 8

    def test_scan_ids_are_unique(self, settings: Settings) -> None:
        a = ScanContext(resolver=FakeResolver(), http=FakeHttp(), settings=settings)
        b = ScanContext(resolver=FakeResolver(), http=FakeHttp(), settings=settings)

        assert a.scan_id.startswith("sc_")
        assert a.scan_id != b.scan_id

    def test_default_adapters_from_settings(self) -> None:
        settings = Settings(_env_file=None, dns_nameservers=["192.0.2.53"], http_timeout=3.0)

        ctx = ScanContext(settings=settings)

        assert isinstance(ctx.resolver, DnsAdapter)
        assert isinstance(ctx.http, HttpAdapter)
        assert ctx.http.timeout == 3.0


class TestDnsAdapter:
    """Tests for dnspython error mapping."""

    @pytest.fixture
    def adapter(self) -> DnsAdapter:
        return DnsAdapter(nameservers=["192.0.2.53"], timeout=1.0)

    def raising(self, adapter: DnsAdapter, monkeypatch: pytest.MonkeyPatch, exc: Exception) -> None:
        def resolve(*args: object, **kwargs: object) -> None:
            raise exc

        monkeypatch.setattr(adapter._resolver, "resolve", resolve)

    def test_lifetime_from_timeout(self, adapter: DnsAdapter) -> None:
        assert adapter._resolver.lifetime == 1.0
        assert adapter.timeout == 1.0

    def test_nxdomain_is_empty(self, adapter: DnsAdapter, monkeypatch: pytest.MonkeyPatch) -> None:
        self.raising(adapter, monkeypatch, dns.resolver.NXDOMAIN())

        assert adapter.query("missing.example.com", "A") == []

    def test_servfail_raises(self, adapter: DnsAdapter, monkeypatch: pytest.MonkeyPatch) -> None:
        self.raising(adapter, monkeypatch, dns.resolver.NoNameservers())

        with pytest.raises(LookupFailedError) as exc_info:
            adapter.query("example.com", "caa")

        assert exc_info.value.details["rdtype"] == "CAA"
        assert "SERVFAIL" in exc_info.value.details["reason"]

    def test_timeout_raises(self, adapter: DnsAdapter, monkeypatch: pytest.MonkeyPatch) -> None:
        self.raising(adapter, monkeypatch, dns.exception.Timeout())

        with pytest.raises(LookupFailedError) as exc_info:
            adapter.query("example.com", "A")

        assert exc_info.value.details["reason"] == "timed out"


class TestHttpAdapter:
    """Tests for the httpx adapter."""

    def test_get_does_not_follow_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(301, headers={"location": "https://example.com/"})

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))
        response = adapter.get("http://example.com/")

        assert response.status_code == 301
        assert response.headers["location"] == "https://example.com/"

    def test_user_agent(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["user-agent"])
            return httpx.Response(404)

        HttpAdapter(user_agent="checker/1", transport=httpx.MockTransport(handler)).get("http://example.com/")

        assert seen == ["checker/1"]

    def test_get_json_with_params(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["q"] == "example.com"
            return httpx.Response(200, json=[{"id": 1}])

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))

        assert adapter.get_json("https://crt.sh/", params={"q": "example.com"}) == [{"id": 1}]

    def test_get_json_raises_on_error_status(self) -> None:
        adapter = HttpAdapter(transport=httpx.MockTransport(lambda request: httpx.Response(502)))

        with pytest.raises(httpx.HTTPStatusError):
            adapter.get_json("https://crt.sh/")

    def test_get_json_raises_on_bad_body(self) -> None:
        adapter = HttpAdapter(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        )

        with pytest.raises(ValueError):
            adapter.get_json("https://crt.sh/")
