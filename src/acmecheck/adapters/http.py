"""
HTTP adapter for acmecheck.

Handles requests to the domain under test and to third-party services
such as the CA status page and Certificate Transparency search.
"""

from __future__ import annotations

from typing import Any

import httpx

from acmecheck.config import Settings


class HttpAdapter:
    """
    Adapter for HTTP operations.

    Uses httpx. A short-lived client is opened per request because checks
    run from several threads at once.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "acmecheck/0.1",
        verify_ssl: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the HTTP adapter.

        Args:
            timeout: Request timeout in seconds.
            user_agent: User-Agent header sent with every request.
            verify_ssl: Whether to verify SSL certificates.
            transport: Custom httpx transport (used by tests).
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.verify_ssl = verify_ssl
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpAdapter:
        return cls(timeout=settings.http_timeout, user_agent=settings.user_agent)

    def _client(self, follow_redirects: bool) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            verify=self.verify_ssl,
            follow_redirects=follow_redirects,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    def get(self, url: str, follow_redirects: bool = False) -> httpx.Response:
        """
        Issue a GET request.

        The body is read before the client closes.

        Raises:
            httpx.HTTPError: If the request cannot be completed.
        """
        with self._client(follow_redirects) as client:
            response = client.get(url)
            response.read()
            return response

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """
        Fetch and parse JSON from a URL.

        Raises:
            httpx.HTTPError: If request fails or the status is not 2xx.
            ValueError: If the body is not JSON.
        """
        with self._client(follow_redirects=True) as client:
            response = client.get(url, params=params)
            response.raise_for_status()
            return response.json()
