"""
HTTP checks for http-01 validation.

Checkers:
- HttpAccessibilityChecker: the challenge path answers over plain HTTP
- CloudflareChecker: the site sits behind the Cloudflare CDN
"""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING

import httpx

from acmecheck.checkers.base import BaseChecker
from acmecheck.domain.models import Problem, Severity, ValidationMethod
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.engine.context import ScanContext

logger = logging.getLogger(__name__)

CHALLENGE_PATH = "/.well-known/acme-challenge/"


def _applies(domain: str, method: str) -> bool:
    return method == ValidationMethod.HTTP_01.value and not domain.startswith("*.")


class HttpAccessibilityChecker(BaseChecker):
    """
    Requests a random token under the challenge path, as the CA would.

    A 404 is the expected answer for a token that was never provisioned.
    Only the first hop is inspected; the CA follows redirects to http or
    https on the standard ports only.
    """

    description = "The ACME challenge path is reachable over HTTP on port 80"

    ALLOWED_REDIRECT_PORTS = frozenset({None, 80, 443})

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if not _applies(domain, method):
            return CheckResult.not_applicable()

        url = f"http://{domain}{CHALLENGE_PATH}{secrets.token_urlsafe(16)}"

        try:
            response = ctx.http.get(url, follow_redirects=False)
        except httpx.TimeoutException as e:
            return CheckResult.success([self._connection_failed(domain, f"timed out: {e}")])
        except httpx.HTTPError as e:
            return CheckResult.success([self._connection_failed(domain, f"{type(e).__name__}: {e}")])

        problems: list[Problem] = []

        if response.is_redirect:
            location = response.headers.get("location", "")
            target = response.url.join(location)
            if target.scheme not in ("http", "https") or target.port not in self.ALLOWED_REDIRECT_PORTS:
                problems.append(
                    self._problem(
                        "BadRedirect",
                        f"The challenge URL on {domain} redirects to {target}, which the "
                        "certificate authority will not follow.",
                        detail="Redirects must go to http or https on port 80 or 443.",
                        severity=Severity.ERROR,
                    )
                )

        if response.status_code >= 500:
            problems.append(
                self._problem(
                    "HTTPServerError",
                    f"The web server for {domain} answered the challenge URL with "
                    f"HTTP {response.status_code}.",
                    detail=f"GET {url}",
                    severity=Severity.WARNING,
                )
            )

        logger.debug("GET %s -> %d", url, response.status_code)
        return CheckResult.success(problems)

    def _connection_failed(self, domain: str, reason: str) -> Problem:
        return self._problem(
            "HTTPConnectionFailed",
            f"A request to http://{domain}{CHALLENGE_PATH} failed. The certificate "
            "authority must be able to connect on port 80.",
            detail=reason,
            severity=Severity.ERROR,
        )


class CloudflareChecker(BaseChecker):
    """Detects the Cloudflare CDN from its response headers."""

    description = "The domain is not proxied by a CDN that may intercept challenges"

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        if not _applies(domain, method):
            return CheckResult.not_applicable()

        try:
            response = ctx.http.get(f"http://{domain}/", follow_redirects=True)
        except httpx.HTTPError as e:
            # Reachability is HttpAccessibilityChecker's concern
            logger.debug("Cloudflare check of %s failed: %s", domain, e)
            return CheckResult.not_applicable()

        server = response.headers.get("server", "").lower()
        if server != "cloudflare" and "cf-ray" not in response.headers:
            return CheckResult.success()

        return CheckResult.success(
            [
                self._problem(
                    "CloudflareCDN",
                    f"{domain} is served through Cloudflare. Challenge requests reach "
                    "Cloudflare first and must be passed to your server unchanged.",
                    detail="Make sure no page rule or 'Always Use HTTPS' setting rewrites "
                    f"requests under {CHALLENGE_PATH}.",
                    severity=Severity.WARNING,
                )
            ]
        )
