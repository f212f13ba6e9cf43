"""
Certificate authority status page check.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from acmecheck.checkers.base import BaseChecker
from acmecheck.domain.models import Severity
from acmecheck.domain.result import CheckResult

if TYPE_CHECKING:
    from acmecheck.engine.context import ScanContext

logger = logging.getLogger(__name__)

OPERATIONAL = 100


class StatusPageChecker(BaseChecker):
    """
    Reports ongoing incidents from the CA's status.io page.

    The status page is advisory: if it cannot be fetched or parsed the
    check is simply not applicable.
    """

    description = "The certificate authority reports no ongoing incidents"

    def check(self, ctx: ScanContext, domain: str, method: str) -> CheckResult:
        url = ctx.settings.status_page_url
        try:
            data = ctx.http.get_json(url)
            overall = data["result"]["status_overall"]
            code = int(overall["status_code"])
            status = str(overall.get("status", code))
            incidents = self._incident_names(data["result"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.debug("Status page %s unavailable: %s", url, e)
            return CheckResult.not_applicable()

        if code == OPERATIONAL:
            return CheckResult.success()

        detail = f"Status: {status}"
        if incidents:
            detail += "\nIncidents:\n" + "\n".join(f"- {name}" for name in incidents)

        return CheckResult.success(
            [
                self._problem(
                    "StatusPageIncident",
                    "The certificate authority's status page reports a problem, which may "
                    "cause issuance to fail regardless of your configuration.",
                    detail=detail,
                    severity=Severity.WARNING,
                )
            ]
        )

    @staticmethod
    def _incident_names(result: dict[str, Any]) -> list[str]:
        return [str(i.get("name", "")) for i in result.get("incidents") or [] if isinstance(i, dict)]
