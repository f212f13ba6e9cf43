"""
DNS adapter for acmecheck.

Wraps a dnspython resolver and turns its exception zoo into two cases:
an empty answer (the name or type does not exist) or LookupFailedError.
"""

from __future__ import annotations

import logging

import dns.exception
import dns.resolver

from acmecheck.config import Settings
from acmecheck.domain.exceptions import LookupFailedError

logger = logging.getLogger(__name__)


class DnsAdapter:
    """
    Adapter for recursive DNS lookups.

    Queries go to the configured nameservers, or to the system resolver
    when none are configured.
    """

    def __init__(
        self,
        nameservers: list[str] | None = None,
        timeout: float = 5.0,
    ) -> None:
        """
        Initialize the DNS adapter.

        Args:
            nameservers: Resolver IPs to query instead of the system ones.
            timeout: Total lifetime of a single lookup in seconds.
        """
        self.timeout = timeout
        self._resolver = dns.resolver.Resolver(configure=not nameservers)
        if nameservers:
            self._resolver.nameservers = list(nameservers)
        self._resolver.lifetime = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> DnsAdapter:
        return cls(nameservers=settings.dns_nameservers, timeout=settings.dns_timeout)

    def query(self, name: str, rdtype: str) -> list[str]:
        """
        Look up records of one type.

        Args:
            name: Domain name to query.
            rdtype: Record type, e.g. "A" or "CAA".

        Returns:
            Textual rdata of every record in the answer. Empty when the
            name does not exist or has no records of that type.

        Raises:
            LookupFailedError: On timeouts, SERVFAIL and other resolver errors.
        """
        qname = name.rstrip(".") + "."
        rdtype = rdtype.upper()

        try:
            answer = self._resolver.resolve(qname, rdtype, raise_on_no_answer=False)
        except dns.resolver.NXDOMAIN:
            logger.debug("%s %s: NXDOMAIN", qname, rdtype)
            return []
        except dns.resolver.NoNameservers as e:
            raise LookupFailedError(name, rdtype, f"no nameserver answered (SERVFAIL): {e}") from e
        except dns.exception.Timeout as e:
            raise LookupFailedError(name, rdtype, "timed out") from e
        except dns.exception.DNSException as e:
            raise LookupFailedError(name, rdtype, f"{type(e).__name__}: {e}") from e

        if answer.rrset is None:
            return []
        return [rdata.to_text() for rdata in answer.rrset]
