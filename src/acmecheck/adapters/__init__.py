"""
Adapters layer for acmecheck.

Contains all infrastructure implementations: DNS and HTTP.
"""

from acmecheck.adapters.dns import DnsAdapter
from acmecheck.adapters.http import HttpAdapter

__all__ = [
    "DnsAdapter",
    "HttpAdapter",
]
