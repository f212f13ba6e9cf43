"""
Output renderers for acmecheck.

Supports terminal (Rich) and JSON output formats.
"""

from acmecheck.renderers.json_renderer import JsonRenderer
from acmecheck.renderers.terminal import TerminalRenderer

__all__ = [
    "JsonRenderer",
    "TerminalRenderer",
]
