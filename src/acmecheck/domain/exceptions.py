"""
Exception hierarchy for acmecheck.

All exceptions inherit from AcmeCheckError for easy catching.
"""

from __future__ import annotations


class AcmeCheckError(Exception):
    """Base exception for all acmecheck errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CheckerError(AcmeCheckError):
    """Raised or returned when a checker cannot complete its check."""

    def __init__(self, message: str, checker: str | None = None) -> None:
        super().__init__(message, {"checker": checker})
        self.checker = checker


class CheckerFaultError(CheckerError):
    """An unexpected exception escaped a checker and was contained."""

    def __init__(self, checker: str, original: BaseException) -> None:
        super().__init__(
            f"checker {checker} crashed: {type(original).__name__}: {original}",
            checker=checker,
        )
        self.original = original
        self.details["exception_type"] = type(original).__name__


class LookupFailedError(AcmeCheckError):
    """Raised when a DNS lookup fails for a reason other than an empty answer."""

    def __init__(self, name: str, rdtype: str, reason: str) -> None:
        super().__init__(
            f"{rdtype} lookup for {name} failed: {reason}",
            {"name": name, "rdtype": rdtype, "reason": reason},
        )
        self.name = name
        self.rdtype = rdtype
        self.reason = reason


class ConfigError(AcmeCheckError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str | None = None) -> None:
        super().__init__(message, {"config_key": config_key})
        self.config_key = config_key
