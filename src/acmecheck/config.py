"""
Configuration for acmecheck.

Settings are read from ACMECHECK_* environment variables (and an optional
.env file) with pydantic-settings, so adapters and checkers read their
timeouts and endpoints the same way.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from acmecheck.domain.exceptions import ConfigError


class Settings(BaseSettings):
    """Runtime settings for adapters and checkers."""

    model_config = SettingsConfigDict(
        env_prefix="ACMECHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    dns_nameservers: list[str] = Field(
        default_factory=list,
        description="Recursive resolvers to query; empty uses the system resolver",
    )
    dns_timeout: float = Field(default=5.0, gt=0, description="DNS lookup lifetime in seconds")
    http_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
    user_agent: str = Field(default="acmecheck/0.1", min_length=1)
    caa_identities: list[str] = Field(
        default_factory=lambda: ["letsencrypt.org"],
        description="CA identifiers that CAA issue/issuewild must name to allow issuance",
    )
    status_page_url: str = Field(
        default="https://letsencrypt.status.io/1.0/status/55957a99e800baa4470002da",
        description="Status page JSON endpoint of the certificate authority",
    )
    crtsh_url: str = Field(default="https://crt.sh/", description="Certificate Transparency search")
    duplicate_certificate_limit: int = Field(
        default=5, ge=1, description="Certificates per exact name per week before rate limiting"
    )
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("caa_identities")
    @classmethod
    def validate_caa_identities(cls, v: list[str]) -> list[str]:
        identities = [x.strip().lower() for x in v if x.strip()]
        if not identities:
            raise ValueError("at least one CAA identity is required")
        return identities


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment plus explicit overrides.

    Raises:
        ConfigError: If any value is invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ConfigError(f"Invalid configuration: {first.get('msg')}", config_key=key) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings loaded once from the environment."""
    return load_settings()
