"""
Unit tests for settings and logging setup.
"""

from __future__ import annotations

import logging

import pytest

from acmecheck.config import Settings, load_settings
from acmecheck.domain.exceptions import ConfigError
from acmecheck.logging_config import LOGGER_NAME, setup_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, settings: Settings) -> None:
        assert settings.caa_identities == ["letsencrypt.org"]
        assert settings.duplicate_certificate_limit == 5
        assert settings.dns_nameservers == []
        assert settings.log_level == "WARNING"

    def test_environment_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACMECHECK_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("ACMECHECK_CAA_IDENTITIES", '["Example-CA.test", "letsencrypt.org"]')
        monkeypatch.setenv("ACMECHECK_LOG_LEVEL", "debug")

        settings = load_settings(_env_file=None)

        assert settings.http_timeout == 2.5
        assert settings.caa_identities == ["example-ca.test", "letsencrypt.org"]
        assert settings.log_level == "DEBUG"

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACMECHECK_DUPLICATE_CERTIFICATE_LIMIT", "3")

        settings = load_settings(_env_file=None, duplicate_certificate_limit=7)

        assert settings.duplicate_certificate_limit == 7

    @pytest.mark.parametrize(
        "overrides,key",
        [
            ({"dns_timeout": 0}, "dns_timeout"),
            ({"log_level": "LOUD"}, "log_level"),
            ({"caa_identities": [" "]}, "caa_identities"),
        ],
    )
    def test_invalid_values(self, overrides: dict, key: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(_env_file=None, **overrides)

        assert exc_info.value.config_key == key

    def test_settings_are_frozen(self, settings: Settings) -> None:
        with pytest.raises(Exception):
            settings.http_timeout = 1.0  # type: ignore


class TestSetupLogging:
    """Tests for logging configuration."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger(LOGGER_NAME)
        handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate

    def test_level_and_single_handler(self) -> None:
        setup_logging("INFO", use_colors=False)
        logger = setup_logging("DEBUG", use_colors=False)

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert not logger.propagate

    def test_plain_handler_without_colors(self) -> None:
        logger = setup_logging("WARNING", use_colors=False)

        assert type(logger.handlers[0]) is logging.StreamHandler
