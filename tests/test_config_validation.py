"""
Unit tests for configuration loading and validation.

Covers the signing secret fallback, environment overrides and the
cross-field checks in validate_configuration().
"""

import logging

import pytest
from pydantic import ValidationError

from customer_api.config import (
    CORSConfig,
    JWTConfig,
    LoggingConfig,
    PasswordConfig,
    Settings,
)


class TestJWTSecret:
    def test_unset_secret_is_random_per_instance(self, monkeypatch, caplog):
        monkeypatch.delenv("JWT_SECRET", raising=False)

        with caplog.at_level(logging.WARNING):
            first = JWTConfig()
            second = JWTConfig()

        assert first.secret
        assert len(first.secret) >= 32
        assert first.secret != second.secret
        assert "JWT_SECRET not set" in caplog.text

    def test_secret_from_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "s" * 48)

        assert JWTConfig().secret == "s" * 48

    def test_placeholder_secret_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = JWTConfig(secret="your_secret_key")

        # Accepted, but flagged
        assert config.secret == "your_secret_key"
        assert "placeholder" in caplog.text

    def test_short_secret_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            JWTConfig(secret="short-but-not-placeholder")

        assert "too short" in caplog.text

    def test_strong_secret_is_silent(self, caplog):
        with caplog.at_level(logging.WARNING):
            JWTConfig(secret="k" * 40)

        assert caplog.text == ""

    def test_defaults(self):
        config = JWTConfig(secret="k" * 40)

        assert config.algorithm == "HS256"
        assert config.expires_minutes == 60


class TestPasswordConfig:
    def test_default_cost_factor(self, monkeypatch):
        monkeypatch.delenv("PASSWORD_BCRYPT_ROUNDS", raising=False)

        assert PasswordConfig().bcrypt_rounds == 10

    @pytest.mark.parametrize("rounds", [3, 17])
    def test_cost_factor_bounds(self, rounds):
        with pytest.raises(ValidationError):
            PasswordConfig(bcrypt_rounds=rounds)

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PASSWORD_BCRYPT_ROUNDS", "12")

        assert PasswordConfig().bcrypt_rounds == 12


class TestCORSConfig:
    def test_wildcard(self):
        config = CORSConfig(allowed_origins="*", allowed_headers="*")

        assert config.origins_list == ["*"]
        assert config.headers_list == ["*"]

    def test_comma_separated_lists(self):
        config = CORSConfig(
            allowed_origins="https://a.example, https://b.example,",
            allowed_methods="GET, POST",
            allowed_headers="Authorization,Content-Type",
        )

        assert config.origins_list == ["https://a.example", "https://b.example"]
        assert config.methods_list == ["GET", "POST"]
        assert config.headers_list == ["Authorization", "Content-Type"]


class TestLoggingConfig:
    def test_error_threshold_must_exceed_warning(self):
        with pytest.raises(ValidationError):
            LoggingConfig(slow_request_warning_ms=1000.0, slow_request_error_ms=500.0)

    def test_valid_thresholds(self):
        config = LoggingConfig(slow_request_warning_ms=100.0, slow_request_error_ms=200.0)

        assert config.slow_request_error_ms == 200.0


class TestValidateConfiguration:
    def test_wildcard_cors_with_credentials_warns(self, caplog):
        settings = Settings(
            jwt=JWTConfig(secret="k" * 40),
            cors=CORSConfig(allowed_origins="*", allow_credentials=True),
        )

        with caplog.at_level(logging.WARNING):
            settings.validate_configuration()

        assert "CORS allows ALL origins" in caplog.text

    def test_low_cost_factor_in_production_warns(self, caplog):
        settings = Settings(
            jwt=JWTConfig(secret="k" * 40),
            password=PasswordConfig(bcrypt_rounds=4),
            logging=LoggingConfig(environment="production"),
        )

        with caplog.at_level(logging.WARNING):
            settings.validate_configuration()

        assert "below 10 in production" in caplog.text

    def test_sane_configuration_is_silent(self, caplog):
        settings = Settings(
            jwt=JWTConfig(secret="k" * 40),
            cors=CORSConfig(allowed_origins="https://app.example"),
            password=PasswordConfig(bcrypt_rounds=10),
        )

        with caplog.at_level(logging.WARNING):
            settings.validate_configuration()

        assert caplog.text == ""
