"""
Configuration management for the Customer API.

Uses Pydantic Settings for type-safe configuration with multiple sources:
- Environment variables (highest priority)
- .env file
- Defaults (lowest priority)
"""

import logging
import secrets
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Secrets that ship in tutorials and sample .env files
PLACEHOLDER_SECRETS = {
    "your_secret_key",
    "secret",
    "changeme",
    "change_me",
    "jwt_secret",
}


class JWTConfig(BaseSettings):
    """Bearer token signing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret: str | None = Field(
        default=None,
        validate_default=True,
        description="HMAC signing secret (JWT_SECRET). Random per process if unset.",
    )
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(default="HS256")
    expires_minutes: int = Field(
        default=60, ge=1, le=24 * 60, description="Token validity window in minutes"
    )

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: str | None) -> str:
        """
        Security: never fall back to a hardcoded secret.

        An unset secret is replaced with a random per-process value, so
        tokens do not survive a restart. Known placeholders are accepted
        but logged.
        """
        if not v:
            logging.warning(
                "JWT_SECRET not set - using a random per-process secret "
                "(tokens will be invalidated on restart)"
            )
            return secrets.token_urlsafe(32)

        if v.lower() in PLACEHOLDER_SECRETS:
            logging.warning("JWT_SECRET appears to be a placeholder - set a real secret")
        elif len(v) < 32:
            logging.warning("JWT_SECRET seems too short to be secure - use at least 32 characters")

        return v


class PasswordConfig(BaseSettings):
    """Password hashing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PASSWORD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    bcrypt_rounds: int = Field(
        default=10, ge=4, le=16, description="bcrypt cost factor (log2 iterations)"
    )


class DatabaseConfig(BaseSettings):
    """SQLite storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    path: str = Field(default="./data/customer.db", description="Path to SQLite database file")


class ServiceConfig(BaseSettings):
    """FastAPI service configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVICE_")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    reload: bool = Field(default=False)


class CORSConfig(BaseSettings):
    """CORS configuration for API security."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    # Allowed origins (comma-separated for multiple origins)
    allowed_origins: str = Field(
        default="*", description="Comma-separated list of allowed origins (* for all, ONLY for dev)"
    )
    allow_credentials: bool = Field(
        default=False, description="Allow credentials (cookies, auth headers)"
    )
    allowed_methods: str = Field(
        default="GET,POST,PUT,DELETE,OPTIONS",
        description="Comma-separated list of allowed HTTP methods",
    )
    allowed_headers: str = Field(
        default="*", description="Comma-separated list of allowed headers (* for all)"
    )
    max_age: int = Field(default=600, ge=0, description="Preflight cache duration in seconds")

    @property
    def origins_list(self) -> list[str]:
        """Parse comma-separated origins into list."""
        if self.allowed_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def methods_list(self) -> list[str]:
        """Parse comma-separated methods into list."""
        return [method.strip() for method in self.allowed_methods.split(",") if method.strip()]

    @property
    def headers_list(self) -> list[str]:
        """Parse comma-separated headers into list."""
        if self.allowed_headers == "*":
            return ["*"]
        return [header.strip() for header in self.allowed_headers.split(",") if header.strip()]


class LoggingConfig(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Minimum log level"
    )

    # Output format
    json_output: bool = Field(
        default=True, description="Use JSON output (True for production, False for development)"
    )
    colorized: bool = Field(
        default=False, description="Colorize console output (only for development)"
    )

    # Slow request logging thresholds (bcrypt dominates register/login latency)
    slow_request_warning_ms: float = Field(
        default=500.0, ge=0.0, description="Log warning if request exceeds this latency (ms)"
    )
    slow_request_error_ms: float = Field(
        default=2000.0, ge=0.0, description="Log error if request exceeds this latency (ms)"
    )

    # Service metadata (injected into all logs)
    service_name: str = Field(default="customer-api", description="Service name for log aggregation")
    service_version: str = Field(default="0.1.0", description="Service version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )

    @field_validator("slow_request_error_ms")
    @classmethod
    def validate_slow_request_thresholds(cls, v: float, info) -> float:
        """Ensure error threshold is greater than warning threshold."""
        warning = info.data.get("slow_request_warning_ms")
        if warning is not None and v <= warning:
            raise ValueError(
                f"slow_request_error_ms ({v}) must be > slow_request_warning_ms ({warning})"
            )
        return v


class Settings(BaseSettings):
    """Root configuration for the Customer API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    jwt: JWTConfig = Field(default_factory=JWTConfig)
    password: PasswordConfig = Field(default_factory=PasswordConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    cors: CORSConfig = Field(default_factory=CORSConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def validate_configuration(self) -> None:
        """
        Validate cross-field constraints and log warnings.
        Called at application startup.
        """
        if "*" in self.cors.origins_list and self.cors.allow_credentials:
            logging.warning(
                "CORS allows ALL origins (*) with credentials - browsers will reject this"
            )

        if self.logging.environment == "production" and self.password.bcrypt_rounds < 10:
            logging.warning(
                f"bcrypt cost factor {self.password.bcrypt_rounds} is below 10 in production"
            )


# Global settings instance (lazy-loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get global settings instance (singleton pattern).

    Returns:
        Settings: Application configuration
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
