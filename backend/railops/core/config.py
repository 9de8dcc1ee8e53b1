"""Application configuration.

Environment variables are loaded from .env file and can be overridden.
All settings have sensible defaults for local development; without a
GEMINI_API_KEY the service runs entirely on fallback data.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash-latest"
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ==========================================================================
    # Infrastructure
    # ==========================================================================

    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Deployment environment: 'development', 'staging', or 'production'.",
    )

    # ==========================================================================
    # Generative text provider
    # ==========================================================================

    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL, alias="GEMINI_MODEL")
    gemini_api_url: str | None = Field(
        default=None,
        alias="GEMINI_API_URL",
        description="Full generateContent URL. Derived from GEMINI_MODEL when unset.",
    )
    provider_timeout_seconds: float = Field(
        default=20.0, alias="PROVIDER_TIMEOUT_SECONDS", gt=0
    )

    # ==========================================================================
    # Response cache and background jobs (seconds)
    # ==========================================================================

    response_cache_ttl_seconds: int = Field(
        default=300, alias="RESPONSE_CACHE_TTL_SECONDS", ge=1
    )
    train_sync_interval_seconds: int = Field(
        default=30, alias="TRAIN_SYNC_INTERVAL_SECONDS", ge=1
    )
    cache_sweep_interval_seconds: int = Field(
        default=300, alias="CACHE_SWEEP_INTERVAL_SECONDS", ge=1
    )
    scheduler_enabled: bool = Field(default=True, alias="SCHEDULER_ENABLED")

    default_hub: str = Field(default="New Delhi", alias="DEFAULT_HUB", min_length=1)
    port: int = Field(default=7000, alias="PORT", ge=1, le=65535)

    # ==========================================================================
    # CORS
    # ==========================================================================

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:8080",
            "http://localhost:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_origin_regex: str | None = Field(
        default=None, alias="CORS_ALLOW_ORIGIN_REGEX"
    )

    # ==========================================================================
    # OpenTelemetry (optional)
    # ==========================================================================

    otel_enabled: bool = Field(default=False, alias="OTEL_ENABLED")
    otel_service_name: str = Field(default="railops-backend", alias="OTEL_SERVICE_NAME")
    otel_service_version: str = Field(default="0.1.0", alias="OTEL_SERVICE_VERSION")
    otel_exporter_otlp_endpoint: str = Field(
        default="http://jaeger:4317", alias="OTEL_EXPORTER_OTLP_ENDPOINT"
    )
    otel_exporter_otlp_headers: str | None = Field(
        default=None, alias="OTEL_EXPORTER_OTLP_HEADERS"
    )

    # ==========================================================================
    # Pydantic Settings Config
    # ==========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: Any) -> list[str]:
        """Parse comma-separated CORS origins, rejecting wildcard '*'."""
        if isinstance(value, str):
            if not value:
                return []
            parsed = [item.strip() for item in value.split(",") if item.strip()]
        else:
            parsed = list(value) if value is not None else []

        if "*" in parsed:
            raise ValueError(
                "Wildcard CORS origin '*' is not allowed. "
                "Specify explicit origins like 'http://localhost:3000'."
            )
        return parsed

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def blank_key_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def validate_production_provider(self) -> "Settings":
        """Production deployments must talk to a real provider."""
        if self.environment.lower() == "production" and not self.gemini_api_key:
            raise ValueError(
                "GEMINI_API_KEY must be set in production. "
                "Fallback-only mode is meant for local development."
            )
        return self

    @property
    def provider_url(self) -> str:
        """Resolved generateContent endpoint."""
        if self.gemini_api_url:
            return self.gemini_api_url
        return f"{GEMINI_API_BASE}/{self.gemini_model}:generateContent"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
