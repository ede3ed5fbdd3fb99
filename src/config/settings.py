"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
Every field has a default, so the engine runs with no environment at all; without
an Anthropic key the input analyzer simply uses its keyword fallback.

Production Mode:
    When app_env="production", additional validations apply:
    - debug must be False
    - cors_allowed_origins cannot be ["*"]
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Anthropic (text completion)
    # -------------------------------------------------------------------------
    anthropic_api_key: SecretStr | None = Field(
        default=None, description="Anthropic API key for Claude"
    )
    ai_enabled: bool = Field(
        default=True,
        description="Use the text-completion provider when a key is configured",
    )
    ai_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used for input analysis",
    )
    ai_max_tokens: int = Field(default=1000, ge=64, description="Max tokens per analysis call")
    ai_temperature: float = Field(default=0.3, ge=0.0, le=1.0, description="Sampling temperature")
    ai_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Hard timeout for one analysis call; the fallback runs afterwards",
    )
    ai_max_retries: int = Field(
        default=2,
        ge=1,
        description="Attempts per analysis call for transient provider errors",
    )

    # -------------------------------------------------------------------------
    # Circuit Breaker
    # -------------------------------------------------------------------------
    ai_failure_threshold: int = Field(
        default=3,
        ge=1,
        description="Consecutive provider failures before the circuit opens",
    )
    ai_recovery_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Seconds the circuit stays open before a trial call",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind host for the HTTP API")
    api_port: int = Field(default=8000, description="Bind port for the HTTP API")

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins. Use ['*'] for development only.",
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS requests",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def ai_configured(self) -> bool:
        """True when the analyzer should try the text-completion provider."""
        return self.ai_enabled and self.anthropic_api_key is not None

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production settings are secure."""
        if self.app_env == "production":
            errors = []

            if self.debug:
                errors.append("debug must be False in production")

            if "*" in self.cors_allowed_origins:
                errors.append("cors_allowed_origins cannot contain '*' in production")

            if errors:
                raise ValueError(
                    f"Production configuration errors: {'; '.join(errors)}"
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()


# Convenience export for direct import
settings = get_settings()
