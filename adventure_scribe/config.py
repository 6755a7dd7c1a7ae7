"""Configuration management for Adventure Scribe.

This module provides typed configuration loading from environment variables
using pydantic-settings. Provider credentials, server options and substitution
pass limits are validated at startup.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_PROVIDERS = ("anthropic", "openai")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables or a .env file.
    The .env file should be in the project root directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM API Keys
    anthropic_api_key: str = Field(default="", description="Anthropic API key for Claude models")
    openai_api_key: str = Field(default="", description="OpenAI API key for GPT models")

    # Generation
    default_provider: Optional[str] = Field(
        default=None,
        description="Preferred provider name; falls back to the first configured one",
    )
    anthropic_model: str = Field(default="claude-3-5-sonnet-latest", description="Anthropic model name")
    openai_model: str = Field(default="gpt-4", description="OpenAI model name")

    # Substitution pass
    resolve_timeout_ms: int = Field(
        default=30000,
        gt=0,
        description="Per-directive resolution timeout in milliseconds",
    )
    max_concurrent_resolutions: int = Field(
        default=4,
        ge=1,
        description="Upper bound on directives resolved at the same time",
    )

    # HTTP server
    host: str = Field(default="127.0.0.1", description="Interface the API server binds to")
    port: int = Field(default=3001, ge=1, le=65535, description="Port the API server listens on")
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Editor frontend origin allowed by CORS",
    )

    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("frontend_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure URLs don't have trailing slashes."""
        return v.rstrip("/")

    @field_validator("default_provider")
    @classmethod
    def validate_provider(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the provider name and reject unknown ones."""
        if v is None or not v.strip():
            return None
        v = v.strip().lower()
        if v not in SUPPORTED_PROVIDERS:
            raise ValueError(f"default_provider must be one of {', '.join(SUPPORTED_PROVIDERS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        return v.strip().upper()

    def is_anthropic_configured(self) -> bool:
        """Check if Anthropic API key is configured."""
        return bool(self.anthropic_api_key)

    def is_openai_configured(self) -> bool:
        """Check if OpenAI API key is configured."""
        return bool(self.openai_api_key)

    def available_providers(self) -> list[str]:
        """Get configured provider names, Anthropic first."""
        providers = []
        if self.is_anthropic_configured():
            providers.append("anthropic")
        if self.is_openai_configured():
            providers.append("openai")
        return providers


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
