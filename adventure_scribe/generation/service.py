"""Generation service: the collaborator behind AI slash commands.

The service owns the configured providers and reports every outcome as a
``GenerationResponse``. Callers never see provider exceptions.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from adventure_scribe.config import Settings, get_settings
from adventure_scribe.content.models import ContentKind
from adventure_scribe.generation.providers import (
    AnthropicProvider,
    GenerationProvider,
    OpenAIProvider,
    ProviderConfigurationError,
    ProviderError,
)

logger = logging.getLogger(__name__)

MIN_PARTY_LEVEL = 1
MAX_PARTY_LEVEL = 20
MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 8


class GenerationResponse(BaseModel):
    """Outcome of a generation request."""

    success: bool
    data: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    provider: Optional[str] = None


class GenerationRequest(BaseModel):
    """A validated generation request.

    Accepts both snake_case and the camelCase keys sent by the editor.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content_type: ContentKind
    prompt: str = Field(min_length=1)
    provider: Optional[str] = None
    party_level: int = Field(default=MIN_PARTY_LEVEL, ge=MIN_PARTY_LEVEL, le=MAX_PARTY_LEVEL)
    party_size: int = Field(default=4, ge=MIN_PARTY_SIZE, le=MAX_PARTY_SIZE)

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Reject whitespace-only prompts."""
        v = v.strip()
        if not v:
            raise ValueError("Prompt is required")
        return v


class GenerationClient(Protocol):
    """Anything that can serve generation requests for the resolver."""

    async def generate(
        self,
        content_type: str,
        prompt: str,
        provider: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> GenerationResponse: ...


class GenerationService:
    """Routes generation requests to a named provider.

    Example:
        >>> service = GenerationService.from_settings()
        >>> response = await service.generate("monster", "a frost wyrmling")
        >>> response.success
        True
    """

    def __init__(
        self,
        providers: dict[str, GenerationProvider],
        default_provider: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            providers: Provider instances keyed by provider name
            default_provider: Preferred provider; ignored if not configured
        """
        self.providers = dict(providers)

        if default_provider and default_provider not in self.providers:
            logger.warning(f"Default provider '{default_provider}' is not configured, ignoring")
            default_provider = None

        if default_provider is None:
            if "anthropic" in self.providers:
                default_provider = "anthropic"
            elif self.providers:
                default_provider = next(iter(self.providers))
        self._default_provider = default_provider

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GenerationService":
        """Build a service with every provider that has an API key."""
        settings = settings or get_settings()
        providers: dict[str, GenerationProvider] = {}
        if settings.is_anthropic_configured():
            providers["anthropic"] = AnthropicProvider(settings.anthropic_api_key, settings.anthropic_model)
        if settings.is_openai_configured():
            providers["openai"] = OpenAIProvider(settings.openai_api_key, settings.openai_model)

        if not providers:
            logger.warning("No AI providers configured. Set OPENAI_API_KEY or ANTHROPIC_API_KEY")
        return cls(providers, default_provider=settings.default_provider)

    @property
    def default_provider(self) -> str | None:
        """Name of the provider used when a request names none."""
        return self._default_provider

    def get_available_providers(self) -> list[str]:
        """Get names of configured providers."""
        return list(self.providers.keys())

    def get_provider(self, name: str | None = None) -> GenerationProvider:
        """Look up a provider by name, defaulting to the default provider.

        Raises:
            ProviderConfigurationError: If the provider is not available
        """
        if not self.providers:
            raise ProviderConfigurationError(
                "No AI providers configured. Please set OPENAI_API_KEY or ANTHROPIC_API_KEY"
            )
        provider_name = name or self._default_provider
        provider = self.providers.get(provider_name or "")
        if provider is None:
            raise ProviderConfigurationError(f"AI provider '{provider_name}' not available")
        return provider

    async def generate(
        self,
        content_type: str,
        prompt: str,
        provider: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> GenerationResponse:
        """Generate content of one kind.

        Args:
            content_type: Content kind name (e.g., 'monster')
            prompt: User request text
            provider: Provider name, or None for the default
            extra: Optional 'party_level' and 'party_size' for encounters

        Returns:
            GenerationResponse with the raw data on success, or an error
        """
        extra = extra or {}
        provider_name = provider or self._default_provider

        try:
            request = GenerationRequest(
                content_type=content_type,
                prompt=prompt,
                provider=provider,
                party_level=extra.get("party_level", MIN_PARTY_LEVEL),
                party_size=extra.get("party_size", 4),
            )
        except ValidationError as e:
            message = "; ".join(error["msg"] for error in e.errors())
            logger.warning(f"Rejected generation request for {content_type!r}: {message}")
            return GenerationResponse(success=False, error=message, provider=provider_name)

        try:
            selected = self.get_provider(request.provider)
            data = await selected.generate(
                request.content_type,
                request.prompt,
                party_level=request.party_level,
                party_size=request.party_size,
            )
        except ProviderError as e:
            logger.warning(f"Generation of {request.content_type.value} failed: {e}")
            return GenerationResponse(success=False, error=str(e), provider=provider_name)
        except Exception as e:
            logger.exception(f"Unexpected error generating {request.content_type.value}")
            return GenerationResponse(success=False, error=f"Unexpected error: {e}", provider=provider_name)

        return GenerationResponse(success=True, data=data, provider=selected.name)
