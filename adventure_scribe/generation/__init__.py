"""Content generation through hosted LLM providers."""

from adventure_scribe.generation.prompts import (
    PROMPTS,
    PromptSpec,
    build_user_prompt,
    get_prompt_spec,
)
from adventure_scribe.generation.providers import (
    AnthropicProvider,
    GenerationProvider,
    OpenAIProvider,
    ProviderAPIError,
    ProviderConfigurationError,
    ProviderError,
    ProviderResponseError,
    extract_json,
)
from adventure_scribe.generation.service import (
    GenerationClient,
    GenerationRequest,
    GenerationResponse,
    GenerationService,
)

__all__ = [
    # Prompts
    "PROMPTS",
    "PromptSpec",
    "build_user_prompt",
    "get_prompt_spec",
    # Providers
    "AnthropicProvider",
    "GenerationProvider",
    "OpenAIProvider",
    "ProviderAPIError",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderResponseError",
    "extract_json",
    # Service
    "GenerationClient",
    "GenerationRequest",
    "GenerationResponse",
    "GenerationService",
]
