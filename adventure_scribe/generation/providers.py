"""LLM providers for content generation.

Each provider turns a (kind, prompt) request into a JSON object by calling a
hosted model with the kind's system prompt. Anthropic and OpenAI are
supported; both share the prompt table in ``prompts.py``.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

import anthropic
import openai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from adventure_scribe.content.models import ContentKind
from adventure_scribe.generation.prompts import build_user_prompt, get_prompt_spec

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for generation provider errors."""


class ProviderConfigurationError(ProviderError):
    """Raised when a provider is missing or misconfigured."""


class ProviderAPIError(ProviderError):
    """Raised when the provider API returns an error."""


class ProviderResponseError(ProviderError):
    """Raised when the provider reply is empty or not a JSON object."""


# Matches a fenced block: ```json ... ``` or ``` ... ```
_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from a model reply.

    Tolerates Markdown code fences and prose around the object.

    Args:
        text: Raw reply text

    Returns:
        Parsed JSON object

    Raises:
        ProviderResponseError: If no JSON object can be parsed

    Examples:
        >>> extract_json('```json\\n{"name": "Goblin"}\\n```')
        {'name': 'Goblin'}
    """
    if not text or not text.strip():
        raise ProviderResponseError("Empty response from provider")

    candidate = text.strip()
    fenced = _FENCE_PATTERN.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        start = candidate.find("{")
        end = candidate.rfind("}")
        if start == -1 or end <= start:
            raise ProviderResponseError("Invalid JSON response from provider")
        try:
            data = json.loads(candidate[start : end + 1])
        except json.JSONDecodeError as e:
            raise ProviderResponseError(f"Invalid JSON response from provider: {e}") from e

    if not isinstance(data, dict):
        raise ProviderResponseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class GenerationProvider(ABC):
    """Base class for LLM-backed content providers."""

    name: str = ""

    def __init__(self, model: str) -> None:
        self.model = model

    async def generate(
        self,
        kind: ContentKind,
        prompt: str | None,
        party_level: int = 1,
        party_size: int = 4,
    ) -> dict[str, Any]:
        """Generate raw content data for a kind.

        Args:
            kind: Content kind to generate
            prompt: User request, or None for the kind's default
            party_level: Average party level (encounters)
            party_size: Number of party members (encounters)

        Returns:
            Parsed JSON object as returned by the model

        Raises:
            ProviderAPIError: If the API call fails
            ProviderResponseError: If the reply is not a JSON object
        """
        spec = get_prompt_spec(kind)
        system = spec.system_prompt(party_level=party_level, party_size=party_size)
        user = build_user_prompt(kind, prompt, party_level, party_size)

        logger.info(f"Generating {kind.value} with {self.name} ({self.model})")
        text = await self.complete(system, user, spec.max_tokens, spec.temperature)
        return extract_json(text)

    @abstractmethod
    async def complete(self, system: str, user: str, max_tokens: int, temperature: float) -> str:
        """Send one system/user exchange and return the reply text."""


class AnthropicProvider(GenerationProvider):
    """Provider backed by the Anthropic Messages API."""

    name = "anthropic"

    def __init__(self, api_key: str, model: str, client: Any = None) -> None:
        super().__init__(model)
        if client is None:
            if not api_key:
                raise ProviderConfigurationError("ANTHROPIC_API_KEY is required")
            client = AsyncAnthropic(api_key=api_key)
        self.client = client

    async def complete(self, system: str, user: str, max_tokens: int, temperature: float) -> str:
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except anthropic.RateLimitError as e:
            logger.error(f"Anthropic rate limit exceeded: {e}")
            raise ProviderAPIError(f"Rate limit exceeded: {e}") from e
        except anthropic.APIError as e:
            logger.error(f"Anthropic API error: {e}")
            raise ProviderAPIError(f"API error: {e}") from e

        # The response content is a list of content blocks
        text = "".join(block.text for block in message.content if getattr(block, "type", None) == "text")
        if not text:
            raise ProviderResponseError("Invalid response type from Anthropic")
        return text


class OpenAIProvider(GenerationProvider):
    """Provider backed by the OpenAI Chat Completions API."""

    name = "openai"

    def __init__(self, api_key: str, model: str, client: Any = None) -> None:
        super().__init__(model)
        if client is None:
            if not api_key:
                raise ProviderConfigurationError("OPENAI_API_KEY is required")
            client = AsyncOpenAI(api_key=api_key)
        self.client = client

    async def complete(self, system: str, user: str, max_tokens: int, temperature: float) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.RateLimitError as e:
            logger.error(f"OpenAI rate limit exceeded: {e}")
            raise ProviderAPIError(f"Rate limit exceeded: {e}") from e
        except openai.APIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise ProviderAPIError(f"API error: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ProviderResponseError("No response from OpenAI")
        return content
