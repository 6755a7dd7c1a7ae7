"""Fake LLM provider for testing.

Replaces a hosted model with canned reply text so the provider pipeline
(prompt building, JSON extraction, error mapping) can run offline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from adventure_scribe.generation.providers import GenerationProvider

logger = logging.getLogger(__name__)


@dataclass
class Completion:
    """Record of a complete() call."""

    system: str
    user: str
    max_tokens: int
    temperature: float


class FakeProvider(GenerationProvider):
    """Provider that answers with canned text.

    Example:
        >>> provider = FakeProvider(replies=['{"name": "Goblin"}'])
        >>> await provider.generate(ContentKind.MONSTER, "goblin")
        {'name': 'Goblin'}
    """

    def __init__(
        self,
        replies: list[str] | None = None,
        name: str = "fake",
        error: Exception | None = None,
    ):
        """Initialize the fake provider.

        Args:
            replies: Reply texts returned in order, cycling when exhausted
            name: Provider name
            error: Exception raised by every call instead of replying
        """
        super().__init__(model="fake-model")
        self.name = name
        self.replies = replies or ["{}"]
        self.error = error
        self.completions: list[Completion] = []

    async def complete(self, system: str, user: str, max_tokens: int, temperature: float) -> str:
        self.completions.append(Completion(system, user, max_tokens, temperature))
        logger.debug(f"FakeProvider: complete({user[:50]!r})")
        if self.error is not None:
            raise self.error
        return self.replies[(len(self.completions) - 1) % len(self.replies)]
