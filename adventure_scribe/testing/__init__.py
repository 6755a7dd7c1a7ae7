"""Testing utilities for Adventure Scribe.

This package provides:
- FakeGenerationService: Stand-in generation collaborator that records calls
- FakeProvider: LLM provider that answers with canned text
"""

from adventure_scribe.testing.fake_generator import FakeGenerationService, GenerationCall
from adventure_scribe.testing.fake_provider import Completion, FakeProvider

__all__ = [
    "FakeGenerationService",
    "GenerationCall",
    "FakeProvider",
    "Completion",
]
