"""Content resolution for scanned directives.

The resolver turns one directive into either a validated payload or a
failure value. Library commands always succeed for a known kind (catalog
match, random pick, or a synthesized stand-in); AI commands go through the
generation collaborator and can fail.

Each resolution is independent: no state is shared between calls, so a pass
can resolve many directives concurrently.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from pydantic import ValidationError

from adventure_scribe.commands.registry import CommandSpec, ResolutionStrategy, get_command
from adventure_scribe.commands.scanner import Directive
from adventure_scribe.content.catalog import CATALOG, LibraryEntry, entries_for_kind, find_entry
from adventure_scribe.content.defaults import synthesize_payload
from adventure_scribe.content.models import ContentPayload, validate_payload
from adventure_scribe.generation.prompts import get_prompt_spec
from adventure_scribe.generation.service import GenerationClient

logger = logging.getLogger(__name__)

# Type alias for random function (allows mocking in tests)
RandomFunc = Callable[[int, int], int]


class FailureReason(str, Enum):
    """Why a directive could not be resolved."""

    UNKNOWN_COMMAND = "UnknownCommand"
    PAYLOAD_SHAPE_INVALID = "PayloadShapeInvalid"
    COLLABORATOR_UNAVAILABLE = "CollaboratorUnavailable"
    TIMEOUT = "Timeout"
    FORMATTER_UNREACHABLE = "FormatterUnreachable"


@dataclass(frozen=True)
class Success:
    """A resolved payload and where it came from.

    Source is 'library', 'synthesized', or 'generated:<provider>'.
    """

    payload: ContentPayload
    source: str


@dataclass(frozen=True)
class Failure:
    """A resolution failure with a human-readable detail."""

    reason: FailureReason
    detail: str = ""


Outcome = Union[Success, Failure]


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one directive."""

    directive: Directive
    outcome: Outcome

    @property
    def ok(self) -> bool:
        """True if the directive resolved to a payload."""
        return isinstance(self.outcome, Success)


class ContentResolver:
    """Resolves directives against the catalog or the generation collaborator.

    Example:
        >>> resolver = ContentResolver(rand_func=lambda a, b: a)
        >>> result = await resolver.resolve(scan_directives("/add-monster Goblin")[0])
        >>> result.outcome.payload.hit_points
        7
    """

    def __init__(
        self,
        catalog: tuple[LibraryEntry, ...] | list[LibraryEntry] = CATALOG,
        generator: GenerationClient | None = None,
        rand_func: RandomFunc | None = None,
        provider: str | None = None,
        party_level: int = 1,
        party_size: int = 4,
    ) -> None:
        """Initialize the resolver.

        Args:
            catalog: Library entries for library-backed commands
            generator: Generation collaborator for AI commands
            rand_func: Function(min, max) -> int for random picks
            provider: Provider name passed to the collaborator
            party_level: Party level passed with encounter requests
            party_size: Party size passed with encounter requests
        """
        self.catalog = catalog
        self.generator = generator
        self.rand_func = rand_func or random.randint
        self.provider = provider
        self.party_level = party_level
        self.party_size = party_size

    async def resolve(self, directive: Directive, timeout: float | None = None) -> ResolutionResult:
        """Resolve a single directive.

        Args:
            directive: Directive found by the scanner
            timeout: Seconds allowed for an external call, or None for no limit

        Returns:
            ResolutionResult holding a Success or a Failure
        """
        command = get_command(directive.name)
        if command is None:
            logger.warning(f"Unknown command: /{directive.name}")
            return ResolutionResult(
                directive, Failure(FailureReason.UNKNOWN_COMMAND, f"Unknown command: /{directive.name}")
            )

        if command.strategy == ResolutionStrategy.GENERATE:
            outcome = await self._resolve_generated(command, directive.raw_argument, timeout)
        else:
            outcome = self._resolve_library(command, directive.raw_argument)
        return ResolutionResult(directive, outcome)

    def _resolve_library(self, command: CommandSpec, argument: str | None) -> Outcome:
        """Catalog match, random pick, or synthesized stand-in."""
        kind = command.kind
        if argument:
            entry = find_entry(kind, argument, self.catalog)
            if entry is not None:
                logger.debug(f"/{command.name} {argument!r} matched catalog entry {entry.id}")
                return Success(entry.payload, "library")
            logger.info(f"No {kind.value} matching {argument!r}, using a custom {kind.value}")
            return Success(synthesize_payload(kind, argument), "synthesized")

        entries = entries_for_kind(kind, self.catalog)
        if not entries:
            logger.info(f"No {kind.value} entries in catalog, using a custom {kind.value}")
            return Success(synthesize_payload(kind), "synthesized")

        entry = entries[self.rand_func(0, len(entries) - 1)]
        logger.debug(f"/{command.name} picked random entry {entry.id}")
        return Success(entry.payload, "library")

    async def _resolve_generated(self, command: CommandSpec, argument: str | None, timeout: float | None) -> Outcome:
        """Call the collaborator and validate its data."""
        kind = command.kind
        if self.generator is None:
            return Failure(FailureReason.COLLABORATOR_UNAVAILABLE, "No generation service configured")

        prompt = argument or get_prompt_spec(kind).default_prompt
        extra: dict[str, Any] = {"party_level": self.party_level, "party_size": self.party_size}

        try:
            response = await asyncio.wait_for(
                self.generator.generate(kind.value, prompt, self.provider, extra),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"/{command.name} timed out after {timeout}s")
            return Failure(FailureReason.TIMEOUT, f"Generation timed out after {timeout}s")
        except Exception as e:
            logger.warning(f"/{command.name} collaborator error: {e}")
            return Failure(FailureReason.COLLABORATOR_UNAVAILABLE, str(e))

        if not response.success or response.data is None:
            detail = response.error or "Generation failed"
            logger.warning(f"/{command.name} generation failed: {detail}")
            return Failure(FailureReason.COLLABORATOR_UNAVAILABLE, detail)

        try:
            payload = validate_payload(kind, response.data)
        except ValidationError as e:
            logger.warning(f"/{command.name} returned an invalid {kind.value}: {e.error_count()} errors")
            return Failure(FailureReason.PAYLOAD_SHAPE_INVALID, str(e))

        return Success(payload, f"generated:{response.provider or 'unknown'}")
