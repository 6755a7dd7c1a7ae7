"""Tests for directive resolution."""

import asyncio

import pytest

from adventure_scribe.commands.scanner import scan_directives
from adventure_scribe.content.catalog import CATALOG, entries_for_kind
from adventure_scribe.content.models import ContentKind, Encounter, Item, Monster
from adventure_scribe.engine.resolver import (
    ContentResolver,
    Failure,
    FailureReason,
    Success,
)
from adventure_scribe.testing import FakeGenerationService


def directive(text: str):
    """Scan text expected to hold exactly one directive."""
    directives = scan_directives(text)
    assert len(directives) == 1
    return directives[0]


class TestUnknownCommands:
    """Tests for commands missing from the registry."""

    @pytest.mark.asyncio
    async def test_unknown_command_fails(self, resolver):
        """Unknown names resolve to UnknownCommand."""
        result = await resolver.resolve(directive("/summon-dragon red"))

        assert not result.ok
        assert isinstance(result.outcome, Failure)
        assert result.outcome.reason == FailureReason.UNKNOWN_COMMAND
        assert "summon-dragon" in result.outcome.detail


class TestLibraryResolution:
    """Tests for library-backed commands."""

    @pytest.mark.asyncio
    async def test_exact_match(self, resolver):
        """Named content comes from the catalog."""
        result = await resolver.resolve(directive("/add-monster Goblin"))

        assert result.ok
        assert result.outcome.source == "library"
        assert result.outcome.payload.name == "Goblin"
        assert result.outcome.payload.hit_points == 7

    @pytest.mark.asyncio
    async def test_fuzzy_match(self, resolver):
        """Partial names match catalog entries."""
        result = await resolver.resolve(directive("/add-npc sildar"))

        assert result.outcome.payload.name == "Sildar Hallwinter"

    @pytest.mark.asyncio
    async def test_short_form_command(self, resolver):
        """Short palette commands behave like their add- forms."""
        result = await resolver.resolve(directive("/spell fireball"))

        assert result.outcome.payload.name == "Fireball"

    @pytest.mark.asyncio
    async def test_no_match_synthesizes(self, resolver):
        """Unmatched names get a stand-in named after the argument."""
        result = await resolver.resolve(directive("/add-monster Frost Troll"))

        assert result.ok
        assert result.outcome.source == "synthesized"
        assert isinstance(result.outcome.payload, Monster)
        assert result.outcome.payload.name == "Frost Troll"

    @pytest.mark.asyncio
    async def test_random_pick_uses_rand_func(self):
        """Bare commands pick with the injected random function."""
        calls = []

        def pick_last(low, high):
            calls.append((low, high))
            return high

        resolver = ContentResolver(rand_func=pick_last)
        result = await resolver.resolve(directive("/add-trap"))

        traps = entries_for_kind(ContentKind.TRAP)
        assert calls == [(0, len(traps) - 1)]
        assert result.outcome.payload is traps[-1].payload
        assert result.outcome.source == "library"

    @pytest.mark.asyncio
    async def test_random_pick_is_deterministic(self):
        """The same random source yields the same picks."""
        first = ContentResolver(rand_func=lambda low, high: 1)
        second = ContentResolver(rand_func=lambda low, high: 1)

        a = await first.resolve(directive("/add-item"))
        b = await second.resolve(directive("/add-item"))

        assert a.outcome.payload is b.outcome.payload

    @pytest.mark.asyncio
    async def test_empty_category_synthesizes(self):
        """A kind with no entries still resolves."""
        catalog = [entry for entry in CATALOG if entry.kind != ContentKind.ITEM]
        resolver = ContentResolver(catalog=catalog)

        result = await resolver.resolve(directive("/add-item"))

        assert result.outcome.source == "synthesized"
        assert isinstance(result.outcome.payload, Item)
        assert result.outcome.payload.name == "Custom Item"

    @pytest.mark.asyncio
    async def test_library_never_calls_generator(self, resolver, fake_generator):
        """Library commands stay offline."""
        await resolver.resolve(directive("/add-monster Goblin"))

        assert fake_generator.calls == []


class TestGeneratedResolution:
    """Tests for AI-backed commands."""

    @pytest.mark.asyncio
    async def test_success(self, resolver, fake_generator):
        """Valid collaborator data becomes a payload."""
        result = await resolver.resolve(directive("/ai-monster a frost wyrmling"))

        assert result.ok
        assert isinstance(result.outcome, Success)
        assert result.outcome.payload.name == "Frost Wyrmling"
        assert result.outcome.source == "generated:fake"

        call = fake_generator.calls[0]
        assert call.content_type == "monster"
        assert call.prompt == "a frost wyrmling"
        assert call.extra == {"party_level": 1, "party_size": 4}

    @pytest.mark.asyncio
    async def test_default_prompt_without_argument(self, resolver, fake_generator):
        """A bare AI command sends the kind's default prompt."""
        await resolver.resolve(directive("/ai-monster"))

        assert fake_generator.calls[0].prompt == "Create a unique monster"

    @pytest.mark.asyncio
    async def test_party_details_forwarded(self):
        """Party level and size reach the collaborator."""
        generator = FakeGenerationService()
        resolver = ContentResolver(generator=generator, provider="openai", party_level=5, party_size=3)

        await resolver.resolve(directive("/ai-encounter ogres at the bridge"))

        call = generator.calls[0]
        assert call.provider == "openai"
        assert call.extra == {"party_level": 5, "party_size": 3}

    @pytest.mark.asyncio
    async def test_unsuccessful_response(self, resolver, fake_generator):
        """success=False maps to CollaboratorUnavailable."""
        fake_generator.set_error("monster", "Rate limit exceeded")

        result = await resolver.resolve(directive("/ai-monster dragon"))

        assert result.outcome.reason == FailureReason.COLLABORATOR_UNAVAILABLE
        assert result.outcome.detail == "Rate limit exceeded"

    @pytest.mark.asyncio
    async def test_collaborator_exception(self, resolver, fake_generator):
        """Raised errors map to CollaboratorUnavailable."""
        fake_generator.set_exception("monster", ConnectionError("network down"))

        result = await resolver.resolve(directive("/ai-monster dragon"))

        assert result.outcome.reason == FailureReason.COLLABORATOR_UNAVAILABLE
        assert "network down" in result.outcome.detail

    @pytest.mark.asyncio
    async def test_invalid_payload_shape(self, resolver, fake_generator):
        """Data failing validation maps to PayloadShapeInvalid."""
        fake_generator.set_response("monster", {"name": "Blob"})

        result = await resolver.resolve(directive("/ai-monster blob"))

        assert result.outcome.reason == FailureReason.PAYLOAD_SHAPE_INVALID
        assert "hitPoints" in result.outcome.detail or "hit_points" in result.outcome.detail

    @pytest.mark.asyncio
    async def test_timeout(self, monster_data):
        """Slow collaborators map to Timeout."""
        generator = FakeGenerationService(responses={"monster": monster_data}, delay=1.0)
        resolver = ContentResolver(generator=generator)

        result = await resolver.resolve(directive("/ai-monster slowpoke"), timeout=0.01)

        assert result.outcome.reason == FailureReason.TIMEOUT

    @pytest.mark.asyncio
    async def test_no_generator(self):
        """Without a collaborator, AI commands fail cleanly."""
        resolver = ContentResolver()

        result = await resolver.resolve(directive("/ai-npc a bard"))

        assert result.outcome.reason == FailureReason.COLLABORATOR_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_encounter_payload(self):
        """Encounter data validates as an Encounter."""
        generator = FakeGenerationService(
            responses={
                "encounter": {
                    "name": "Bridge Trolls",
                    "description": "Two trolls demand a toll.",
                    "difficulty": "Hard",
                    "creatures": [{"name": "Troll", "quantity": 2, "challengeRating": 5}],
                    "experience": 3600,
                }
            }
        )
        resolver = ContentResolver(generator=generator)

        result = await resolver.resolve(directive("/ai-encounter trolls"))

        assert isinstance(result.outcome.payload, Encounter)
        assert result.outcome.payload.creatures[0].challenge_rating == "5"

    @pytest.mark.asyncio
    async def test_concurrent_resolutions_are_independent(self, resolver, fake_generator):
        """Resolutions share no state."""
        fake_generator.set_error("npc", "unavailable")
        results = await asyncio.gather(
            resolver.resolve(directive("/ai-monster wyrm")),
            resolver.resolve(directive("/ai-npc bard")),
            resolver.resolve(directive("/add-monster Goblin")),
        )

        assert [r.ok for r in results] == [True, False, True]
        assert [call.prompt for call in fake_generator.get_calls_for("monster")] == ["wyrm"]
        assert [call.prompt for call in fake_generator.get_calls_for("npc")] == ["bard"]
        assert len(fake_generator.calls) == 2
