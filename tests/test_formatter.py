"""Tests for payload markup rendering."""

import pytest

from adventure_scribe.commands.scanner import scan_directives
from adventure_scribe.content.catalog import get_entry
from adventure_scribe.content.defaults import synthesize_payload
from adventure_scribe.content.formatter import (
    FormatterError,
    challenge_xp,
    format_payload,
    ordinal,
)
from adventure_scribe.content.models import ContentKind, Location, Monster, Spell


class TestOrdinal:
    """Tests for ordinal function."""

    @pytest.mark.parametrize(
        "number,expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (9, "9th"), (11, "11th"), (12, "12th"), (21, "21th")],
    )
    def test_suffixes(self, number, expected):
        """Only 1, 2 and 3 get special suffixes."""
        assert ordinal(number) == expected


class TestMonsterRendering:
    """Tests for monster stat blocks."""

    def test_goblin_block(self):
        """The goblin block shows its core stats."""
        markup = format_payload(get_entry("monster-goblin").payload)

        assert 'data-kind="monster"' in markup
        assert "Goblin" in markup
        assert "<strong>Armor Class</strong> 15 (leather armor, shield)" in markup
        assert "<strong>Hit Points</strong> 7 (2d6)" in markup
        assert "1&#47;4 (50 XP)" in markup
        assert "Scimitar." in markup

    def test_ability_row(self):
        """Abilities render as six columns with modifiers."""
        markup = format_payload(get_entry("monster-goblin").payload)

        assert "<th>STR</th><th>DEX</th><th>CON</th><th>INT</th><th>WIS</th><th>CHA</th>" in markup
        assert "<td>8 (-1)</td><td>14 (+2)</td><td>10 (+0)</td>" in markup

    def test_absent_optional_fields_use_placeholders(self, monster_data):
        """Missing senses fall back to placeholder text."""
        del monster_data["senses"]
        del monster_data["languages"]
        markup = format_payload(Monster.model_validate(monster_data))

        assert "<strong>Senses</strong> Not specified" in markup
        assert "<strong>Languages</strong> None" in markup

    def test_challenge_xp(self):
        """XP comes from the challenge rating table."""
        assert challenge_xp("1/4") == 50
        assert challenge_xp("5") == 1800
        assert challenge_xp("31") is None


class TestSpellRendering:
    """Tests for spell rendering."""

    def test_leveled_spell(self):
        """Leveled spells show ordinal level and school."""
        markup = format_payload(get_entry("spell-fireball").payload)

        assert "3rd-level evocation" in markup

    def test_cantrip(self):
        """Level 0 spells render as cantrips."""
        markup = format_payload(get_entry("spell-sacred-flame").payload)

        assert "Evocation cantrip" in markup

    def test_concentration_and_ritual(self):
        """Concentration prefixes duration; ritual tags the subtitle."""
        spell = Spell(
            name="Detect Magic",
            level=1,
            school="divination",
            casting_time="1 action",
            range="Self",
            components="V, S",
            duration="Up to 10 minutes",
            concentration=True,
            ritual=True,
            description="You sense magic within 30 feet.",
        )
        markup = format_payload(spell)

        assert "1st-level divination (ritual)" in markup
        assert "Concentration, Up to 10 minutes" in markup


class TestEscaping:
    """Tests for markup safety."""

    def test_html_escaped(self):
        """Text is HTML-escaped."""
        location = Location(name="<script>alert(1)</script>", description="Tom & Jerry's")
        markup = format_payload(location)

        assert "<script>" not in markup
        assert "&lt;script&gt;" in markup
        assert "Tom &amp; Jerry&#x27;s" in markup

    def test_slashes_escaped(self):
        """Slashes in text never survive as directive text."""
        location = Location(name="Trap Room", description="Someone scrawled /add-monster Goblin here")
        markup = format_payload(location)

        assert "&#47;add-monster Goblin" in markup
        assert scan_directives(markup) == []

    def test_range_text_with_slash(self):
        """Ranges like 80/320 ft. stay readable but inert."""
        markup = format_payload(synthesize_payload(ContentKind.MONSTER, "Bandit"))

        assert "80&#47;320 ft." in markup
        assert scan_directives(markup) == []


class TestFormatPayload:
    """Tests for format_payload dispatch."""

    @pytest.mark.parametrize("kind", list(ContentKind))
    def test_every_kind_renders(self, kind):
        """Each kind renders a self-contained block."""
        payload = synthesize_payload(kind, "Test Content")
        markup = format_payload(payload)

        assert markup.startswith(f'<div class="stat-block {kind.value}-block"')
        assert markup.endswith("</div>")
        assert "Test Content" in markup
        assert 'style="' in markup

    def test_directive_in_markup_raises(self, monkeypatch):
        """Markup that would scan as a directive is a formatter defect."""
        monkeypatch.setattr(
            "adventure_scribe.content.formatter.RENDERERS",
            {ContentKind.LOCATION: lambda payload: ["<p> /add-monster Goblin</p>"]},
        )

        with pytest.raises(FormatterError):
            format_payload(Location(name="Cave", description="Dark"))

    def test_missing_renderer_raises(self, monkeypatch):
        """Kinds without a renderer raise FormatterError."""
        monkeypatch.setattr("adventure_scribe.content.formatter.RENDERERS", {})

        with pytest.raises(FormatterError):
            format_payload(Location(name="Cave", description="Dark"))
