"""Markup rendering for content payloads.

This module turns a validated payload into the HTML fragment that replaces a
slash command in the adventure document. Fragments are self-contained (inline
styles only) so they survive export unchanged.

Every text value is HTML-escaped and its slashes are written as '&#47;', so a
rendered fragment never contains text the directive scanner would pick up
again.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Callable

from adventure_scribe.commands.scanner import has_directives
from adventure_scribe.content.models import (
    NPC,
    AbilityScores,
    Action,
    ContentKind,
    ContentPayload,
    Encounter,
    Item,
    Location,
    Monster,
    Spell,
    Trap,
)

logger = logging.getLogger(__name__)


class FormatterError(Exception):
    """Raised when a payload cannot be rendered into safe markup.

    This indicates a programming defect, not a user-facing failure.
    """


BLOCK_STYLE = (
    "border: 2px solid #8B0000; border-radius: 8px; padding: 16px; "
    "margin: 16px 0; background: #f9f9f9;"
)
TITLE_STYLE = "color: #8B0000; margin: 0 0 8px 0;"
SUBTITLE_STYLE = "font-style: italic; margin: 4px 0; color: #666;"
TABLE_STYLE = "width: 100%; text-align: center; border-collapse: collapse; margin: 8px 0;"
READ_ALOUD_STYLE = "margin: 8px 0; padding: 8px; background: #fff; border-left: 4px solid #8B0000;"

PLACEHOLDER = "Not specified"

# XP awarded by challenge rating
CHALLENGE_XP: dict[str, int] = {
    "0": 10,
    "1/8": 25,
    "1/4": 50,
    "1/2": 100,
    "1": 200,
    "2": 450,
    "3": 700,
    "4": 1100,
    "5": 1800,
    "6": 2300,
    "7": 2900,
    "8": 3900,
    "9": 5000,
    "10": 5900,
    "11": 7200,
    "12": 8400,
    "13": 10000,
    "14": 11500,
    "15": 13000,
    "16": 15000,
    "17": 18000,
    "18": 20000,
    "19": 22000,
    "20": 25000,
    "21": 33000,
    "22": 41000,
    "23": 50000,
    "24": 62000,
    "25": 75000,
    "26": 90000,
    "27": 105000,
    "28": 120000,
    "29": 135000,
    "30": 155000,
}


def ordinal(number: int) -> str:
    """Format a number with a simple ordinal suffix.

    Only 1, 2 and 3 get special suffixes; everything else uses 'th', so
    11 -> '11th' but also 21 -> '21th'.

    Examples:
        >>> ordinal(1)
        '1st'
        >>> ordinal(3)
        '3rd'
        >>> ordinal(11)
        '11th'
    """
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number, "th")
    return f"{number}{suffix}"


def _text(value: Any, placeholder: str = PLACEHOLDER) -> str:
    """Escape a value for markup, substituting a placeholder when absent."""
    if value is None or value == "" or value == []:
        value = placeholder
    if hasattr(value, "value"):
        value = value.value
    return html.escape(str(value), quote=True).replace("/", "&#47;")


def _signed(number: int) -> str:
    return f"{number:+d}"


def _title(name: str, level: int = 3) -> str:
    return f'<h{level} style="{TITLE_STYLE}">{_text(name)}</h{level}>'


def _subtitle(text: str) -> str:
    return f'<p style="{SUBTITLE_STYLE}">{_text(text)}</p>'


def _field(label: str, value: Any, placeholder: str = PLACEHOLDER) -> str:
    return f"<p><strong>{_text(label)}:</strong> {_text(value, placeholder)}</p>"


def _bullets(values: list[str]) -> str:
    items = "".join(f"<li>{_text(value)}</li>" for value in values)
    return f"<ul>{items}</ul>"


def _section(heading: str) -> str:
    return f"<hr>\n<h4>{_text(heading)}</h4>"


def _ability_table(abilities: AbilityScores) -> str:
    """Six-column ability score row with modifiers."""
    scores = abilities.as_list()
    header = "".join(f"<th>{abbr}</th>" for abbr, _ in scores)
    cells = "".join(
        f"<td>{score} ({_signed(AbilityScores.modifier(score))})</td>" for _, score in scores
    )
    return (
        f'<table class="ability-scores" style="{TABLE_STYLE}">'
        f"<tr>{header}</tr><tr>{cells}</tr></table>"
    )


def _actions(actions: list[Action]) -> list[str]:
    return [f"<p><strong>{_text(action.name)}.</strong> {_text(action.description)}</p>" for action in actions]


def _modifier_list(values: dict[str, int]) -> str:
    return ", ".join(f"{name.title()} {_signed(bonus)}" for name, bonus in values.items())


def challenge_xp(challenge_rating: str) -> int | None:
    """XP value for a challenge rating, or None if unknown."""
    return CHALLENGE_XP.get(challenge_rating.strip())


def render_monster(monster: Monster) -> list[str]:
    """Render a monster stat block."""
    armor = f"{monster.armor_class}"
    if monster.armor_description:
        armor += f" ({monster.armor_description})"
    hit_points = f"{monster.hit_points}"
    if monster.hit_dice:
        hit_points += f" ({monster.hit_dice})"

    xp = challenge_xp(monster.challenge_rating)
    challenge = monster.challenge_rating + (f" ({xp:,} XP)" if xp is not None else "")

    lines = [
        _title(monster.name),
        _subtitle(f"{monster.size} {monster.type}, {monster.alignment}"),
        "<hr>",
        f"<p><strong>Armor Class</strong> {_text(armor)}<br>",
        f"<strong>Hit Points</strong> {_text(hit_points)}<br>",
        f"<strong>Speed</strong> {_text(monster.speed)}</p>",
        _ability_table(monster.abilities),
        "<p>",
    ]
    if monster.saving_throws:
        lines.append(f"<strong>Saving Throws</strong> {_text(_modifier_list(monster.saving_throws))}<br>")
    if monster.skills:
        lines.append(f"<strong>Skills</strong> {_text(_modifier_list(monster.skills))}<br>")
    if monster.damage_resistances:
        lines.append(f"<strong>Damage Resistances</strong> {_text(', '.join(monster.damage_resistances))}<br>")
    if monster.damage_immunities:
        lines.append(f"<strong>Damage Immunities</strong> {_text(', '.join(monster.damage_immunities))}<br>")
    if monster.condition_immunities:
        lines.append(f"<strong>Condition Immunities</strong> {_text(', '.join(monster.condition_immunities))}<br>")
    lines.append(f"<strong>Senses</strong> {_text(monster.senses)}<br>")
    lines.append(f"<strong>Languages</strong> {_text(monster.languages, 'None')}<br>")
    lines.append(f"<strong>Challenge</strong> {_text(challenge)}")
    if monster.proficiency_bonus is not None:
        lines.append(f" <strong>Proficiency Bonus</strong> {_signed(monster.proficiency_bonus)}")
    lines.append("</p>")

    lines.append(_section("Actions"))
    lines.extend(_actions(monster.actions))
    if monster.reactions:
        lines.append(_section("Reactions"))
        lines.extend(_actions(monster.reactions))
    if monster.legendary_actions:
        lines.append(_section("Legendary Actions"))
        lines.extend(_actions(monster.legendary_actions))
    if monster.description:
        lines.append(_section("Description"))
        lines.append(f"<p>{_text(monster.description)}</p>")
    return lines


def render_npc(npc: NPC) -> list[str]:
    """Render an NPC with roleplay sections."""
    identity = npc.race
    if npc.npc_class:
        identity += f" {npc.npc_class}"
        if npc.level:
            identity += f" ({ordinal(npc.level)} level)"
    lines = [
        _title(npc.name),
        _subtitle(f"{identity}, {npc.alignment}"),
        "<hr>",
    ]
    if npc.stats:
        lines.append(_ability_table(npc.stats))

    lines.append(_section("Personality"))
    lines.append(_field("Personality Traits", npc.personality))
    lines.append(_field("Ideals", npc.ideals))
    lines.append(_field("Bonds", npc.bonds))
    lines.append(_field("Flaws", npc.flaws))

    lines.append(_section("Appearance & Background"))
    lines.append(_field("Appearance", npc.appearance))
    lines.append(_field("Background", npc.background))
    if npc.skills:
        lines.append(_field("Skills", ", ".join(npc.skills)))
    if npc.equipment:
        lines.append(_field("Equipment", ", ".join(npc.equipment)))
    if npc.notes:
        lines.append(_field("Notes", npc.notes))
    return lines


def render_item(item: Item) -> list[str]:
    """Render a magic or mundane item."""
    subtitle = f"{item.type.value.title()}, {item.rarity.value}"
    if item.requires_attunement:
        subtitle += " (requires attunement)"
    lines = [
        _title(item.name, level=4),
        _subtitle(subtitle),
        "<hr>",
        f"<p>{_text(item.description)}</p>",
    ]
    if item.damage:
        damage = item.damage + (f" {item.damage_type}" if item.damage_type else "")
        lines.append(_field("Damage", damage))
    if item.armor_class is not None:
        lines.append(_field("Armor Class", item.armor_class))
    if item.properties:
        lines.append(_field("Properties", ", ".join(item.properties)))
    for prop in item.magical_properties:
        lines.append(f"<p>{_text(prop)}</p>")
    if item.weight is not None:
        lines.append(_field("Weight", f"{item.weight:g} lb."))
    if item.cost is not None:
        lines.append(_field("Cost", f"{item.cost.amount:g} {item.cost.currency}"))
    return lines


def render_spell(spell: Spell) -> list[str]:
    """Render a spell, with level text like '3rd-level evocation'."""
    school = spell.school.value
    if spell.level == 0:
        subtitle = f"{school.title()} cantrip"
    else:
        subtitle = f"{ordinal(spell.level)}-level {school}"
    if spell.ritual:
        subtitle += " (ritual)"

    duration = spell.duration
    if spell.concentration:
        duration = f"Concentration, {duration}"

    lines = [
        _title(spell.name),
        _subtitle(subtitle),
        "<hr>",
        _field("Casting Time", spell.casting_time),
        _field("Range", spell.range),
        _field("Components", spell.components.short_form(), "None"),
        _field("Duration", duration),
        f"<p>{_text(spell.description)}</p>",
    ]
    if spell.higher_levels:
        lines.append(f"<p><strong><em>At Higher Levels.</em></strong> {_text(spell.higher_levels)}</p>")
    if spell.classes:
        lines.append(_field("Classes", ", ".join(spell.classes)))
    return lines


def render_trap(trap: Trap) -> list[str]:
    """Render a trap with detection and disarm details."""
    lines = [
        _title(trap.name, level=4),
        _subtitle(f"{trap.type.value.title()} trap"),
        "<hr>",
        f"<p>{_text(trap.description)}</p>",
        _field("Trigger", trap.trigger),
        _field("Detection", f"DC {trap.detect_dc} Wisdom (Perception)"),
        _field("Disarm", f"DC {trap.disarm_dc}"),
        _section("Effect"),
        f"<p>{_text(trap.effect)}</p>",
    ]
    if trap.saving_throw:
        save = trap.saving_throw
        lines.append(_field("Saving Throw", f"DC {save.dc} {save.ability.title()}. {save.effect}"))
    if trap.damage:
        damage = trap.damage + (f" {trap.damage_type}" if trap.damage_type else "")
        lines.append(_field("Damage", damage))
    return lines


def render_encounter(encounter: Encounter) -> list[str]:
    """Render an encounter with creatures, tactics and treasure."""
    creatures = []
    for creature in encounter.creatures:
        line = f"{creature.quantity} × {creature.name}"
        if creature.challenge_rating:
            line += f" (CR {creature.challenge_rating})"
        creatures.append(line)

    lines = [
        _title(encounter.name),
        _field("Difficulty", encounter.difficulty.value.title()),
        _field("Environment", encounter.environment, "Various"),
        _field("Experience", f"{encounter.experience:,} XP"),
        "<hr>",
        f"<p>{_text(encounter.description)}</p>",
        _section("Creatures"),
        _bullets(creatures),
        _section("Tactics"),
        f"<p>{_text(encounter.tactics)}</p>",
    ]
    if encounter.treasures:
        lines.append(_section("Treasure"))
        lines.append(_bullets([treasure.name for treasure in encounter.treasures]))
    if encounter.notes:
        lines.append(_field("Notes", encounter.notes))
    return lines


def render_location(location: Location) -> list[str]:
    """Render a location with read-aloud text and notable features."""
    lines = [_title(location.name)]
    if location.location_type:
        lines.append(_subtitle(location.location_type))
    lines.append("<hr>")
    if location.read_aloud:
        lines.append(f'<div class="read-aloud" style="{READ_ALOUD_STYLE}"><em>{_text(location.read_aloud)}</em></div>')
    lines.append(f"<p>{_text(location.description)}</p>")

    for heading, values in (
        ("Features", location.features),
        ("Inhabitants", location.inhabitants),
        ("Treasure", location.treasure),
        ("Exits", location.exits),
    ):
        if values:
            lines.append(_section(heading))
            lines.append(_bullets(values))
    return lines


# Single dispatch table from kind to renderer
RENDERERS: dict[ContentKind, Callable[[Any], list[str]]] = {
    ContentKind.MONSTER: render_monster,
    ContentKind.NPC: render_npc,
    ContentKind.ITEM: render_item,
    ContentKind.SPELL: render_spell,
    ContentKind.TRAP: render_trap,
    ContentKind.ENCOUNTER: render_encounter,
    ContentKind.LOCATION: render_location,
}


def format_payload(payload: ContentPayload) -> str:
    """Render a payload into a self-contained markup fragment.

    Args:
        payload: A validated content payload

    Returns:
        HTML fragment wrapped in a styled block

    Raises:
        FormatterError: If no renderer exists for the payload kind, or the
            rendered markup would be scanned as a directive
    """
    renderer = RENDERERS.get(payload.kind)
    if renderer is None:
        raise FormatterError(f"No renderer for content kind: {payload.kind}")

    body = "\n".join(renderer(payload))
    kind = payload.kind.value
    markup = (
        f'<div class="stat-block {kind}-block" data-kind="{kind}" style="{BLOCK_STYLE}">\n'
        f"{body}\n"
        "</div>"
    )

    if has_directives(markup):
        logger.error(f"Rendered {kind} markup for {payload.name!r} contains directive text")
        raise FormatterError(f"Rendered {kind} markup contains directive text")
    return markup
