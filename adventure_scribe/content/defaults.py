"""Synthesized stand-in content for library commands with no catalog match.

When "/add-monster Frost Troll" finds nothing in the catalog, the editor
still gets a usable block: a generic payload of the right kind carrying the
requested name, ready for the author to edit.
"""

from __future__ import annotations

from typing import Callable

from adventure_scribe.content.models import (
    NPC,
    AbilityScores,
    Action,
    ContentKind,
    ContentPayload,
    Encounter,
    EncounterCreature,
    Item,
    Location,
    Monster,
    SavingThrow,
    Spell,
    SpellComponents,
    Trap,
)


def default_monster(name: str) -> Monster:
    """A CR 1/2 humanoid with a melee and a ranged attack."""
    return Monster(
        name=name,
        size="Medium",
        type="humanoid",
        alignment="neutral",
        armor_class=12,
        armor_description="leather armor",
        hit_points=22,
        hit_dice="4d8 + 4",
        speed="30 ft.",
        abilities=AbilityScores(
            strength=13, dexterity=14, constitution=12, intelligence=10, wisdom=11, charisma=10
        ),
        skills={"perception": 2},
        senses="passive Perception 12",
        languages="Common",
        challenge_rating="1/2",
        proficiency_bonus=2,
        actions=[
            Action(
                name="Scimitar",
                description="Melee Weapon Attack: +4 to hit, reach 5 ft., one target. Hit: 5 (1d6 + 2) slashing damage.",
                attack_bonus=4,
                damage="1d6 + 2",
                damage_type="slashing",
            ),
            Action(
                name="Light Crossbow",
                description="Ranged Weapon Attack: +4 to hit, range 80/320 ft., one target. Hit: 6 (1d8 + 2) piercing damage.",
                attack_bonus=4,
                damage="1d8 + 2",
                damage_type="piercing",
            ),
        ],
        description=f"A custom {name} for your adventure.",
    )


def default_npc(name: str) -> NPC:
    """A friendly townsperson using commoner statistics."""
    return NPC(
        name=name,
        race="Human",
        alignment="any alignment",
        background="A local merchant or artisan with deep community ties",
        appearance="Average height with kind eyes and a warm demeanor",
        personality="Friendly and helpful, always ready with a smile",
        ideals="Believes in treating everyone with respect and kindness",
        bonds="Devoted to their community and family",
        flaws="Sometimes too trusting of strangers",
        stats=AbilityScores(
            strength=10, dexterity=10, constitution=10, intelligence=10, wisdom=10, charisma=10
        ),
        notes="Use Commoner statistics (AC 10, HP 4, Speed 30 ft.).",
    )


def default_item(name: str) -> Item:
    return Item(
        name=name,
        type="wondrous",
        rarity="common",
        description=f"A custom item named {name}. Describe its appearance and properties here.",
    )


def default_spell(name: str) -> Spell:
    return Spell(
        name=name,
        level=1,
        school="evocation",
        casting_time="1 action",
        range="60 feet",
        components=SpellComponents(verbal=True, somatic=True),
        duration="Instantaneous",
        description=f"A custom spell named {name}. Describe its effects here.",
    )


def default_trap(name: str) -> Trap:
    return Trap(
        name=name,
        type="mechanical",
        trigger="A pressure plate hidden in the floor",
        effect="Darts shoot from hidden holes in the walls",
        detect_dc=15,
        disarm_dc=15,
        damage="2d4",
        damage_type="piercing",
        saving_throw=SavingThrow(ability="dexterity", dc=15, effect="Half damage on success"),
        description=f"A custom trap named {name}.",
    )


def default_location(name: str) -> Location:
    return Location(
        name=name,
        description=f"A custom location named {name}. Describe what the characters find here.",
    )


def default_encounter(name: str) -> Encounter:
    return Encounter(
        name=name,
        description=f"A custom encounter: {name}.",
        difficulty="medium",
        creatures=[EncounterCreature(name="Goblin", quantity=4, challenge_rating="1/4")],
        experience=200,
    )


DEFAULT_BUILDERS: dict[ContentKind, Callable[[str], ContentPayload]] = {
    ContentKind.MONSTER: default_monster,
    ContentKind.NPC: default_npc,
    ContentKind.ITEM: default_item,
    ContentKind.SPELL: default_spell,
    ContentKind.TRAP: default_trap,
    ContentKind.LOCATION: default_location,
    ContentKind.ENCOUNTER: default_encounter,
}


def synthesize_payload(kind: ContentKind, name: str | None = None) -> ContentPayload:
    """Build a stand-in payload of a kind.

    Args:
        kind: Content kind to build
        name: Requested name; defaults to 'Custom <Kind>'

    Returns:
        A valid payload named after the request
    """
    label = "NPC" if kind == ContentKind.NPC else kind.value.title()
    name = (name or "").strip() or f"Custom {label}"
    return DEFAULT_BUILDERS[kind](name)
