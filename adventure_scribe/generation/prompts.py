"""Prompt table for content generation.

Each content kind has one entry: the system prompt describing the JSON shape
the model must return, sampling settings, and a fallback user prompt used
when a directive carries no argument.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from adventure_scribe.content.models import ContentKind


@dataclass(frozen=True)
class PromptSpec:
    """Generation settings for one content kind."""

    role: str
    example: dict[str, Any]
    max_tokens: int
    temperature: float
    default_prompt: str

    def system_prompt(self, party_level: int = 1, party_size: int = 4) -> str:
        """Build the system prompt, including party details where relevant."""
        role = self.role.format(party_level=party_level, party_size=party_size)
        shape = json.dumps(self.example, indent=2)
        return f"{role}\nReturn ONLY valid JSON matching this exact structure:\n{shape}"


MONSTER_EXAMPLE = {
    "name": "Monster Name",
    "size": "Medium",
    "type": "humanoid",
    "alignment": "neutral evil",
    "armorClass": 15,
    "hitPoints": 58,
    "speed": "30 ft.",
    "abilities": {
        "strength": 16,
        "dexterity": 14,
        "constitution": 16,
        "intelligence": 10,
        "wisdom": 13,
        "charisma": 12,
    },
    "savingThrows": {"dex": 4, "wis": 3},
    "skills": {"perception": 3, "stealth": 4},
    "damageResistances": ["fire"],
    "damageImmunities": [],
    "conditionImmunities": [],
    "senses": "darkvision 60 ft., passive Perception 13",
    "languages": "Common, Goblin",
    "challengeRating": "3",
    "proficiencyBonus": 2,
    "actions": [
        {"name": "Multiattack", "description": "The monster makes two attacks."},
        {
            "name": "Longsword",
            "description": "Melee Weapon Attack: +5 to hit, reach 5 ft., one target. Hit: 7 (1d8 + 3) slashing damage.",
            "attackBonus": 5,
            "damage": "1d8 + 3",
            "damageType": "slashing",
        },
    ],
    "description": "A detailed description of the monster's appearance and behavior.",
}

NPC_EXAMPLE = {
    "name": "NPC Name",
    "race": "Human",
    "class": "Fighter",
    "level": 5,
    "background": "Soldier",
    "alignment": "lawful good",
    "appearance": "A tall, weathered human with scars from many battles",
    "personality": "Gruff but honorable, speaks in short sentences",
    "ideals": "Protect the innocent at all costs",
    "bonds": "My old regiment is my family",
    "flaws": "I have trouble trusting magic users",
    "stats": {
        "strength": 16,
        "dexterity": 13,
        "constitution": 14,
        "intelligence": 10,
        "wisdom": 12,
        "charisma": 11,
    },
    "skills": ["Athletics", "Intimidation", "Perception"],
    "equipment": ["Plate armor", "Longsword", "Shield", "50 gp"],
    "notes": "Additional roleplay notes and hooks",
}

ITEM_EXAMPLE = {
    "name": "Item Name",
    "type": "weapon",
    "rarity": "uncommon",
    "requiresAttunement": True,
    "description": "Detailed description of the item's appearance and magical properties",
    "properties": ["Versatile", "Magical"],
    "damage": "1d8",
    "damageType": "slashing",
    "weight": 3,
    "cost": {"amount": 500, "currency": "gp"},
    "magicalProperties": [
        "You gain a +1 bonus to attack and damage rolls made with this weapon.",
        "As a bonus action, you can cause the blade to shed bright light in a 10-foot radius.",
    ],
}

SPELL_EXAMPLE = {
    "name": "Spell Name",
    "level": 3,
    "school": "evocation",
    "castingTime": "1 action",
    "range": "120 feet",
    "components": {
        "verbal": True,
        "somatic": True,
        "material": False,
        "materialComponent": "",
    },
    "duration": "Instantaneous",
    "concentration": False,
    "ritual": False,
    "description": "Detailed spell description including effects and mechanics",
    "higherLevels": "When you cast this spell using a spell slot of 4th level or higher...",
    "classes": ["Wizard", "Sorcerer"],
}

TRAP_EXAMPLE = {
    "name": "Trap Name",
    "type": "mechanical",
    "trigger": "Pressure plate activated when stepped on",
    "effect": "Darts shoot from hidden holes in the walls",
    "detectDC": 15,
    "disarmDC": 15,
    "damage": "2d4",
    "damageType": "piercing",
    "savingThrow": {
        "ability": "dexterity",
        "dc": 15,
        "effect": "Half damage on success",
    },
    "description": "Detailed description of the trap's appearance and mechanics",
}

ENCOUNTER_EXAMPLE = {
    "name": "Encounter Name",
    "description": "Detailed description of the encounter setup and environment",
    "difficulty": "medium",
    "environment": "Forest clearing",
    "creatures": [
        {
            "monsterId": "goblin-1",
            "name": "Goblin Scout",
            "quantity": 2,
            "hitPoints": 7,
            "initiative": 0,
            "conditions": [],
            "notes": "Hidden behind trees initially",
        }
    ],
    "treasures": [
        {
            "name": "Potion of Healing",
            "type": "potion",
            "rarity": "common",
            "requiresAttunement": False,
            "description": "A character who drinks this potion regains 2d4 + 2 hit points.",
        }
    ],
    "experience": 200,
    "tactics": "How the creatures fight and when they flee",
    "notes": "Tactical notes and special conditions for the encounter",
}

LOCATION_EXAMPLE = {
    "name": "Location Name",
    "locationType": "Ruined watchtower",
    "readAloud": "Boxed text the DM reads aloud when the party arrives",
    "description": "Detailed description of the location for the DM",
    "features": ["Collapsed stairwell", "Rusted portcullis"],
    "inhabitants": ["Three stirges nesting in the rafters"],
    "treasure": ["A silver signet ring under the rubble"],
    "exits": ["North: forest trail", "Down: flooded cellar"],
}


PROMPTS: dict[ContentKind, PromptSpec] = {
    ContentKind.MONSTER: PromptSpec(
        role="You are a D&D 5e monster designer. Generate a complete monster stat block based on the user's request.",
        example=MONSTER_EXAMPLE,
        max_tokens=1500,
        temperature=0.8,
        default_prompt="Create a unique monster",
    ),
    ContentKind.NPC: PromptSpec(
        role="You are a D&D 5e NPC creator. Generate a complete NPC based on the user's request.",
        example=NPC_EXAMPLE,
        max_tokens=1000,
        temperature=0.9,
        default_prompt="Create an interesting NPC",
    ),
    ContentKind.ITEM: PromptSpec(
        role="You are a D&D 5e magic item creator. Generate a complete magic item based on the user's request.",
        example=ITEM_EXAMPLE,
        max_tokens=800,
        temperature=0.8,
        default_prompt="Create a unique magic item",
    ),
    ContentKind.SPELL: PromptSpec(
        role="You are a D&D 5e spell creator. Generate a complete spell based on the user's request.",
        example=SPELL_EXAMPLE,
        max_tokens=800,
        temperature=0.8,
        default_prompt="Create a new spell",
    ),
    ContentKind.TRAP: PromptSpec(
        role="You are a D&D 5e trap designer. Create a trap based on the user's request.",
        example=TRAP_EXAMPLE,
        max_tokens=600,
        temperature=0.8,
        default_prompt="Create a dungeon trap",
    ),
    ContentKind.ENCOUNTER: PromptSpec(
        role=(
            "You are a D&D 5e encounter designer. Create a balanced encounter for a party "
            "of {party_size} level {party_level} characters."
        ),
        example=ENCOUNTER_EXAMPLE,
        max_tokens=1200,
        temperature=0.8,
        default_prompt="Create a balanced encounter",
    ),
    ContentKind.LOCATION: PromptSpec(
        role="You are a D&D 5e location designer. Describe a location based on the user's request.",
        example=LOCATION_EXAMPLE,
        max_tokens=1000,
        temperature=0.8,
        default_prompt="Create an atmospheric location",
    ),
}


def get_prompt_spec(kind: ContentKind) -> PromptSpec:
    """Get generation settings for a content kind."""
    return PROMPTS[kind]


def build_user_prompt(kind: ContentKind, prompt: str | None, party_level: int = 1, party_size: int = 4) -> str:
    """Build the user message for a request.

    Falls back to the kind's default prompt when none is given. Encounter
    prompts carry the party composition.

    Examples:
        >>> build_user_prompt(ContentKind.ENCOUNTER, "Goblin ambush", 3, 5)
        'Goblin ambush (Party: 5 level 3 characters)'
    """
    text = (prompt or "").strip() or PROMPTS[kind].default_prompt
    if kind == ContentKind.ENCOUNTER:
        text = f"{text} (Party: {party_size} level {party_level} characters)"
    return text
