"""Pydantic models for D&D content payloads.

These models define the schema for every kind of content a slash command can
insert into an adventure document: monsters, NPCs, items, spells, traps,
locations and encounters. Generation providers answer in camelCase JSON, so
every model accepts camelCase keys as well as the snake_case field names.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, ClassVar, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ContentKind(str, Enum):
    """Kinds of content a directive can resolve to."""

    MONSTER = "monster"
    NPC = "npc"
    ITEM = "item"
    SPELL = "spell"
    TRAP = "trap"
    LOCATION = "location"
    ENCOUNTER = "encounter"


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"
    POTION = "potion"
    SCROLL = "scroll"
    WONDROUS = "wondrous"
    TOOL = "tool"
    TREASURE = "treasure"
    RING = "ring"
    ROD = "rod"
    STAFF = "staff"
    WAND = "wand"
    GEAR = "gear"


class ItemRarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very rare"
    LEGENDARY = "legendary"
    ARTIFACT = "artifact"


class SpellSchool(str, Enum):
    ABJURATION = "abjuration"
    CONJURATION = "conjuration"
    DIVINATION = "divination"
    ENCHANTMENT = "enchantment"
    EVOCATION = "evocation"
    ILLUSION = "illusion"
    NECROMANCY = "necromancy"
    TRANSMUTATION = "transmutation"


class TrapType(str, Enum):
    MECHANICAL = "mechanical"
    MAGICAL = "magical"
    NATURAL = "natural"


class EncounterDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DEADLY = "deadly"


def _normalize_enum_text(value: Any) -> Any:
    """Lowercase and trim enum strings ('Very Rare ' -> 'very rare')."""
    if isinstance(value, str):
        return " ".join(value.strip().lower().replace("_", " ").split())
    return value


def _coerce_challenge_rating(value: Any) -> Any:
    """Accept numeric challenge ratings, including the fractional ones."""
    fractions = {0.125: "1/8", 0.25: "1/4", 0.5: "1/2"}
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value in fractions:
        return fractions[value]
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else str(value)
    return value


class ContentModel(BaseModel):
    """Base for all content models: camelCase aliases, immutable instances."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class AbilityScores(ContentModel):
    """D&D 5e ability scores.

    Accepts full names or the abbreviated names (str, dex, ...) used in
    stat block shorthand.
    """

    strength: int = Field(ge=1, le=30, validation_alias=AliasChoices("strength", "str"))
    dexterity: int = Field(ge=1, le=30, validation_alias=AliasChoices("dexterity", "dex"))
    constitution: int = Field(ge=1, le=30, validation_alias=AliasChoices("constitution", "con"))
    intelligence: int = Field(ge=1, le=30, validation_alias=AliasChoices("intelligence", "int"))
    wisdom: int = Field(ge=1, le=30, validation_alias=AliasChoices("wisdom", "wis"))
    charisma: int = Field(ge=1, le=30, validation_alias=AliasChoices("charisma", "cha"))

    ORDER: ClassVar[tuple[str, ...]] = (
        "strength",
        "dexterity",
        "constitution",
        "intelligence",
        "wisdom",
        "charisma",
    )

    @staticmethod
    def modifier(score: int) -> int:
        """Calculate the ability modifier for a score."""
        return (score - 10) // 2

    def as_list(self) -> list[tuple[str, int]]:
        """Scores in stat block order as (abbreviation, score) pairs."""
        return [(name[:3].upper(), getattr(self, name)) for name in self.ORDER]


class Action(ContentModel):
    """A monster action, reaction, or legendary action."""

    name: str = Field(min_length=1)
    description: str
    attack_bonus: int | None = None
    damage: str | None = None
    damage_type: str | None = None


class Payload(ContentModel):
    """Base for top-level payloads. Every payload has a non-empty name."""

    kind: ClassVar[ContentKind]

    name: str = Field(description="Display name of the content")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> Any:
        """Trim the name and reject blank names."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("name must not be empty")
        return v


class Monster(Payload):
    """A D&D 5e monster stat block."""

    kind: ClassVar[ContentKind] = ContentKind.MONSTER

    size: str = "Medium"
    type: str = "humanoid"
    alignment: str = "unaligned"
    armor_class: int = Field(ge=0)
    armor_description: str | None = None
    hit_points: int = Field(ge=1)
    hit_dice: str | None = None
    speed: str = "30 ft."
    abilities: AbilityScores
    saving_throws: dict[str, int] = Field(default_factory=dict)
    skills: dict[str, int] = Field(default_factory=dict)
    damage_resistances: list[str] = Field(default_factory=list)
    damage_immunities: list[str] = Field(default_factory=list)
    condition_immunities: list[str] = Field(default_factory=list)
    senses: str | None = None
    languages: str | None = None
    challenge_rating: str
    proficiency_bonus: int | None = None
    actions: list[Action] = Field(min_length=1)
    legendary_actions: list[Action] = Field(default_factory=list)
    reactions: list[Action] = Field(default_factory=list)
    description: str | None = None

    @field_validator("challenge_rating", mode="before")
    @classmethod
    def validate_challenge_rating(cls, v: Any) -> Any:
        return _coerce_challenge_rating(v)


class NPC(Payload):
    """A non-player character with roleplay details."""

    kind: ClassVar[ContentKind] = ContentKind.NPC

    race: str
    npc_class: str | None = Field(default=None, validation_alias=AliasChoices("class", "npcClass", "npc_class"), serialization_alias="class")
    level: int | None = Field(default=None, ge=1, le=20)
    background: str | None = None
    alignment: str
    appearance: str
    personality: str
    ideals: str | None = None
    bonds: str | None = None
    flaws: str | None = None
    stats: AbilityScores | None = None
    skills: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    notes: str | None = None


class ItemCost(ContentModel):
    amount: float = Field(ge=0)
    currency: str = "gp"


class Item(Payload):
    """A magical or mundane item."""

    kind: ClassVar[ContentKind] = ContentKind.ITEM

    type: ItemType
    rarity: ItemRarity
    requires_attunement: bool = False
    description: str
    properties: list[str] = Field(default_factory=list)
    damage: str | None = None
    damage_type: str | None = None
    armor_class: int | None = None
    weight: float | None = None
    cost: ItemCost | None = None
    magical_properties: list[str] = Field(default_factory=list)

    @field_validator("type", "rarity", mode="before")
    @classmethod
    def normalize_enums(cls, v: Any) -> Any:
        return _normalize_enum_text(v)


class SpellComponents(ContentModel):
    verbal: bool = False
    somatic: bool = False
    material: bool = False
    material_component: str | None = None

    def short_form(self) -> str:
        """Components in stat block shorthand, e.g. 'V, S, M (a feather)'."""
        parts = []
        if self.verbal:
            parts.append("V")
        if self.somatic:
            parts.append("S")
        if self.material:
            parts.append(f"M ({self.material_component})" if self.material_component else "M")
        return ", ".join(parts)


# "V, S, M (a pinch of sulfur)"
_COMPONENT_TEXT = re.compile(r"^\s*([VSM](?:\s*,\s*[VSM])*)\s*(?:\((.*)\))?\s*$", re.IGNORECASE)


class Spell(Payload):
    """A spell description."""

    kind: ClassVar[ContentKind] = ContentKind.SPELL

    level: int = Field(ge=0, le=9)
    school: SpellSchool
    casting_time: str
    range: str
    components: SpellComponents
    duration: str
    concentration: bool = False
    ritual: bool = False
    description: str
    higher_levels: str | None = None
    classes: list[str] = Field(default_factory=list)

    @field_validator("school", mode="before")
    @classmethod
    def normalize_school(cls, v: Any) -> Any:
        return _normalize_enum_text(v)

    @field_validator("components", mode="before")
    @classmethod
    def parse_component_text(cls, v: Any) -> Any:
        """Accept shorthand component strings like 'V, S, M (a feather)'."""
        if not isinstance(v, str):
            return v
        match = _COMPONENT_TEXT.match(v)
        if not match:
            raise ValueError(f"Invalid spell components: {v}")
        letters = {part.strip().upper() for part in match.group(1).split(",")}
        return {
            "verbal": "V" in letters,
            "somatic": "S" in letters,
            "material": "M" in letters,
            "material_component": match.group(2),
        }


class SavingThrow(ContentModel):
    ability: str
    dc: int = Field(ge=1)
    effect: str


class Trap(Payload):
    """A mechanical, magical, or natural trap."""

    kind: ClassVar[ContentKind] = ContentKind.TRAP

    type: TrapType
    trigger: str
    effect: str
    detect_dc: int = Field(
        ge=1,
        validation_alias=AliasChoices("detectDC", "detectDc", "detectionDC", "detect_dc"),
        serialization_alias="detectDC",
    )
    disarm_dc: int = Field(
        ge=1,
        validation_alias=AliasChoices("disarmDC", "disarmDc", "disarm_dc"),
        serialization_alias="disarmDC",
    )
    damage: str | None = None
    damage_type: str | None = None
    saving_throw: SavingThrow | None = None
    description: str

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        return _normalize_enum_text(v)


class EncounterCreature(ContentModel):
    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    monster_id: str | None = None
    challenge_rating: str | None = None
    hit_points: int | None = None
    initiative: int | None = None
    conditions: list[str] = Field(default_factory=list)
    notes: str | None = None

    @field_validator("challenge_rating", mode="before")
    @classmethod
    def validate_challenge_rating(cls, v: Any) -> Any:
        return _coerce_challenge_rating(v)


class Encounter(Payload):
    """A combat or social encounter."""

    kind: ClassVar[ContentKind] = ContentKind.ENCOUNTER

    description: str
    difficulty: EncounterDifficulty
    environment: str | None = None
    creatures: list[EncounterCreature] = Field(min_length=1)
    treasures: list[Item] = Field(default_factory=list)
    experience: int = Field(default=0, ge=0)
    tactics: str | None = None
    notes: str | None = None

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, v: Any) -> Any:
        return _normalize_enum_text(v)


class Location(Payload):
    """A room, settlement, or other place in the adventure."""

    kind: ClassVar[ContentKind] = ContentKind.LOCATION

    description: str
    location_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("locationType", "location_type", "type"),
        serialization_alias="locationType",
    )
    read_aloud: str | None = None
    features: list[str] = Field(default_factory=list)
    inhabitants: list[str] = Field(default_factory=list)
    treasure: list[str] = Field(default_factory=list)
    exits: list[str] = Field(default_factory=list)


ContentPayload = Union[Monster, NPC, Item, Spell, Trap, Location, Encounter]

# Single lookup table from kind to payload model
PAYLOAD_MODELS: dict[ContentKind, type[Payload]] = {
    model.kind: model for model in (Monster, NPC, Item, Spell, Trap, Location, Encounter)
}


def validate_payload(kind: ContentKind | str, data: Any) -> ContentPayload:
    """Validate raw data (e.g., a provider's JSON) against a kind's model.

    Args:
        kind: The expected content kind
        data: Parsed JSON data

    Returns:
        The validated payload

    Raises:
        pydantic.ValidationError: If required fields are missing or malformed
        ValueError: If the kind is unknown
    """
    model = PAYLOAD_MODELS[ContentKind(kind)]
    return model.model_validate(data)  # type: ignore[return-value]
