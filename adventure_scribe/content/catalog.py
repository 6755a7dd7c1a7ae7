"""Static content library for library-backed slash commands.

This module defines the pre-authored catalog the resolver draws from when a
command like /add-monster or /add-trap is typed without AI generation:
- Monsters and NPCs from the Lost Mines of Phandelver opening chapter
- Common magic items, spells, traps, locations and encounters

Entries are built once at import time and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass

from adventure_scribe.content.formatter import format_payload
from adventure_scribe.content.models import (
    NPC,
    AbilityScores,
    Action,
    ContentKind,
    ContentPayload,
    Encounter,
    EncounterCreature,
    Item,
    ItemCost,
    Location,
    Monster,
    SavingThrow,
    Spell,
    SpellComponents,
    Trap,
)


@dataclass(frozen=True)
class LibraryEntry:
    """A read-only catalog item."""

    id: str
    name: str
    description: str
    kind: ContentKind
    payload: ContentPayload

    @property
    def template(self) -> str:
        """Canonical markup for this entry."""
        return format_payload(self.payload)


def _entry(entry_id: str, description: str, payload: ContentPayload) -> LibraryEntry:
    return LibraryEntry(
        id=entry_id,
        name=payload.name,
        description=description,
        kind=payload.kind,
        payload=payload,
    )


# Monster stat blocks
MONSTERS: tuple[LibraryEntry, ...] = (
    _entry(
        "monster-goblin",
        "Small, sneaky raider that fights in ambush packs",
        Monster(
            name="Goblin",
            size="Small",
            type="humanoid (goblinoid)",
            alignment="neutral evil",
            armor_class=15,
            armor_description="leather armor, shield",
            hit_points=7,
            hit_dice="2d6",
            abilities=AbilityScores(
                strength=8, dexterity=14, constitution=10, intelligence=10, wisdom=8, charisma=8
            ),
            skills={"stealth": 6},
            senses="darkvision 60 ft., passive Perception 9",
            languages="Common, Goblin",
            challenge_rating="1/4",
            proficiency_bonus=2,
            actions=[
                Action(
                    name="Scimitar",
                    description="Melee Weapon Attack: +4 to hit, reach 5 ft., one target. Hit: 5 (1d6 + 2) slashing damage.",
                    attack_bonus=4,
                    damage="1d6+2",
                    damage_type="slashing",
                ),
                Action(
                    name="Shortbow",
                    description="Ranged Weapon Attack: +4 to hit, range 80 ft. (320 ft. long), one target. Hit: 5 (1d6 + 2) piercing damage.",
                    attack_bonus=4,
                    damage="1d6+2",
                    damage_type="piercing",
                ),
            ],
            description="Goblins are small, black-hearted humanoids that lair in dank caves and abandoned ruins.",
        ),
    ),
    _entry(
        "monster-bugbear",
        "Hulking goblinoid brute that favors surprise attacks",
        Monster(
            name="Bugbear",
            size="Medium",
            type="humanoid (goblinoid)",
            alignment="chaotic evil",
            armor_class=16,
            armor_description="hide armor, shield",
            hit_points=27,
            hit_dice="5d8 + 5",
            abilities=AbilityScores(
                strength=15, dexterity=14, constitution=13, intelligence=8, wisdom=11, charisma=9
            ),
            skills={"stealth": 6, "survival": 2},
            senses="darkvision 60 ft., passive Perception 10",
            languages="Common, Goblin",
            challenge_rating="1",
            proficiency_bonus=2,
            actions=[
                Action(
                    name="Morningstar",
                    description="Melee Weapon Attack: +4 to hit, reach 5 ft., one target. Hit: 11 (2d8 + 2) piercing damage.",
                    attack_bonus=4,
                    damage="2d8+2",
                    damage_type="piercing",
                ),
            ],
        ),
    ),
    _entry(
        "monster-wolf",
        "Pack hunter that knocks its prey prone",
        Monster(
            name="Wolf",
            size="Medium",
            type="beast",
            alignment="unaligned",
            armor_class=13,
            armor_description="natural armor",
            hit_points=11,
            hit_dice="2d8 + 2",
            speed="40 ft.",
            abilities=AbilityScores(
                strength=12, dexterity=15, constitution=12, intelligence=3, wisdom=12, charisma=6
            ),
            skills={"perception": 3, "stealth": 4},
            senses="passive Perception 13",
            languages="None",
            challenge_rating="1/4",
            proficiency_bonus=2,
            actions=[
                Action(
                    name="Bite",
                    description="Melee Weapon Attack: +4 to hit, reach 5 ft., one target. Hit: 7 (2d4 + 2) piercing damage. If the target is a creature, it must succeed on a DC 11 Strength saving throw or be knocked prone.",
                    attack_bonus=4,
                    damage="2d4+2",
                    damage_type="piercing",
                ),
            ],
        ),
    ),
    _entry(
        "monster-mage",
        "Monster with spellcasting abilities",
        Monster(
            name="Mage",
            size="Medium",
            type="humanoid (any race)",
            alignment="any alignment",
            armor_class=12,
            armor_description="15 with mage armor",
            hit_points=40,
            hit_dice="9d8",
            abilities=AbilityScores(
                strength=9, dexterity=14, constitution=11, intelligence=17, wisdom=12, charisma=11
            ),
            saving_throws={"int": 6, "wis": 4},
            skills={"arcana": 6, "history": 6},
            senses="passive Perception 11",
            languages="any four languages",
            challenge_rating="6",
            proficiency_bonus=3,
            actions=[
                Action(
                    name="Dagger",
                    description="Melee or Ranged Weapon Attack: +5 to hit, reach 5 ft. or range 20 ft., one target. Hit: 4 (1d4 + 2) piercing damage.",
                    attack_bonus=5,
                    damage="1d4+2",
                    damage_type="piercing",
                ),
                Action(
                    name="Spellcasting",
                    description="The mage is a 9th-level spellcaster (spell save DC 14, +6 to hit with spell attacks) with fireball, counterspell and cone of cold prepared.",
                ),
            ],
        ),
    ),
)

# Non-player characters
NPCS: tuple[LibraryEntry, ...] = (
    _entry(
        "npc-gundren",
        "Dwarf merchant who hires the party",
        NPC(
            name="Gundren Rockseeker",
            race="Dwarf",
            background="Guild Artisan",
            alignment="lawful good",
            appearance="Stocky dwarf with a braided beard and soot-stained merchant's clothes",
            personality="Gruff but kind-hearted. Speaks with a thick accent and gets excited about mining.",
            ideals="Family and clan come first",
            bonds="Determined to reclaim Wave Echo Cave with his brothers",
            flaws="Keeps secrets even from those he trusts",
            equipment=["Map to Wave Echo Cave", "Traveling clothes", "Pouch with 20 gp"],
        ),
    ),
    _entry(
        "npc-sildar",
        "Honorable warrior of the Lords' Alliance",
        NPC(
            name="Sildar Hallwinter",
            race="Human",
            npc_class="Fighter",
            level=4,
            background="Soldier",
            alignment="lawful good",
            appearance="Kindhearted human in his fifties with a graying beard and a soldier's bearing",
            personality="Honorable and formal. Chooses words carefully.",
            ideals="Order must be restored to the Sword Coast",
            bonds="Sworn to the Lords' Alliance",
            flaws="Blames himself when others come to harm",
            stats=AbilityScores(
                strength=13, dexterity=10, constitution=14, intelligence=10, wisdom=11, charisma=10
            ),
            skills=["Athletics", "Perception"],
            equipment=["Chain mail", "Longsword", "Heavy crossbow"],
        ),
    ),
    _entry(
        "npc-innkeeper",
        "Non-combat NPC with roleplay information",
        NPC(
            name="Toblen Stonehill",
            race="Human",
            background="Innkeeper",
            alignment="neutral good",
            appearance="Short, friendly man with a ready smile and flour on his apron",
            personality="Talkative and welcoming. Shares rumors freely.",
            ideals="Everyone deserves a warm meal",
            bonds="Devoted to his family and the Stonehill Inn",
            flaws="Sometimes too trusting of strangers",
        ),
    ),
)

# Magic and mundane items
ITEMS: tuple[LibraryEntry, ...] = (
    _entry(
        "item-potion-healing",
        "Common healing draught",
        Item(
            name="Potion of Healing",
            type="potion",
            rarity="common",
            description="A character who drinks the magical red fluid in this vial regains 2d4 + 2 hit points.",
            weight=0.5,
            cost=ItemCost(amount=50, currency="gp"),
        ),
    ),
    _entry(
        "item-longsword-plus-one",
        "Magic item with proper D&D formatting",
        Item(
            name="Longsword +1",
            type="weapon",
            rarity="uncommon",
            description="A finely balanced blade etched with dwarven runes.",
            properties=["Versatile (1d10)"],
            damage="1d8",
            damage_type="slashing",
            weight=3,
            magical_properties=["You have a +1 bonus to attack and damage rolls made with this magic weapon."],
        ),
    ),
    _entry(
        "item-bag-of-holding",
        "Wondrous item with extradimensional storage",
        Item(
            name="Bag of Holding",
            type="wondrous",
            rarity="uncommon",
            description="This bag has an interior space considerably larger than its outside dimensions.",
            weight=15,
            magical_properties=["The bag can hold up to 500 pounds, not exceeding a volume of 64 cubic feet."],
        ),
    ),
    _entry(
        "item-hempen-rope",
        "Non-magical item or equipment",
        Item(
            name="Hempen Rope",
            type="gear",
            rarity="common",
            description="Fifty feet of sturdy hempen rope.",
            properties=["2 hit points", "Can be burst with a DC 17 Strength check"],
            weight=10,
            cost=ItemCost(amount=1, currency="gp"),
        ),
    ),
)

# Spells
SPELLS: tuple[LibraryEntry, ...] = (
    _entry(
        "spell-magic-missile",
        "Unerring darts of magical force",
        Spell(
            name="Magic Missile",
            level=1,
            school="evocation",
            casting_time="1 action",
            range="120 feet",
            components=SpellComponents(verbal=True, somatic=True),
            duration="Instantaneous",
            description="You create three glowing darts of magical force. Each dart hits a creature of your choice that you can see within range. A dart deals 1d4 + 1 force damage to its target.",
            higher_levels="When you cast this spell using a spell slot of 2nd level or higher, the spell creates one more dart for each slot level above 1st.",
            classes=["Sorcerer", "Wizard"],
        ),
    ),
    _entry(
        "spell-cure-wounds",
        "Restorative touch",
        Spell(
            name="Cure Wounds",
            level=1,
            school="evocation",
            casting_time="1 action",
            range="Touch",
            components=SpellComponents(verbal=True, somatic=True),
            duration="Instantaneous",
            description="A creature you touch regains a number of hit points equal to 1d8 + your spellcasting ability modifier.",
            classes=["Bard", "Cleric", "Druid", "Paladin", "Ranger"],
        ),
    ),
    _entry(
        "spell-fireball",
        "Explosive burst of flame",
        Spell(
            name="Fireball",
            level=3,
            school="evocation",
            casting_time="1 action",
            range="150 feet",
            components=SpellComponents(
                verbal=True, somatic=True, material=True, material_component="a tiny ball of bat guano and sulfur"
            ),
            duration="Instantaneous",
            description="A bright streak flashes from your pointing finger to a point you choose within range and then blossoms into an explosion of flame. Each creature in a 20-foot-radius sphere must make a Dexterity saving throw, taking 8d6 fire damage on a failed save, or half as much on a successful one.",
            classes=["Sorcerer", "Wizard"],
        ),
    ),
    _entry(
        "spell-sacred-flame",
        "Radiant cantrip",
        Spell(
            name="Sacred Flame",
            level=0,
            school="evocation",
            casting_time="1 action",
            range="60 feet",
            components=SpellComponents(verbal=True, somatic=True),
            duration="Instantaneous",
            description="Flame-like radiance descends on a creature that you can see within range. The target must succeed on a Dexterity saving throw or take 1d8 radiant damage.",
            classes=["Cleric"],
        ),
    ),
)

# Traps
TRAPS: tuple[LibraryEntry, ...] = (
    _entry(
        "trap-poison-needle",
        "Physical trap with detection and disarm information",
        Trap(
            name="Poison Needle",
            type="mechanical",
            trigger="Opening the lock without the proper key",
            effect="A needle springs out of the lock and injects poison",
            detect_dc=20,
            disarm_dc=15,
            damage="1",
            damage_type="piercing",
            saving_throw=SavingThrow(
                ability="constitution", dc=15, effect="Take 2d10 poison damage and become poisoned for 1 hour on a failure"
            ),
            description="A poisoned needle is hidden within a treasure chest's lock.",
        ),
    ),
    _entry(
        "trap-hidden-pit",
        "Pit covered by a false floor",
        Trap(
            name="Hidden Pit",
            type="mechanical",
            trigger="Stepping on the cloth-covered false floor",
            effect="The creature falls into a 10-foot-deep pit",
            detect_dc=15,
            disarm_dc=10,
            damage="1d6",
            damage_type="bludgeoning",
            description="A 10-foot-deep pit concealed by a cloth covered in dirt and debris.",
        ),
    ),
    _entry(
        "trap-glyph-of-warding",
        "Magical trap with spell effects",
        Trap(
            name="Glyph of Warding",
            type="magical",
            trigger="Reading or touching the inscribed glyph",
            effect="The glyph erupts with magical energy",
            detect_dc=15,
            disarm_dc=15,
            damage="5d8",
            damage_type="thunder",
            saving_throw=SavingThrow(ability="dexterity", dc=15, effect="Half damage on success"),
            description="A faintly glowing rune inscribed on a doorway.",
        ),
    ),
)

# Locations
LOCATIONS: tuple[LibraryEntry, ...] = (
    _entry(
        "location-dungeon-room",
        "Dungeon room with proper D&D formatting",
        Location(
            name="Dungeon Room",
            location_type="Dungeon",
            description="A damp stone chamber lit by guttering torches.",
            read_aloud="The air is stale and smells of wet earth. Water drips steadily from the vaulted ceiling.",
            features=["Ceiling: 15 feet, vaulted", "Floor: uneven flagstones", "Lighting: dim torchlight"],
            inhabitants=["Two goblins playing dice"],
            treasure=["A pouch with 15 sp under a loose stone"],
            exits=["North: wooden door", "East: secret door (DC 15 Perception)"],
        ),
    ),
    _entry(
        "location-phandalin",
        "Town, city, or village description",
        Location(
            name="Phandalin",
            location_type="Frontier town",
            description="A rough-and-tumble settlement built on the ruins of a much older town, nestled in the foothills of the Sword Mountains.",
            features=["Stonehill Inn", "Barthen's Provisions", "Shrine of Luck", "Tresendar Manor ruins"],
            inhabitants=["Toblen Stonehill, innkeeper", "Sister Garaele, priestess of Tymora"],
            exits=["Triboar Trail to the west", "Old road to Wave Echo Cave"],
        ),
    ),
)

# Encounters
ENCOUNTERS: tuple[LibraryEntry, ...] = (
    _entry(
        "encounter-goblin-ambush",
        "Combat encounter with tactics and environment",
        Encounter(
            name="Goblin Ambush",
            description="Two dead horses block the Triboar Trail. Goblins hide in the thickets on both sides of the road.",
            difficulty="medium",
            environment="Forest road",
            creatures=[
                EncounterCreature(name="Goblin", quantity=4, monster_id="monster-goblin", challenge_rating="1/4", hit_points=7),
            ],
            experience=200,
            tactics="Two goblins attack from each side of the road with shortbows. They flee when reduced to one goblin.",
        ),
    ),
    _entry(
        "encounter-klarg",
        "Boss fight in a goblin hideout",
        Encounter(
            name="Klarg's Cave",
            description="The bugbear Klarg holds court in a cave filled with stolen supplies, guarded by his pet wolf.",
            difficulty="hard",
            environment="Cave",
            creatures=[
                EncounterCreature(name="Bugbear", quantity=1, monster_id="monster-bugbear", challenge_rating="1", hit_points=27),
                EncounterCreature(name="Wolf", quantity=1, monster_id="monster-wolf", challenge_rating="1/4", hit_points=11),
                EncounterCreature(name="Goblin", quantity=2, monster_id="monster-goblin", challenge_rating="1/4", hit_points=7),
            ],
            treasures=[
                Item(
                    name="Potion of Healing",
                    type="potion",
                    rarity="common",
                    description="A character who drinks the magical red fluid in this vial regains 2d4 + 2 hit points.",
                ),
            ],
            experience=350,
        ),
    ),
)

CATALOG: tuple[LibraryEntry, ...] = MONSTERS + NPCS + ITEMS + SPELLS + TRAPS + LOCATIONS + ENCOUNTERS


def entries_for_kind(
    kind: ContentKind, catalog: tuple[LibraryEntry, ...] | list[LibraryEntry] = CATALOG
) -> list[LibraryEntry]:
    """Get all catalog entries of a given kind, in catalog order."""
    return [entry for entry in catalog if entry.kind == kind]


def get_entry(
    entry_id: str, catalog: tuple[LibraryEntry, ...] | list[LibraryEntry] = CATALOG
) -> LibraryEntry | None:
    """Get a catalog entry by ID.

    Args:
        entry_id: The entry identifier (e.g., "monster-goblin")

    Returns:
        The entry or None if not found
    """
    for entry in catalog:
        if entry.id == entry_id:
            return entry
    return None


def find_entry(
    kind: ContentKind,
    query: str,
    catalog: tuple[LibraryEntry, ...] | list[LibraryEntry] = CATALOG,
) -> LibraryEntry | None:
    """Find an entry of a kind by name.

    An exact case-insensitive name match wins. Otherwise the first entry whose
    name contains the query, or is contained in it, is returned.

    Args:
        kind: Content kind to search
        query: Name or partial name (e.g., "goblin", "Potion of Healing x2")

    Returns:
        Matching entry or None
    """
    needle = query.strip().lower()
    if not needle:
        return None

    candidates = entries_for_kind(kind, catalog)
    for entry in candidates:
        if entry.name.lower() == needle:
            return entry

    for entry in candidates:
        name = entry.name.lower()
        if needle in name or name in needle:
            return entry
    return None
