"""Command registry for editor slash commands.

One table maps every command name to the content kind it produces and the
strategy used to resolve it. Library commands draw from the static catalog;
AI commands go through the generation collaborator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from adventure_scribe.content.models import ContentKind


class ResolutionStrategy(str, Enum):
    """How a command turns into content."""

    LIBRARY = "library"
    GENERATE = "generate"


@dataclass(frozen=True)
class CommandSpec:
    """Definition of a single slash command."""

    name: str
    kind: ContentKind
    strategy: ResolutionStrategy
    description: str
    argument_hint: str = "name"

    @property
    def usage(self) -> str:
        """Help line shown in the editor command list."""
        return f"/{self.name} [{self.argument_hint}] - {self.description}"


_LIBRARY = ResolutionStrategy.LIBRARY
_GENERATE = ResolutionStrategy.GENERATE

COMMANDS: dict[str, CommandSpec] = {
    spec.name: spec
    for spec in (
        # Library commands
        CommandSpec("add-monster", ContentKind.MONSTER, _LIBRARY, "Add a monster stat block"),
        CommandSpec("replace-stats", ContentKind.MONSTER, _LIBRARY, "Replace with different stats"),
        CommandSpec("add-npc", ContentKind.NPC, _LIBRARY, "Add an NPC"),
        CommandSpec("replace-npc", ContentKind.NPC, _LIBRARY, "Replace with different NPC"),
        CommandSpec("add-item", ContentKind.ITEM, _LIBRARY, "Add a magic item"),
        CommandSpec("add-spell", ContentKind.SPELL, _LIBRARY, "Add a spell"),
        CommandSpec("add-location", ContentKind.LOCATION, _LIBRARY, "Add a location"),
        CommandSpec("add-encounter", ContentKind.ENCOUNTER, _LIBRARY, "Add an encounter", "type"),
        CommandSpec("add-trap", ContentKind.TRAP, _LIBRARY, "Add a trap"),
        # Short forms from the editor command palette
        CommandSpec("monster", ContentKind.MONSTER, _LIBRARY, "Insert a monster stat block"),
        CommandSpec("npc", ContentKind.NPC, _LIBRARY, "Create a non-player character"),
        CommandSpec("item", ContentKind.ITEM, _LIBRARY, "Add a magical or mundane item"),
        CommandSpec("spell", ContentKind.SPELL, _LIBRARY, "Insert a spell description"),
        CommandSpec("trap", ContentKind.TRAP, _LIBRARY, "Create a trap or hazard"),
        CommandSpec("encounter", ContentKind.ENCOUNTER, _LIBRARY, "Design a combat encounter", "type"),
        CommandSpec("location", ContentKind.LOCATION, _LIBRARY, "Describe a location or area"),
        # AI generation commands
        CommandSpec("ai-monster", ContentKind.MONSTER, _GENERATE, "AI-generated monster stat block", "prompt"),
        CommandSpec("ai-npc", ContentKind.NPC, _GENERATE, "AI-generated NPC with personality", "prompt"),
        CommandSpec("ai-item", ContentKind.ITEM, _GENERATE, "AI-generated magic item", "prompt"),
        CommandSpec("ai-spell", ContentKind.SPELL, _GENERATE, "AI-generated spell", "prompt"),
        CommandSpec("ai-trap", ContentKind.TRAP, _GENERATE, "AI-generated trap", "prompt"),
        CommandSpec("ai-location", ContentKind.LOCATION, _GENERATE, "AI-generated location", "prompt"),
        CommandSpec("ai-encounter", ContentKind.ENCOUNTER, _GENERATE, "AI-balanced encounter for your party", "prompt"),
    )
}


def get_command(name: str) -> CommandSpec | None:
    """Look up a command by name (case-insensitive).

    Args:
        name: Command name without the leading slash

    Returns:
        CommandSpec or None if the command is unknown
    """
    return COMMANDS.get(name.lower())


def is_known_command(name: str) -> bool:
    """Check if a command name is registered."""
    return get_command(name) is not None


def get_commands_for_kind(kind: ContentKind) -> list[CommandSpec]:
    """Get all commands producing a given content kind."""
    return [spec for spec in COMMANDS.values() if spec.kind == kind]


def get_available_commands() -> list[str]:
    """Get help lines for every registered command."""
    return [spec.usage for spec in COMMANDS.values()]
