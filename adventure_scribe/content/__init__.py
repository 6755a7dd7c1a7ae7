"""Content payload models, the static catalog, and markup rendering."""

from adventure_scribe.content.catalog import (
    CATALOG,
    LibraryEntry,
    entries_for_kind,
    find_entry,
    get_entry,
)
from adventure_scribe.content.defaults import synthesize_payload
from adventure_scribe.content.formatter import FormatterError, format_payload, ordinal
from adventure_scribe.content.models import (
    NPC,
    PAYLOAD_MODELS,
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
    validate_payload,
)

__all__ = [
    # Catalog
    "CATALOG",
    "LibraryEntry",
    "entries_for_kind",
    "find_entry",
    "get_entry",
    "synthesize_payload",
    # Formatter
    "FormatterError",
    "format_payload",
    "ordinal",
    # Models
    "NPC",
    "PAYLOAD_MODELS",
    "AbilityScores",
    "Action",
    "ContentKind",
    "ContentPayload",
    "Encounter",
    "Item",
    "Location",
    "Monster",
    "Spell",
    "Trap",
    "validate_payload",
]
