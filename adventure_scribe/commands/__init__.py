"""Slash-command grammar and the command registry."""

from adventure_scribe.commands.registry import (
    COMMANDS,
    CommandSpec,
    ResolutionStrategy,
    get_available_commands,
    get_command,
    get_commands_for_kind,
    is_known_command,
)
from adventure_scribe.commands.scanner import (
    DIRECTIVE_PATTERN,
    Directive,
    has_directives,
    scan_directives,
    strip_directives,
)

__all__ = [
    # Registry
    "COMMANDS",
    "CommandSpec",
    "ResolutionStrategy",
    "get_available_commands",
    "get_command",
    "get_commands_for_kind",
    "is_known_command",
    # Scanner
    "DIRECTIVE_PATTERN",
    "Directive",
    "has_directives",
    "scan_directives",
    "strip_directives",
]
