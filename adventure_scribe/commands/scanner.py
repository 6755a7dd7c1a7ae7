"""Slash-command scanning for editor text.

Directives are inline commands typed into the adventure editor. The scanner
is grammar-only: it knows nothing about which commands exist, it only finds
where they are.

Directive Format:
    /command
    /command argument text

Examples:
    /add-monster Goblin
    /add-npc
    /ai-encounter goblins on the forest road

The argument run extends to the next slash, newline, or end of text, so in
"/add-item Sword and/or shield" the argument is "Sword and" and "/or shield"
follows as a second directive. Elsewhere a slash after a word character,
another slash or "<" is plain text.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple


class Directive(NamedTuple):
    """A command occurrence found in the original text.

    Attributes:
        name: Lowercased command name (e.g., 'add-monster')
        raw_argument: Trimmed argument, or None when absent or blank
        start: Offset of the leading slash in the original text
        end: Offset just past the last character of the directive
        source: The exact text between start and end
    """

    name: str
    raw_argument: str | None
    start: int
    end: int
    source: str

    @property
    def length(self) -> int:
        """Length of the directive span."""
        return self.end - self.start


# Pattern matches: /name or /name argument
# Group 1: command name (word character, then word characters or hyphens)
# Group 2: optional argument, up to the last non-space before '/', newline or end
DIRECTIVE_PATTERN = re.compile(
    r"/(\w[\w-]*)(?:[^\S\n]+([^/\n]*[^/\s]))?"
)

# Characters that keep a slash from starting a directive in free text
# (paths like "and/or", URLs, and markup closing tags).
_BLOCKING_CHARS = re.compile(r"[\w/<]")


def _iter_matches(text: str) -> Iterator[re.Match[str]]:
    """Yield directive matches left to right.

    A slash preceded by a blocking character is skipped, unless it sits
    exactly where the previous directive ended: "/add-item Sword/add-npc"
    holds two directives.
    """
    pos = 0
    previous_end = -1
    while True:
        match = DIRECTIVE_PATTERN.search(text, pos)
        if match is None:
            return
        start = match.start()
        if start == 0 or start == previous_end or not _BLOCKING_CHARS.match(text, start - 1):
            yield match
            pos = previous_end = match.end()
        else:
            pos = start + 1


def scan_directives(text: str) -> list[Directive]:
    """Find every directive in text, left to right, without overlaps.

    Args:
        text: Raw editor text

    Returns:
        Directives in order of appearance. Empty if none match.

    Examples:
        >>> scan_directives("/add-monster Goblin")
        [Directive(name='add-monster', raw_argument='Goblin', start=0, end=19, source='/add-monster Goblin')]

        >>> scan_directives("Nothing to expand here")
        []
    """
    directives = []
    for match in _iter_matches(text):
        argument = match.group(2)
        if argument is not None:
            argument = argument.strip() or None
        directives.append(
            Directive(
                name=match.group(1).lower(),
                raw_argument=argument,
                start=match.start(),
                end=match.end(),
                source=match.group(0),
            )
        )
    return directives


def has_directives(text: str) -> bool:
    """Check if text contains at least one directive."""
    return next(_iter_matches(text), None) is not None


def strip_directives(text: str) -> str:
    """Remove all directives from text, leaving the surrounding content.

    Examples:
        >>> strip_directives("The cave /add-monster Goblin\\nis dark.")
        'The cave \\nis dark.'
    """
    parts = []
    cursor = 0
    for match in _iter_matches(text):
        parts.append(text[cursor : match.start()])
        cursor = match.end()
    parts.append(text[cursor:])
    return "".join(parts)
