#!/usr/bin/env python3
"""Demo Scenario: Expanding an Adventure Draft

This script demonstrates a complete substitution pass over a short draft:
1. Library commands matched by name (/add-monster Goblin)
2. Random picks for commands with no argument (/add-trap)
3. Custom stand-ins for names not in the catalog
4. An AI command answered by a fake generator
5. An unknown command left in place

It runs without any API keys, making it useful for demos and testing.

Usage:
    python scripts/demo_expand.py

Options:
    --verbose    Show detailed logging
    --seed N     Seed for random picks
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from adventure_scribe.engine.resolver import ContentResolver
from adventure_scribe.engine.substitution import SubstitutionEngine
from adventure_scribe.testing.fake_generator import FakeGenerationService

DRAFT = """\
Chapter 1: Goblin Arrows

The party finds two dead horses blocking the Triboar Trail.
/add-monster Goblin
Hidden in the thicket nearby is a trap:
/add-trap
The goblins answer to a hulking brute.
/add-monster Frost Troll
Searching the horses turns up a sealed map case.
/ai-item a map case that only opens for dwarves
A crude sign reads: /summon-dragon
"""

MAP_CASE = {
    "name": "Rockseeker Map Case",
    "type": "wondrous",
    "rarity": "uncommon",
    "description": "A brass cylinder stamped with the Rockseeker crest.",
    "magicalProperties": ["Only a dwarf can twist the lid open."],
}


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
    )


def print_header(text: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60 + "\n")


async def run_demo(seed: int | None) -> None:
    """Expand the draft and print before/after."""
    rng = random.Random(seed)
    generator = FakeGenerationService(responses={"item": MAP_CASE})
    resolver = ContentResolver(generator=generator, rand_func=rng.randint)
    engine = SubstitutionEngine(resolver)

    print_header("Draft")
    print(DRAFT)

    result = await engine.run_pass(DRAFT, resolve_timeout_ms=5000)

    print_header("Expanded")
    print(result.new_text)

    print_header("Summary")
    for res in result.results:
        source = res.outcome.source if res.ok else res.outcome.reason.value
        print(f"  /{res.directive.name:<14} -> {source}")
    print(f"\n  Applied {result.applied_count} of {result.directive_count} commands")
    for failure in result.failures:
        print(f"  [LEFT IN PLACE] /{failure.name}: {failure.detail}")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run the adventure draft expansion demo"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed logging"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for random picks"
    )

    args = parser.parse_args()

    setup_logging(args.verbose)
    asyncio.run(run_demo(args.seed))

    return 0


if __name__ == "__main__":
    sys.exit(main())
