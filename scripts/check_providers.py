#!/usr/bin/env python3
"""Test connectivity for every configured AI provider.

This script validates that provider API keys are configured and that each
provider can generate a small piece of content that passes validation.

Usage:
    python scripts/check_providers.py

Requirements:
    - ANTHROPIC_API_KEY and/or OPENAI_API_KEY set in .env
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from adventure_scribe.config import get_settings
from adventure_scribe.content.models import ContentKind, validate_payload
from adventure_scribe.generation.service import GenerationService


def print_configuration_status() -> None:
    """Print the status of provider configuration."""
    settings = get_settings()

    print("\n=== Provider Configuration Status ===\n")

    anthropic_status = "[OK]" if settings.is_anthropic_configured() else "[MISSING]"
    print(f"  {anthropic_status} Anthropic API Key (model: {settings.anthropic_model})")

    openai_status = "[OK]" if settings.is_openai_configured() else "[MISSING]"
    print(f"  {openai_status} OpenAI API Key (model: {settings.openai_model})")

    print(f"\n  Default provider: {settings.default_provider or 'auto'}")
    print(f"  Resolve timeout: {settings.resolve_timeout_ms} ms")
    print()


async def check_provider(service: GenerationService, name: str) -> tuple[bool, str]:
    """Generate one trap with a provider and validate it.

    Returns:
        Tuple of (success, message)
    """
    response = await service.generate("trap", "a simple tripwire", provider=name)
    if not response.success:
        return False, f"{name} failed: {response.error}"

    try:
        trap = validate_payload(ContentKind.TRAP, response.data)
    except ValidationError as e:
        return False, f"{name} returned an invalid trap: {e.error_count()} errors"

    return True, f"{name} generated '{trap.name}'"


async def run_provider_checks() -> bool:
    """Run checks for all configured providers.

    Returns:
        True if all checks pass, False otherwise
    """
    service = GenerationService.from_settings()
    providers = service.get_available_providers()

    if not providers:
        print("No providers configured to test.")
        return False

    print(f"\n=== Testing {len(providers)} Providers ===\n")

    results = []
    for name in providers:
        success, message = await check_provider(service, name)
        results.append(success)
        status = "[OK]" if success else "[FAIL]"
        print(f"  {status} {message}")

    passed = sum(results)
    print(f"\n=== Results: {passed}/{len(results)} providers responded successfully ===\n")

    return passed == len(results)


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    print("\n" + "=" * 50)
    print("  Adventure Scribe - Provider Check")
    print("=" * 50)

    print_configuration_status()

    success = asyncio.run(run_provider_checks())
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
