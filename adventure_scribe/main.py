"""Main entry point for Adventure Scribe.

This module provides the command line interface: configuration checks, the
command list, one-shot expansion of a document, and the API server.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from adventure_scribe.commands.registry import get_available_commands
from adventure_scribe.config import get_settings
from adventure_scribe.engine.substitution import PassResult, run_substitution_pass


def print_banner() -> None:
    """Print the application banner."""
    banner = """
    ========================================
     Adventure Scribe
     Slash-Command Content for D&D Adventures
    ========================================
    """
    print(banner, file=sys.stderr)


def setup_logging() -> None:
    """Configure root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, get_settings().log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def check_configuration() -> bool:
    """Check if all required configuration is present.

    Returns:
        True if at least one AI provider is configured, False otherwise.
    """
    settings = get_settings()

    providers = settings.available_providers()
    if not providers:
        print("[WARNING] No AI provider configured")
        print("  Set ANTHROPIC_API_KEY or OPENAI_API_KEY in your .env file to use /ai-* commands")
        return False

    for name in ("anthropic", "openai"):
        status = "[OK]" if name in providers else "[WARNING]"
        print(f"{status} {name}: {'configured' if name in providers else 'not configured'}")

    if settings.default_provider and settings.default_provider not in providers:
        print(f"[WARNING] DEFAULT_PROVIDER '{settings.default_provider}' has no API key")

    print("[OK] All configuration validated")
    return True


def list_commands() -> None:
    """Print every available slash command."""
    print("Available commands:")
    for line in get_available_commands():
        print(f"  {line}")


def read_document(source: str) -> str:
    """Read a document from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def report_failures(result: PassResult) -> None:
    """Print directives that were left in place."""
    for failure in result.failures:
        argument = f" {failure.argument}" if failure.argument else ""
        print(
            f"[WARNING] /{failure.name}{argument}: {failure.reason.value} {failure.detail}".rstrip(),
            file=sys.stderr,
        )


def expand_document(source: str, timeout_ms: int | None = None) -> int:
    """Expand slash commands in a document and print the result.

    Args:
        source: File path, or '-' for stdin
        timeout_ms: Per-directive timeout; defaults to the configured value

    Returns:
        Process exit code
    """
    try:
        text = read_document(source)
    except OSError as e:
        print(f"[ERROR] Cannot read {source}: {e}", file=sys.stderr)
        return 1

    result = asyncio.run(run_substitution_pass(text, resolve_timeout_ms=timeout_ms))
    sys.stdout.write(result.new_text)

    report_failures(result)
    print(
        f"[OK] Expanded {result.applied_count} of {result.directive_count} commands",
        file=sys.stderr,
    )
    return 0


def run_server() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    from adventure_scribe.api.app import create_app

    settings = get_settings()
    print(f"[INFO] Starting API server on {settings.host}:{settings.port}...")
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Adventure Scribe - Slash-Command Content for D&D Adventures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m adventure_scribe.main --check                 # Check configuration
  python -m adventure_scribe.main --commands              # List slash commands
  python -m adventure_scribe.main --expand chapter1.txt   # Expand a document
  cat notes.txt | python -m adventure_scribe.main --expand -
  python -m adventure_scribe.main --serve                 # Run the API server
        """,
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Check configuration and exit",
    )

    parser.add_argument(
        "--commands",
        action="store_true",
        help="List available slash commands",
    )

    parser.add_argument(
        "--expand",
        metavar="FILE",
        help="Expand slash commands in FILE ('-' for stdin) and print the result",
    )

    parser.add_argument(
        "--timeout-ms",
        type=int,
        help="Per-command resolution timeout in milliseconds (with --expand)",
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the API server",
    )

    args = parser.parse_args(argv)

    print_banner()

    if args.check:
        success = check_configuration()
        sys.exit(0 if success else 1)

    if args.commands:
        list_commands()
        sys.exit(0)

    if args.timeout_ms is not None and args.timeout_ms <= 0:
        print("[ERROR] --timeout-ms must be positive", file=sys.stderr)
        sys.exit(1)

    if args.expand:
        setup_logging()
        try:
            sys.exit(expand_document(args.expand, args.timeout_ms))
        except KeyboardInterrupt:
            print("\n[INFO] Expansion cancelled by user", file=sys.stderr)
            sys.exit(1)

    if args.serve:
        setup_logging()
        try:
            run_server()
        except KeyboardInterrupt:
            print("\n[INFO] Server stopped by user")
            sys.exit(0)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
