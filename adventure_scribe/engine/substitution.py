"""Substitution passes over editor text.

A pass scans the text once, resolves every directive concurrently, renders
each success, and rewrites the text in a single splice using the offsets
recorded by the scanner. Nothing is searched for again after scanning, so
repeated or overlapping-looking commands cannot drift or double-substitute.

Usage:
    result = await run_substitution_pass(text, resolve_timeout_ms=5000)
    print(result.new_text)
    for failure in result.failures:
        print(failure.name, failure.reason.value)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from adventure_scribe.commands.scanner import Directive, scan_directives
from adventure_scribe.config import get_settings
from adventure_scribe.content.formatter import FormatterError, format_payload
from adventure_scribe.engine.resolver import (
    ContentResolver,
    Failure,
    FailureReason,
    ResolutionResult,
    Success,
)
from adventure_scribe.generation.service import GenerationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Substitution:
    """Replacement markup for one directive span (None keeps the span)."""

    directive: Directive
    markup: str | None


def apply_substitutions(text: str, substitutions: Iterable[Substitution]) -> str:
    """Splice markup into text at recorded directive spans.

    Spans are applied in ascending order and the gaps between them are
    copied unchanged. A substitution without markup keeps its original span.

    Args:
        text: The text the directives were scanned from
        substitutions: One entry per directive

    Returns:
        The rewritten text

    Raises:
        ValueError: If spans overlap or fall outside the text
    """
    parts: list[str] = []
    cursor = 0
    for sub in sorted(substitutions, key=lambda s: s.directive.start):
        start, end = sub.directive.start, sub.directive.end
        if start < 0 or end > len(text) or start >= end:
            raise ValueError(f"Directive span {start}:{end} is outside text of length {len(text)}")
        if start < cursor:
            raise ValueError(f"Directive span {start}:{end} overlaps the previous span ending at {cursor}")
        parts.append(text[cursor:start])
        parts.append(sub.markup if sub.markup is not None else text[start:end])
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


@dataclass(frozen=True)
class PassFailure:
    """A directive left in place, and why."""

    name: str
    argument: str | None
    reason: FailureReason
    detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API output."""
        return {
            "name": self.name,
            "argument": self.argument,
            "reason": self.reason.value,
            "detail": self.detail,
        }


@dataclass
class PassResult:
    """Outcome of one substitution pass."""

    new_text: str
    applied_count: int = 0
    failures: list[PassFailure] = field(default_factory=list)
    results: list[ResolutionResult] = field(default_factory=list)

    @property
    def directive_count(self) -> int:
        """Number of directives the pass attempted."""
        return len(self.results)


class SubstitutionEngine:
    """Runs substitution passes with bounded concurrency."""

    def __init__(self, resolver: ContentResolver | None = None, max_concurrent: int = 4) -> None:
        """Initialize the engine.

        Args:
            resolver: Resolver for directives; a library-only resolver if None
            max_concurrent: Maximum directives resolved at the same time
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.resolver = resolver or ContentResolver()
        self.max_concurrent = max_concurrent

    async def run_pass(self, text: str, resolve_timeout_ms: int | None = None) -> PassResult:
        """Scan, resolve, render and splice every directive in text.

        Args:
            text: Editor text
            resolve_timeout_ms: Per-directive timeout, or None for no limit

        Returns:
            PassResult with the rewritten text and any failures
        """
        directives = scan_directives(text)
        if not directives:
            return PassResult(new_text=text)

        results = await self._resolve_all(directives, resolve_timeout_ms)
        return self._splice(text, results)

    async def run_single(self, text: str, directive: Directive, resolve_timeout_ms: int | None = None) -> PassResult:
        """Re-run one directive as its own pass.

        The directive must still be present at its recorded offset; if the
        text has changed underneath it, nothing is done.

        Args:
            text: Current editor text
            directive: A directive from an earlier scan
            resolve_timeout_ms: Per-directive timeout, or None for no limit

        Returns:
            PassResult covering just this directive
        """
        current = next(
            (d for d in scan_directives(text) if d.start == directive.start and d.source == directive.source),
            None,
        )
        if current is None:
            logger.warning(f"Directive {directive.source!r} no longer at offset {directive.start}, skipping")
            return PassResult(new_text=text)

        results = await self._resolve_all([current], resolve_timeout_ms)
        return self._splice(text, results)

    async def _resolve_all(self, directives: list[Directive], resolve_timeout_ms: int | None) -> list[ResolutionResult]:
        timeout = resolve_timeout_ms / 1000 if resolve_timeout_ms is not None else None
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def resolve_bounded(directive: Directive) -> ResolutionResult:
            async with semaphore:
                return await self.resolver.resolve(directive, timeout=timeout)

        return list(await asyncio.gather(*(resolve_bounded(d) for d in directives)))

    def _splice(self, text: str, results: list[ResolutionResult]) -> PassResult:
        substitutions = []
        failures = []
        final_results = []

        for result in results:
            directive = result.directive
            markup = None
            outcome = result.outcome

            if isinstance(outcome, Success):
                try:
                    markup = format_payload(outcome.payload)
                except FormatterError as e:
                    logger.error(f"Could not render /{directive.name} at offset {directive.start}: {e}")
                    outcome = Failure(FailureReason.FORMATTER_UNREACHABLE, str(e))
                    result = ResolutionResult(directive, outcome)

            if isinstance(outcome, Failure):
                failures.append(PassFailure(directive.name, directive.raw_argument, outcome.reason, outcome.detail))

            substitutions.append(Substitution(directive, markup))
            final_results.append(result)

        new_text = apply_substitutions(text, substitutions)
        applied = len(results) - len(failures)
        logger.info(f"Substitution pass applied {applied} of {len(results)} directives")
        return PassResult(new_text=new_text, applied_count=applied, failures=failures, results=final_results)


async def run_substitution_pass(
    text: str,
    resolve_timeout_ms: int | None = None,
    resolver: ContentResolver | None = None,
    max_concurrent: int | None = None,
) -> PassResult:
    """Run one substitution pass with settings-based defaults.

    Args:
        text: Editor text
        resolve_timeout_ms: Per-directive timeout; defaults to the configured value
        resolver: Resolver to use; defaults to one backed by the configured providers
        max_concurrent: Concurrency bound; defaults to the configured value

    Returns:
        PassResult with the rewritten text and any failures
    """
    settings = get_settings()
    if resolve_timeout_ms is None:
        resolve_timeout_ms = settings.resolve_timeout_ms
    if max_concurrent is None:
        max_concurrent = settings.max_concurrent_resolutions
    if resolver is None:
        resolver = ContentResolver(generator=GenerationService.from_settings(settings))

    engine = SubstitutionEngine(resolver, max_concurrent=max_concurrent)
    return await engine.run_pass(text, resolve_timeout_ms)


class EditorSession:
    """Tracks the latest pass for a live document.

    Starting a new expansion cancels any pass still running for older text;
    the superseded call returns None and its results are discarded.
    """

    def __init__(self, engine: SubstitutionEngine | None = None, resolve_timeout_ms: int | None = None) -> None:
        self.engine = engine or SubstitutionEngine()
        self.resolve_timeout_ms = resolve_timeout_ms
        self._task: asyncio.Task[PassResult] | None = None

    @property
    def busy(self) -> bool:
        """True while a pass is in flight."""
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Cancel the in-flight pass, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def expand(self, text: str) -> PassResult | None:
        """Run a pass for text, superseding any earlier one.

        Returns:
            PassResult, or None if a newer expansion replaced this one
        """
        if self.busy:
            logger.debug("Text changed during a pass, cancelling it")
        self.cancel()

        task = asyncio.create_task(self.engine.run_pass(text, self.resolve_timeout_ms))
        self._task = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._task is not task:
                return None
            raise
