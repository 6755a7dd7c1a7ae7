"""Directive resolution and text substitution."""

from adventure_scribe.engine.resolver import (
    ContentResolver,
    Failure,
    FailureReason,
    RandomFunc,
    ResolutionResult,
    Success,
)
from adventure_scribe.engine.substitution import (
    EditorSession,
    PassFailure,
    PassResult,
    Substitution,
    SubstitutionEngine,
    apply_substitutions,
    run_substitution_pass,
)

__all__ = [
    # Resolver
    "ContentResolver",
    "Failure",
    "FailureReason",
    "RandomFunc",
    "ResolutionResult",
    "Success",
    # Substitution
    "EditorSession",
    "PassFailure",
    "PassResult",
    "Substitution",
    "SubstitutionEngine",
    "apply_substitutions",
    "run_substitution_pass",
]
