"""
Editor Router
=============
Endpoints for the slash-command palette and substitution passes.
"""
from fastapi import APIRouter, Depends, Request

from adventure_scribe.api.schemas import CommandOut, CommandsResult, ExpandBody, ExpandResult, FailureOut
from adventure_scribe.commands.registry import COMMANDS
from adventure_scribe.engine.substitution import SubstitutionEngine

router = APIRouter()


def get_engine(request: Request) -> SubstitutionEngine:
    """Dependency: the app's substitution engine."""
    return request.app.state.engine


@router.get("/commands", response_model=CommandsResult)
async def list_commands():
    """
    List every slash command the editor understands.
    """
    return CommandsResult(
        commands=[
            CommandOut(
                name=spec.name,
                kind=spec.kind.value,
                strategy=spec.strategy.value,
                description=spec.description,
                usage=spec.usage,
            )
            for spec in COMMANDS.values()
        ]
    )


@router.post("/expand", response_model=ExpandResult, response_model_by_alias=True)
async def expand(body: ExpandBody, request: Request, engine: SubstitutionEngine = Depends(get_engine)):
    """
    Run one substitution pass over the submitted text.

    - **text**: Editor text containing slash commands
    - **resolveTimeoutMs**: Optional per-directive timeout
    """
    timeout_ms = body.resolve_timeout_ms or request.app.state.resolve_timeout_ms
    result = await engine.run_pass(body.text, timeout_ms)
    return ExpandResult(
        new_text=result.new_text,
        applied_count=result.applied_count,
        directive_count=result.directive_count,
        failures=[FailureOut(**failure.to_dict()) for failure in result.failures],
    )
