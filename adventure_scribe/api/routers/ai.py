"""
AI Generation Router
====================
Endpoints exposing the generation collaborator to the editor.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from adventure_scribe.api.schemas import GenerateBody, GenerateResult, ProvidersData, ProvidersResult
from adventure_scribe.content.models import ContentKind
from adventure_scribe.generation.service import (
    MAX_PARTY_LEVEL,
    MAX_PARTY_SIZE,
    MIN_PARTY_LEVEL,
    MIN_PARTY_SIZE,
    GenerationService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_generation_service(request: Request) -> GenerationService:
    """Dependency: the app's generation service."""
    return request.app.state.generation_service


def _error(status_code: int, message: str, provider: str | None = None) -> JSONResponse:
    body = GenerateResult(success=False, error=message, provider=provider)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _generate(service: GenerationService, content_type: str | None, body: GenerateBody):
    if not content_type:
        return _error(400, "Content type is required")
    if not body.prompt or not body.prompt.strip():
        return _error(400, "Prompt is required")

    try:
        kind = ContentKind(content_type.strip().lower())
    except ValueError:
        return _error(400, f"Unsupported content type: {content_type}")

    party_level = MIN_PARTY_LEVEL if body.party_level is None else body.party_level
    party_size = 4 if body.party_size is None else body.party_size
    if not MIN_PARTY_LEVEL <= party_level <= MAX_PARTY_LEVEL:
        return _error(400, f"Party level must be between {MIN_PARTY_LEVEL} and {MAX_PARTY_LEVEL}")
    if not MIN_PARTY_SIZE <= party_size <= MAX_PARTY_SIZE:
        return _error(400, f"Party size must be between {MIN_PARTY_SIZE} and {MAX_PARTY_SIZE}")

    response = await service.generate(
        kind.value,
        body.prompt,
        provider=body.provider,
        extra={"party_level": party_level, "party_size": party_size},
    )
    if not response.success:
        logger.error(f"Error generating {kind.value}: {response.error}")
        return _error(500, response.error or f"Failed to generate {kind.value}", response.provider or "default")
    return GenerateResult(**response.model_dump())


@router.get("/providers", response_model=ProvidersResult)
async def list_providers(service: GenerationService = Depends(get_generation_service)):
    """
    List configured providers and the default one.
    """
    return ProvidersResult(
        data=ProvidersData(providers=service.get_available_providers(), default=service.default_provider)
    )


@router.post("/generate", response_model=GenerateResult)
async def generate(body: GenerateBody, service: GenerationService = Depends(get_generation_service)):
    """
    Generate content of the kind named in the body.

    - **contentType**: monster, npc, item, spell, trap, location or encounter
    - **prompt**: What to generate
    - **provider**: Optional provider name
    - **partyLevel** / **partySize**: Encounter balancing (1-20 / 1-8)
    """
    return await _generate(service, body.content_type, body)


@router.post("/generate/{content_type}", response_model=GenerateResult)
async def generate_kind(
    content_type: str,
    body: GenerateBody,
    service: GenerationService = Depends(get_generation_service),
):
    """
    Generate content of the kind named in the path.
    """
    return await _generate(service, content_type, body)
