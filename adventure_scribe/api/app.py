"""
FastAPI Application
==================
Backend for the adventure editor: content generation and slash-command
expansion.

Run with:
    uvicorn adventure_scribe.api.app:create_app --factory --port 3001
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adventure_scribe import __version__
from adventure_scribe.api.routers import ai, editor, health
from adventure_scribe.config import Settings, get_settings
from adventure_scribe.engine.resolver import ContentResolver
from adventure_scribe.engine.substitution import SubstitutionEngine
from adventure_scribe.generation.service import GenerationService

logger = logging.getLogger(__name__)


def create_app(
    service: GenerationService | None = None,
    engine: SubstitutionEngine | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the API application.

    Args:
        service: Generation service; built from settings if None
        engine: Substitution engine; built around the service if None
        settings: Application settings; loaded if None

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    service = service or GenerationService.from_settings(settings)
    engine = engine or SubstitutionEngine(
        ContentResolver(generator=service),
        max_concurrent=settings.max_concurrent_resolutions,
    )

    app = FastAPI(
        title="Adventure Scribe API",
        description="Slash-command expansion and AI content generation for adventure documents",
        version=__version__,
    )

    app.state.generation_service = service
    app.state.engine = engine
    app.state.resolve_timeout_ms = settings.resolve_timeout_ms

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(ai.router, prefix="/api/ai", tags=["AI"])
    app.include_router(editor.router, prefix="/api/editor", tags=["Editor"])

    logger.info(f"API ready with providers: {service.get_available_providers() or 'none'}")
    return app
