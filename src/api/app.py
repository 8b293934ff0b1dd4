"""
FastAPI application factory.

``create_app()`` assembles the voice gateway with CORS, error handlers, the
voice router and the health endpoint. Settings are loaded once and injected;
a missing provider key aborts startup with ``ConfigurationError``.

Run with ``uvicorn src.api.app:create_app --factory --port 3001``.
"""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.error_handler import register_error_handlers
from src.api.routes import voice
from src.core.config import Settings, load_settings
from src.core.models import HealthResponse
from src.services.gateway import VoiceGateway

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    gateway: VoiceGateway | None = None,
) -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Args:
        settings: Gateway configuration; loaded from the environment when omitted.
        gateway: Pre-built gateway (tests); built from ``settings`` when omitted.

    Raises:
        ConfigurationError: If the settings cannot be loaded.
    """
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    gateway = gateway or VoiceGateway.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("Voice gateway started")
        yield
        await gateway.aclose()
        logger.info("Voice gateway stopped")

    app = FastAPI(
        title="Voice Assistant Gateway",
        description="HTTP façade over a voice-synthesis provider: "
        "speech-to-text, text-to-speech, voices and conversation.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = gateway

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(UTC))

    # -- REST routes --
    app.include_router(voice.router)

    return app
