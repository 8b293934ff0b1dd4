"""Integration test fixtures for the voice gateway.

The app runs in-process behind ``httpx.ASGITransport`` with the real
placeholder STT and echo dialogue backends. Only the ElevenLabs TTS provider
is mocked, since it needs network access and an account.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.core.models import VoiceDescriptor
from src.services.dialogue.echo import EchoDialogue
from src.services.gateway import VoiceGateway
from src.services.synthesis.base import BaseTTS
from src.services.transcription.placeholder import PlaceholderSTT


@pytest.fixture
def provider_tts(fake_mp3_bytes):
    """Stand-in for the ElevenLabs TTS provider."""
    tts = AsyncMock(spec=BaseTTS)
    tts.synthesize.return_value = fake_mp3_bytes
    tts.list_voices.return_value = [
        VoiceDescriptor(voice_id="pNInz6obpgDQGcFmaJgB", name="Adam", category="premade"),
        VoiceDescriptor(voice_id="21m00Tcm4TlvDq8ikWAM", name="Rachel", category="premade"),
    ]
    return tts


@pytest.fixture
def live_gateway(provider_tts):
    """Gateway with the default backends and a mocked TTS provider."""
    return VoiceGateway(
        stt=PlaceholderSTT(),
        tts=provider_tts,
        dialogue=EchoDialogue(),
        timeout=5.0,
    )


@pytest.fixture
def app(settings, live_gateway):
    """Create a fresh FastAPI application instance."""
    return create_app(settings=settings, gateway=live_gateway)


@pytest.fixture
async def async_client(app):
    """AsyncClient talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
