"""Voice gateway service.

Composes one STT backend, one TTS provider and one dialogue backend behind
the four operations the HTTP layer exposes. Holds no per-request state: every
call is independent. Each provider call is bounded by the configured timeout.

Usage::

    from src.core.config import load_settings
    from src.services.gateway import VoiceGateway

    gateway = VoiceGateway.from_settings(load_settings())
    audio = await gateway.synthesize("hello")
    await gateway.aclose()
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

import httpx
from elevenlabs.client import AsyncElevenLabs

from src.core.config import Settings
from src.core.exceptions import ProviderTimeoutError, ValidationError
from src.core.models import VoiceDescriptor, VoiceTuning
from src.services.dialogue import BaseDialogue, create_dialogue
from src.services.synthesis.base import BaseTTS
from src.services.synthesis.elevenlabs import ElevenLabsTTS
from src.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VoiceGateway:
    """Server-side façade over the voice provider.

    Args:
        stt: Speech-to-text backend.
        tts: Text-to-speech provider (also lists voices).
        dialogue: Conversation backend.
        timeout: Upper bound in seconds for any single provider call.
        http_client: Shared HTTP client owned by the gateway, closed by ``aclose()``.
    """

    def __init__(
        self,
        stt: BaseSTT,
        tts: BaseTTS,
        dialogue: BaseDialogue,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._stt = stt
        self._tts = tts
        self._dialogue = dialogue
        self._timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "VoiceGateway":
        """Wire the configured backends around one shared ElevenLabs client."""
        http_client = httpx.AsyncClient(timeout=settings.provider_timeout_seconds)
        client = AsyncElevenLabs(
            api_key=settings.elevenlabs_api_key,
            base_url=settings.elevenlabs_base_url,
            timeout=settings.provider_timeout_seconds,
            httpx_client=http_client,
        )

        stt_kwargs: dict = {}
        if settings.stt_provider == "elevenlabs":
            stt_kwargs = {"client": client, "model_id": settings.stt_model_id}

        dialogue_kwargs: dict = {}
        if settings.dialogue_provider == "claude":
            dialogue_kwargs = {
                "api_key": settings.claude_api_key,
                "model": settings.claude_model,
                "timeout": settings.provider_timeout_seconds,
            }

        tts = ElevenLabsTTS(
            client=client,
            default_voice_id=settings.default_voice_id,
            model_id=settings.tts_model_id,
            output_format=settings.tts_output_format,
            tuning=VoiceTuning(
                stability=settings.voice_stability,
                similarity_boost=settings.voice_similarity_boost,
                style=settings.voice_style,
            ),
        )
        logger.info(
            "Voice gateway configured (stt=%s, dialogue=%s, timeout=%ss)",
            settings.stt_provider,
            settings.dialogue_provider,
            settings.provider_timeout_seconds,
        )
        return cls(
            stt=create_stt(settings.stt_provider, **stt_kwargs),
            tts=tts,
            dialogue=create_dialogue(settings.dialogue_provider, **dialogue_kwargs),
            timeout=settings.provider_timeout_seconds,
            http_client=http_client,
        )

    async def _bounded(self, operation: str, call: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except TimeoutError as exc:
            logger.warning("%s exceeded %ss", operation, self._timeout)
            raise ProviderTimeoutError(operation, self._timeout) from exc

    async def transcribe(self, audio: bytes, **kwargs) -> str:
        """Speech → text.

        With the default ``placeholder`` backend the result is a fixed string
        that does not depend on ``audio``.
        """
        if not audio:
            raise ValidationError("No audio file provided")
        logger.info("Converting speech to text (%d bytes)", len(audio))
        text = await self._bounded("Speech to text", self._stt.transcribe(audio, **kwargs))
        logger.info("Speech to text conversion completed")
        return text

    async def synthesize(self, text: str, voice_id: str | None = None) -> bytes:
        """Text → MP3 bytes using the fixed voice tuning."""
        if not text or not text.strip():
            raise ValidationError("No text provided")
        logger.info("Converting text to speech (%d chars, voice=%s)", len(text), voice_id or "default")
        audio = await self._bounded("Text to speech", self._tts.synthesize(text, voice_id))
        logger.info("Text to speech conversion completed (%d bytes)", len(audio))
        return audio

    async def converse(self, message: str) -> str:
        """Produce the assistant reply for a user message."""
        if not message or not message.strip():
            raise ValidationError("No message provided")
        logger.info("Processing conversation message")
        return await self._bounded("Conversation", self._dialogue.reply(message))

    async def list_voices(self) -> list[VoiceDescriptor]:
        logger.info("Fetching available voices")
        return await self._bounded("Voice list", self._tts.list_voices())

    async def aclose(self) -> None:
        """Close the dialogue backend and the shared HTTP client."""
        await self._dialogue.aclose()
        if self._http_client is not None:
            await self._http_client.aclose()
