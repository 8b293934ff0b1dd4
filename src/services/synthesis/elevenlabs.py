"""
ElevenLabs TTS provider implementation.

Uses the ElevenLabs Python SDK (``elevenlabs.client.AsyncElevenLabs``).
Synthesized audio arrives as a stream of byte chunks which is collected into
a single payload. No retries: every failure is reported to the caller.
"""

import logging

import httpx
from elevenlabs import VoiceSettings
from elevenlabs.client import AsyncElevenLabs
from elevenlabs.core import ApiError

from src.core.exceptions import (
    ProviderTimeoutError,
    SynthesisFailedError,
    VoiceListFailedError,
)
from src.core.models import VoiceDescriptor, VoiceTuning
from src.services.synthesis.base import BaseTTS

logger = logging.getLogger(__name__)


class ElevenLabsTTS(BaseTTS):
    """ElevenLabs text-to-speech and voice listing.

    Args:
        client: A shared ``AsyncElevenLabs`` instance.
        default_voice_id: Voice used when the request names none.
        model_id: Provider TTS model.
        output_format: Provider output format string (MP3 by default).
        tuning: Stability / similarity / style, forwarded unchanged.
    """

    def __init__(
        self,
        client: AsyncElevenLabs,
        default_voice_id: str = "pNInz6obpgDQGcFmaJgB",
        model_id: str = "eleven_multilingual_v2",
        output_format: str = "mp3_44100_128",
        tuning: VoiceTuning | None = None,
    ) -> None:
        self._client = client
        self._default_voice_id = default_voice_id
        self._model_id = model_id
        self._output_format = output_format
        self._tuning = tuning or VoiceTuning()

    async def synthesize(self, text: str, voice_id: str | None = None) -> bytes:
        chunks: list[bytes] = []
        try:
            stream = self._client.text_to_speech.convert(
                voice_id=voice_id or self._default_voice_id,
                text=text,
                model_id=self._model_id,
                output_format=self._output_format,
                voice_settings=VoiceSettings(
                    stability=self._tuning.stability,
                    similarity_boost=self._tuning.similarity_boost,
                    style=self._tuning.style,
                ),
            )
            async for chunk in stream:
                if chunk:
                    chunks.append(chunk)
        except httpx.TimeoutException as exc:
            logger.warning("ElevenLabs TTS timeout: %s", exc)
            raise ProviderTimeoutError("Text to speech") from exc
        except ApiError as exc:
            logger.error("ElevenLabs TTS API error (status %s): %s", exc.status_code, exc.body)
            raise SynthesisFailedError() from exc
        except Exception as exc:
            logger.error("Unexpected ElevenLabs TTS error: %s", exc)
            raise SynthesisFailedError() from exc

        audio = b"".join(chunks)
        if not audio:
            logger.error("ElevenLabs TTS returned an empty payload")
            raise SynthesisFailedError("Provider returned no audio")
        return audio

    async def list_voices(self) -> list[VoiceDescriptor]:
        try:
            response = await self._client.voices.get_all()
        except httpx.TimeoutException as exc:
            logger.warning("ElevenLabs voice list timeout: %s", exc)
            raise ProviderTimeoutError("Voice list") from exc
        except ApiError as exc:
            logger.error("ElevenLabs voices API error (status %s): %s", exc.status_code, exc.body)
            raise VoiceListFailedError() from exc
        except Exception as exc:
            logger.error("Unexpected ElevenLabs voices error: %s", exc)
            raise VoiceListFailedError() from exc

        return [
            VoiceDescriptor(
                voice_id=voice.voice_id,
                name=voice.name,
                category=getattr(voice, "category", None),
                description=getattr(voice, "description", None),
                preview_url=getattr(voice, "preview_url", None),
                labels=getattr(voice, "labels", None) or {},
            )
            for voice in response.voices
        ]
