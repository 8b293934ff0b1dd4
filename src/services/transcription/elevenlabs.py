"""ElevenLabs STT implementation.

Uses the ElevenLabs Python SDK (``AsyncElevenLabs.speech_to_text``) to
transcribe an uploaded recording. SDK and transport exceptions are
translated into ``TranscriptionError`` / ``ProviderTimeoutError``.
"""

import logging

import httpx
from elevenlabs.client import AsyncElevenLabs
from elevenlabs.core import ApiError

from src.core.exceptions import ProviderTimeoutError, TranscriptionError
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class ElevenLabsSTT(BaseSTT):
    """Speech-to-text provider backed by the ElevenLabs Scribe models.

    Args:
        client: A shared ``AsyncElevenLabs`` instance.
        model_id: Provider STT model (e.g. "scribe_v1").
    """

    def __init__(self, client: AsyncElevenLabs, model_id: str = "scribe_v1") -> None:
        self._client = client
        self._model_id = model_id

    async def transcribe(self, audio: bytes, **kwargs) -> str:
        filename = kwargs.get("filename") or "recording.webm"
        content_type = kwargs.get("content_type") or "application/octet-stream"
        try:
            result = await self._client.speech_to_text.convert(
                model_id=self._model_id,
                file=(filename, audio, content_type),
            )
        except httpx.TimeoutException as exc:
            logger.warning("ElevenLabs STT timeout: %s", exc)
            raise ProviderTimeoutError("Speech to text") from exc
        except ApiError as exc:
            logger.error("ElevenLabs STT API error (status %s): %s", exc.status_code, exc.body)
            raise TranscriptionError() from exc
        except Exception as exc:
            logger.error("Unexpected ElevenLabs STT error: %s", exc)
            raise TranscriptionError() from exc

        text = getattr(result, "text", None) or ""
        return text.strip()
