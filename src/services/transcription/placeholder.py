"""Placeholder STT backend.

Speech-to-text is not implemented: every call returns the same fixed string
regardless of the audio. It exists so the full turn can be exercised end to
end without a transcription service. Select ``STT_PROVIDER=elevenlabs`` for a
real backend.
"""

import logging

from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

PLACEHOLDER_TRANSCRIPTION = "Transcribed text placeholder"


class PlaceholderSTT(BaseSTT):
    """Returns :data:`PLACEHOLDER_TRANSCRIPTION` for any input."""

    async def transcribe(self, audio: bytes, **kwargs) -> str:
        logger.debug("Placeholder transcription for %d bytes of audio", len(audio))
        return PLACEHOLDER_TRANSCRIPTION
