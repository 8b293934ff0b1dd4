"""
Abstract base class for Speech-to-Text providers.

All STT implementations (placeholder, ElevenLabs, ...) must implement this
interface, enabling provider-agnostic transcription in the gateway.
"""

from abc import ABC, abstractmethod


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio: bytes, **kwargs) -> str:
        """Transcribe a recorded audio blob to text.

        Args:
            audio: Encoded audio bytes exactly as uploaded by the client.
            **kwargs: Provider-specific options (filename, language, ...).

        Returns:
            The transcribed text.

        Raises:
            TranscriptionError: If the provider call fails.
        """
