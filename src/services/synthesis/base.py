"""
Abstract base class for Text-to-Speech providers.

A TTS provider both synthesizes speech and lists the voices it can speak
with, since voice ids are only meaningful to the provider that issued them.
"""

from abc import ABC, abstractmethod

from src.core.models import VoiceDescriptor


class BaseTTS(ABC):
    """Interface that every TTS provider must implement."""

    @abstractmethod
    async def synthesize(self, text: str, voice_id: str | None = None) -> bytes:
        """Convert text to encoded audio.

        Args:
            text: Text to speak.
            voice_id: Provider voice id; ``None`` selects the configured default.

        Returns:
            The complete audio payload (MP3).

        Raises:
            SynthesisFailedError: On provider/network error or an empty payload.
            ProviderTimeoutError: If the provider does not answer in time.
        """

    @abstractmethod
    async def list_voices(self) -> list[VoiceDescriptor]:
        """Return the voices available to this account.

        Raises:
            VoiceListFailedError: On provider/network error.
            ProviderTimeoutError: If the provider does not answer in time.
        """
