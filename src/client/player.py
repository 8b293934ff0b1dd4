"""Local playback of synthesized speech.

Decodes the MP3 payload with soundfile (libsndfile >= 1.1) and plays it on
the default output device through sounddevice, returning only once playback
has finished.
"""

import asyncio
import io
import logging

import soundfile as sf

from src.core.exceptions import PlaybackError

logger = logging.getLogger(__name__)


class AudioPlayer:
    """Plays encoded audio to completion on a sounddevice output."""

    def __init__(self, device: int | str | None = None) -> None:
        self._device = device

    async def play(self, audio: bytes) -> None:
        """Decode and play ``audio``; resolves when playback ends.

        Raises:
            PlaybackError: If the payload cannot be decoded or the output
                device fails.
        """
        await asyncio.to_thread(self._play_blocking, audio)

    def _play_blocking(self, audio: bytes) -> None:
        try:
            data, sample_rate = sf.read(io.BytesIO(audio), dtype="float32")
        except sf.LibsndfileError as exc:
            logger.error("Cannot decode audio (%d bytes): %s", len(audio), exc)
            raise PlaybackError("Failed to decode audio") from exc

        try:
            import sounddevice as sd
        except OSError as exc:
            raise PlaybackError(f"Audio output unavailable: {exc}") from exc

        try:
            sd.play(data, sample_rate, device=self._device)
            sd.wait()
        except sd.PortAudioError as exc:
            logger.error("Audio output error: %s", exc)
            raise PlaybackError() from exc
        logger.debug("Played %.1fs of audio", len(data) / sample_rate)
