"""Microphone capture for one recording session.

``RecordingController`` opens a PortAudio input stream (sounddevice), buffers
float32 fragments delivered on the audio thread, and on ``stop()`` releases
the device and finalizes the fragments into a single 16-bit WAV blob.

At most one session is open at a time. The device is released on every exit
path: ``stop()``, ``abort()``, ``close()`` and context-manager exit.
"""

import asyncio
import io
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import soundfile as sf

from src.core.exceptions import AlreadyRecordingError, DeviceUnavailableError

logger = logging.getLogger(__name__)

# Peak level targeted by software auto-gain
_AGC_TARGET_PEAK = 0.9


def open_input_stream(**kwargs):
    """Open and start a sounddevice input stream.

    sounddevice is imported here because loading it loads the PortAudio
    library; a host without PortAudio simply has no usable input device.

    Raises:
        DeviceUnavailableError: If PortAudio is missing, no input device
            exists, or the device refuses to open.
    """
    try:
        import sounddevice as sd
    except OSError as exc:
        raise DeviceUnavailableError(f"Audio input unavailable: {exc}") from exc

    stream = None
    try:
        stream = sd.InputStream(**kwargs)
        stream.start()
    except (sd.PortAudioError, ValueError) as exc:
        if stream is not None:
            stream.close()
        raise DeviceUnavailableError(f"Audio input device unavailable: {exc}") from exc
    return stream


@dataclass(frozen=True)
class CaptureConstraints:
    """Processing requested from the capture device."""

    echo_cancellation: bool = True
    noise_suppression: bool = True
    auto_gain_control: bool = True


class RecordingController:
    """Start/stop microphone capture producing one WAV blob per session.

    Args:
        sample_rate: Capture rate in Hz.
        channels: Number of input channels.
        device: sounddevice device id/name, or None for the default input.
        constraints: Requested input processing.
        stream_opener: Callable returning a started input stream (defaults
            to :func:`open_input_stream`).
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        device: int | str | None = None,
        constraints: CaptureConstraints | None = None,
        stream_opener: Callable[..., object] | None = None,
    ) -> None:
        self._sample_rate = sample_rate
        self._channels = channels
        self._device = device
        self.constraints = constraints or CaptureConstraints()
        self._stream_opener = stream_opener or open_input_stream
        self._stream = None
        self._fragments: list[np.ndarray] = []
        self._lock = threading.Lock()

    @property
    def is_recording(self) -> bool:
        return self._stream is not None

    def __enter__(self) -> "RecordingController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _on_audio(self, indata, frames, time_info, status) -> None:
        # Runs on the PortAudio thread
        if status:
            logger.debug("Input stream status: %s", status)
        with self._lock:
            self._fragments.append(np.array(indata, dtype=np.float32, copy=True))

    def start(self) -> None:
        """Open the input device and begin buffering audio.

        Raises:
            AlreadyRecordingError: If a session is already open.
            DeviceUnavailableError: If no input device exists or access is denied.
        """
        if self._stream is not None:
            raise AlreadyRecordingError()

        if self.constraints.echo_cancellation or self.constraints.noise_suppression:
            logger.debug(
                "PortAudio exposes no echo cancellation / noise suppression; capturing raw input"
            )

        with self._lock:
            self._fragments = []

        try:
            stream = self._stream_opener(
                samplerate=self._sample_rate,
                channels=self._channels,
                device=self._device,
                dtype="float32",
                callback=self._on_audio,
            )
        except DeviceUnavailableError as exc:
            logger.error("Cannot open audio input device: %s", exc.detail)
            raise

        self._stream = stream
        logger.info("Recording started (%d Hz, %d ch)", self._sample_rate, self._channels)

    async def stop(self) -> bytes | None:
        """Release the device and return the recording as WAV bytes.

        Returns ``None`` when no session is open (no-op). Returns ``b""`` when
        the session captured no audio.
        """
        stream = self._stream
        if stream is None:
            return None
        self._stream = None

        try:
            await asyncio.to_thread(self._release, stream)
        finally:
            with self._lock:
                fragments, self._fragments = self._fragments, []

        audio = self._finalize(fragments)
        logger.info("Recording stopped (%d bytes)", len(audio))
        return audio

    def abort(self) -> None:
        """Release the device and discard buffered audio. Safe in any state."""
        stream = self._stream
        self._stream = None
        if stream is not None:
            self._release(stream)
            logger.info("Recording aborted")
        with self._lock:
            self._fragments = []

    def close(self) -> None:
        self.abort()

    @staticmethod
    def _release(stream) -> None:
        try:
            stream.stop()
        finally:
            stream.close()

    def _finalize(self, fragments: list[np.ndarray]) -> bytes:
        if not fragments:
            return b""
        data = np.concatenate(fragments, axis=0)
        if data.size == 0:
            return b""

        if self.constraints.auto_gain_control:
            peak = float(np.max(np.abs(data)))
            if peak > 0:
                data = np.clip(data * (_AGC_TARGET_PEAK / peak), -1.0, 1.0)

        buf = io.BytesIO()
        sf.write(buf, data, self._sample_rate, format="WAV", subtype="PCM_16")
        return buf.getvalue()
