"""Shared pytest fixtures for the voice assistant test suite.

Provides settings, mock STT/TTS/dialogue backends, a gateway wired from them,
and small WAV / MP3-like audio payloads.
"""

import io
from unittest.mock import AsyncMock

import numpy as np
import pytest
import soundfile as sf

from src.core.config import Settings
from src.core.models import VoiceDescriptor

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def settings():
    """Gateway settings with a fake key, ignoring any local .env file."""
    return Settings(elevenlabs_api_key="test-key", _env_file=None)


# ---------------------------------------------------------------------------
# Provider Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Mock STT backend returning a fixed transcription."""
    from src.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "hello there"
    return stt


@pytest.fixture
def mock_tts(fake_mp3_bytes):
    """Mock TTS provider returning audio and one voice."""
    from src.services.synthesis.base import BaseTTS

    tts = AsyncMock(spec=BaseTTS)
    tts.synthesize.return_value = fake_mp3_bytes
    tts.list_voices.return_value = [
        VoiceDescriptor(voice_id="voice-1", name="Adam", category="premade")
    ]
    return tts


@pytest.fixture
def mock_dialogue():
    """Mock dialogue backend."""
    from src.services.dialogue.base import BaseDialogue

    dialogue = AsyncMock(spec=BaseDialogue)
    dialogue.reply.return_value = "Hi! How can I help?"
    return dialogue


@pytest.fixture
def gateway(mock_stt, mock_tts, mock_dialogue):
    """VoiceGateway over mocked backends."""
    from src.services.gateway import VoiceGateway

    return VoiceGateway(stt=mock_stt, tts=mock_tts, dialogue=mock_dialogue, timeout=5.0)


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_wav_bytes():
    """0.5 s of a 440 Hz tone as 16 kHz mono 16-bit WAV."""
    sample_rate = 16000
    t = np.arange(int(sample_rate * 0.5)) / sample_rate
    tone = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    buf = io.BytesIO()
    sf.write(buf, tone.astype(np.float32), sample_rate, format="WAV", subtype="PCM_16")
    return buf.getvalue()


@pytest.fixture
def fake_mp3_bytes():
    """Opaque bytes standing in for a provider MP3 payload."""
    return b"ID3\x04\x00\x00\x00\x00\x00\x00" + b"\xff\xfb\x90\x00" * 64
