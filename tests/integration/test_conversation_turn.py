"""End-to-end conversation turn: orchestrator -> HTTP client -> gateway app.

The client talks to the gateway in-process over ``httpx.ASGITransport``; the
microphone and speaker are replaced by fakes.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from httpx import ASGITransport

from src.client.api_client import VoiceAPIClient
from src.client.orchestrator import ConversationOrchestrator
from src.core.exceptions import SynthesisFailedError
from src.core.models import MessageRole, TurnState


@pytest.fixture
def recorder(sample_wav_bytes):
    rec = MagicMock()
    rec.stop = AsyncMock(return_value=sample_wav_bytes)
    return rec


@pytest.fixture
def player():
    return AsyncMock()


@pytest.fixture
async def client(app):
    async with VoiceAPIClient(base_url="http://test", transport=ASGITransport(app=app)) as c:
        yield c


async def test_full_turn(recorder, client, player, provider_tts, fake_mp3_bytes):
    orchestrator = ConversationOrchestrator(recorder, client, player, voice_id="v-1")

    await orchestrator.start_recording()
    await orchestrator.stop_recording()

    assert orchestrator.state_history == [
        TurnState.idle,
        TurnState.recording,
        TurnState.processing,
        TurnState.playing,
        TurnState.idle,
    ]
    assert orchestrator.error is None

    user, assistant = orchestrator.messages
    assert user.role is MessageRole.user
    assert user.text == "Transcribed text placeholder"
    assert assistant.role is MessageRole.assistant
    assert assistant.text == (
        'You said: "Transcribed text placeholder". '
        "This is a placeholder response from the virtual assistant."
    )
    provider_tts.synthesize.assert_awaited_once_with(assistant.text, "v-1")
    player.play.assert_awaited_once_with(fake_mp3_bytes)


async def test_synthesis_failure_skips_playback(recorder, client, player, provider_tts):
    provider_tts.synthesize.side_effect = SynthesisFailedError("quota exceeded")
    orchestrator = ConversationOrchestrator(recorder, client, player)

    await orchestrator.start_recording()
    await orchestrator.stop_recording()

    assert orchestrator.state is TurnState.idle
    assert TurnState.playing not in orchestrator.state_history
    assert len(orchestrator.messages) == 2
    player.play.assert_not_called()


async def test_gateway_unreachable(recorder, player):
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    async with VoiceAPIClient(
        base_url="http://gateway:3001", transport=httpx.MockTransport(refuse)
    ) as client:
        orchestrator = ConversationOrchestrator(recorder, client, player)
        await orchestrator.start_recording()
        await orchestrator.stop_recording()

    assert orchestrator.state is TurnState.idle
    assert "not reachable" in orchestrator.error
    assert orchestrator.messages == ()
