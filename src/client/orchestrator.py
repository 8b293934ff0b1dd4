"""Conversation turn orchestrator.

Drives one user turn through a strictly sequential pipeline::

    idle -> recording -> processing -> playing -> idle

Each stage awaits its network call or device event before the next begins.
There is no mid-pipeline cancellation and no retry: any failure ends the turn
back in ``idle`` with ``error`` set.

Usage::

    orchestrator = ConversationOrchestrator(recorder, client, player)
    await orchestrator.start_recording()
    ...
    await orchestrator.stop_recording()   # runs the whole pipeline
    print(orchestrator.messages)
"""

import logging
from collections.abc import Callable
from typing import Protocol

from src.core.exceptions import VoiceAssistantError
from src.core.models import Message, MessageRole, TurnState

logger = logging.getLogger(__name__)


class AudioSource(Protocol):
    """Anything that can produce one recording per start/stop cycle."""

    def start(self) -> None: ...

    async def stop(self) -> bytes | None: ...

    def abort(self) -> None: ...


class GatewayClient(Protocol):
    async def speech_to_text(self, audio: bytes) -> dict: ...

    async def process_conversation(self, message: str) -> dict: ...

    async def text_to_speech(self, text: str, voice_id: str | None = None) -> bytes | None: ...


class Player(Protocol):
    async def play(self, audio: bytes) -> None: ...


class ConversationOrchestrator:
    """Sequences record → transcribe → converse → synthesize → play.

    Args:
        recorder: Audio source for the user's utterance.
        client: Gateway client.
        player: Plays the synthesized reply to completion.
        voice_id: Voice to synthesize with; ``None`` uses the gateway default.
        on_state_change: Called with the new state after every transition.
    """

    def __init__(
        self,
        recorder: AudioSource,
        client: GatewayClient,
        player: Player,
        voice_id: str | None = None,
        on_state_change: Callable[[TurnState], None] | None = None,
    ) -> None:
        self._recorder = recorder
        self._client = client
        self._player = player
        self.voice_id = voice_id
        self._on_state_change = on_state_change
        self._messages: list[Message] = []
        self.state = TurnState.idle
        self.state_history: list[TurnState] = [TurnState.idle]
        self.error: str | None = None

    @property
    def messages(self) -> tuple[Message, ...]:
        """Conversation so far, in creation order."""
        return tuple(self._messages)

    @property
    def busy(self) -> bool:
        """True while a turn is being processed or played back."""
        return self.state in (TurnState.processing, TurnState.playing)

    def dismiss_error(self) -> None:
        self.error = None

    def _set_state(self, state: TurnState) -> None:
        self.state = state
        self.state_history.append(state)
        logger.debug("Turn state -> %s", state)
        if self._on_state_change is not None:
            self._on_state_change(state)

    def _fail(self, message: str) -> None:
        logger.warning("Turn aborted: %s", message)
        self.error = message
        self._set_state(TurnState.idle)

    def _append(self, role: MessageRole, text: str) -> None:
        self._messages.append(Message(role=role, text=text))

    async def start_recording(self) -> None:
        """idle -> recording. Device failures end back in idle with an error."""
        if self.state is not TurnState.idle:
            logger.warning("Ignoring start_recording while %s", self.state)
            return

        self.error = None
        self._set_state(TurnState.recording)
        try:
            self._recorder.start()
        except VoiceAssistantError as exc:
            self._fail(exc.detail)
        except Exception as exc:
            logger.exception("Failed to start recording")
            self._fail(str(exc) or "Failed to start recording")

    async def stop_recording(self) -> None:
        """recording -> processing, then run the rest of the turn."""
        if self.state is not TurnState.recording:
            logger.warning("Ignoring stop_recording while %s", self.state)
            return

        self._set_state(TurnState.processing)
        try:
            audio = await self._recorder.stop()
            if not audio:
                self._fail("No audio recorded")
                return
            await self._process(audio)
        except VoiceAssistantError as exc:
            self._fail(exc.detail)
        except Exception as exc:
            logger.exception("Unexpected error during turn")
            self._fail(str(exc) or "An error occurred")

    async def _process(self, audio: bytes) -> None:
        stt = await self._client.speech_to_text(audio)
        transcription = stt.get("transcription")
        if not stt.get("success") or not transcription:
            self._fail(stt.get("error") or "Failed to transcribe audio")
            return
        self._append(MessageRole.user, transcription)

        conversation = await self._client.process_conversation(transcription)
        reply = conversation.get("response")
        if not conversation.get("success") or not reply:
            self._fail(conversation.get("error") or "Failed to process conversation")
            return
        self._append(MessageRole.assistant, reply)

        speech = await self._client.text_to_speech(reply, self.voice_id)
        if speech:
            self._set_state(TurnState.playing)
            await self._player.play(speech)
        self._set_state(TurnState.idle)

    def close(self) -> None:
        """Release the capture device (page / process teardown)."""
        self._recorder.abort()
