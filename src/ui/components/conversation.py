"""
Conversation component: runs one turn from browser-captured audio.

The browser records through ``st.audio_input`` (with its own echo
cancellation / noise suppression), so the recorder here only hands over the
finished blob. Playback renders an autoplaying ``st.audio`` element.
"""

import asyncio
import logging

import streamlit as st

from src.client.api_client import APIError, VoiceAPIClient
from src.client.orchestrator import ConversationOrchestrator
from src.core.models import Message, MessageRole

logger = logging.getLogger(__name__)


def fetch_voices(api_base_url: str) -> list[dict]:
    """Return the gateway's voice list.

    Raises:
        APIError: If the gateway is unreachable or reports a failure.
    """

    async def _fetch() -> dict:
        async with VoiceAPIClient(base_url=api_base_url) as client:
            return await client.list_voices()

    result = asyncio.run(_fetch())
    if not result.get("success"):
        raise APIError(result.get("error") or "Failed to fetch voices")
    return result.get("voices") or []


class BrowserRecording:
    """Audio source wrapping a recording the browser already finished."""

    def __init__(self, audio: bytes) -> None:
        self._audio = audio
        self.is_recording = False

    def start(self) -> None:
        self.is_recording = True

    async def stop(self) -> bytes | None:
        if not self.is_recording:
            return None
        self.is_recording = False
        return self._audio

    def abort(self) -> None:
        self.is_recording = False


class StreamlitPlayer:
    """Renders the reply as an autoplaying audio element."""

    async def play(self, audio: bytes) -> None:
        st.audio(audio, format="audio/mpeg", autoplay=True)


async def _run_turn(audio: bytes, api_base_url: str, voice_id: str | None) -> ConversationOrchestrator:
    async with VoiceAPIClient(base_url=api_base_url) as client:
        orchestrator = ConversationOrchestrator(
            BrowserRecording(audio), client, StreamlitPlayer(), voice_id=voice_id
        )
        await orchestrator.start_recording()
        await orchestrator.stop_recording()
    return orchestrator


def run_turn(audio: bytes) -> None:
    """Process one recorded utterance and merge the results into session state."""
    with st.spinner("Processing..."):
        orchestrator = asyncio.run(
            _run_turn(audio, st.session_state.api_base_url, st.session_state.voice_id)
        )
    st.session_state.messages.extend(orchestrator.messages)
    st.session_state.turn_error = orchestrator.error
    st.session_state.state_history = [str(s) for s in orchestrator.state_history]


def render_messages(messages: list[Message]) -> None:
    """Show the conversation, or a welcome note when it is empty."""
    if not messages:
        st.info(
            "Record a message to begin. The assistant will listen to your voice, "
            "convert speech to text, process your message and respond with "
            "synthesized speech."
        )
        return

    for message in messages:
        role = "user" if message.role is MessageRole.user else "assistant"
        with st.chat_message(role):
            st.write(message.text)
            st.caption(message.timestamp.strftime("%H:%M:%S"))


def render_error() -> None:
    """Dismissible error banner for the last failed turn."""
    error = st.session_state.turn_error
    if not error:
        return
    st.error(error)
    if st.button("Dismiss"):
        st.session_state.turn_error = None
        st.rerun()
