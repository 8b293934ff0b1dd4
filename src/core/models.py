"""
Pydantic v2 request / response models shared by the gateway and the client.

Gateway: SpeechToText, TextToSpeech, Voices, Conversation, Health, Error
Client : Message, MessageRole, TurnState
"""

import uuid
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Voice tuning
# ---------------------------------------------------------------------------


class VoiceTuning(BaseModel):
    """Provider voice settings, forwarded unchanged on every synthesis."""

    model_config = ConfigDict(frozen=True)

    stability: float = 0.1
    similarity_boost: float = 0.3
    style: float = 0.2


# ---------------------------------------------------------------------------
# Speech-to-text
# ---------------------------------------------------------------------------


class SpeechToTextResponse(BaseModel):
    """POST /voice/speech-to-text response."""

    success: bool
    transcription: str | None = None
    error: str | None = None


# ---------------------------------------------------------------------------
# Text-to-speech
# ---------------------------------------------------------------------------


class TextToSpeechRequest(BaseModel):
    """POST /voice/text-to-speech request body."""

    model_config = ConfigDict(populate_by_name=True)

    text: str | None = None
    voice_id: str | None = Field(default=None, alias="voiceId")


# ---------------------------------------------------------------------------
# Voices
# ---------------------------------------------------------------------------


class VoiceDescriptor(BaseModel):
    """A provider-side voice, as exposed by GET /voice/voices."""

    voice_id: str
    name: str | None = None
    category: str | None = None
    description: str | None = None
    preview_url: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)


class VoicesResponse(BaseModel):
    """GET /voice/voices response."""

    success: bool
    voices: list[VoiceDescriptor] | None = None
    error: str | None = None


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


class ConversationRequest(BaseModel):
    """POST /voice/process-conversation request body."""

    message: str | None = None


class ConversationResponse(BaseModel):
    """POST /voice/process-conversation response."""

    success: bool
    response: str | None = None
    error: str | None = None


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Error envelope returned by the global exception handlers."""

    success: bool = False
    error: str
    code: str
    timestamp: str


# ---------------------------------------------------------------------------
# Client conversation transcript and turn state
# ---------------------------------------------------------------------------


class MessageRole(StrEnum):
    """Who produced a message in the conversation."""

    user = "user"
    assistant = "assistant"


class Message(BaseModel):
    """One entry of the in-memory conversation transcript."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: MessageRole
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class TurnState(StrEnum):
    """States of one record → transcribe → converse → synthesize → play turn."""

    idle = "idle"
    recording = "recording"
    processing = "processing"
    playing = "playing"
