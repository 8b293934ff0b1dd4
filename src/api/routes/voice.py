"""
Voice REST endpoints.

Thin HTTP layer over ``VoiceGateway``: validates required inputs (400 via the
global handler), delegates, and folds provider failures into
``{success: false, error}`` bodies. Provider error details are logged, never
returned to the caller.
"""

import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from src.core.exceptions import ProviderError, ProviderTimeoutError, ValidationError
from src.core.models import (
    ConversationRequest,
    ConversationResponse,
    SpeechToTextResponse,
    TextToSpeechRequest,
    VoicesResponse,
)
from src.services.gateway import VoiceGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/voice", tags=["voice"])


def get_gateway(request: Request) -> VoiceGateway:
    """Return the gateway injected into the application at startup."""
    return request.app.state.gateway


@router.post(
    "/speech-to-text",
    response_model=SpeechToTextResponse,
    response_model_exclude_none=True,
)
async def speech_to_text(
    audio: UploadFile | None = File(default=None),
    gateway: VoiceGateway = Depends(get_gateway),
):
    """Transcribe an uploaded recording (multipart field ``audio``)."""
    if audio is None:
        raise ValidationError("No audio file provided")
    data = await audio.read()
    if not data:
        raise ValidationError("No audio file provided")

    logger.info("Processing speech to text request")
    try:
        transcription = await gateway.transcribe(
            data, filename=audio.filename, content_type=audio.content_type
        )
    except ProviderError as exc:
        logger.error("Error processing speech to text: %s", exc.detail)
        return SpeechToTextResponse(success=False, error="Failed to process audio")
    return SpeechToTextResponse(success=True, transcription=transcription)


@router.post("/text-to-speech")
async def text_to_speech(
    body: TextToSpeechRequest | None = None,
    gateway: VoiceGateway = Depends(get_gateway),
):
    """Synthesize ``text`` and return the raw MP3 payload."""
    if body is None or not body.text or not body.text.strip():
        raise ValidationError("No text provided")

    logger.info("Processing text to speech request")
    try:
        audio = await gateway.synthesize(body.text, body.voice_id)
    except ProviderError as exc:
        logger.error("Error processing text to speech: %s", exc.detail)
        return JSONResponse(
            status_code=504 if isinstance(exc, ProviderTimeoutError) else 500,
            content={"success": False, "error": "Failed to generate speech"},
        )

    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Content-Disposition": 'inline; filename="speech.mp3"'},
    )


@router.get("/voices", response_model=VoicesResponse, response_model_exclude_none=True)
async def list_voices(gateway: VoiceGateway = Depends(get_gateway)):
    """List provider voices available to the configured account."""
    try:
        voices = await gateway.list_voices()
    except ProviderError as exc:
        logger.error("Error fetching voices: %s", exc.detail)
        return VoicesResponse(success=False, error="Failed to fetch voices")
    return VoicesResponse(success=True, voices=voices)


@router.post(
    "/process-conversation",
    response_model=ConversationResponse,
    response_model_exclude_none=True,
)
async def process_conversation(
    body: ConversationRequest | None = None,
    gateway: VoiceGateway = Depends(get_gateway),
):
    """Return the assistant reply for a user message."""
    if body is None or not body.message or not body.message.strip():
        raise ValidationError("No message provided")

    logger.info("Processing conversation message")
    try:
        response = await gateway.converse(body.message)
    except ProviderError as exc:
        logger.error("Error processing conversation: %s", exc.detail)
        return ConversationResponse(success=False, error="Failed to process conversation")
    return ConversationResponse(success=True, response=response)
