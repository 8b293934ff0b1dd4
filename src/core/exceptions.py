"""
Voice assistant exception hierarchy.

All application-specific exceptions inherit from VoiceAssistantError,
enabling centralized error handling in the API middleware layer and a
single catch point in the client orchestrator.
"""

from datetime import UTC, datetime


class VoiceAssistantError(Exception):
    """Base exception for all voice assistant errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICE_ASSISTANT_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class ValidationError(VoiceAssistantError):
    """Raised when a required input (audio file, text, message) is missing."""

    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(detail=detail, code="VALIDATION_ERROR", status_code=400)


class ConfigurationError(VoiceAssistantError):
    """Raised at startup when required configuration is missing or invalid."""

    def __init__(self, detail: str = "Invalid configuration") -> None:
        super().__init__(detail=detail, code="CONFIGURATION_ERROR", status_code=500)


# ---------------------------------------------------------------------------
# Provider errors
# ---------------------------------------------------------------------------


class ProviderError(VoiceAssistantError):
    """Raised when a call to an external provider fails."""

    def __init__(
        self,
        detail: str = "Provider request failed",
        code: str = "PROVIDER_ERROR",
        status_code: int = 502,
    ) -> None:
        super().__init__(detail=detail, code=code, status_code=status_code)


class TranscriptionError(ProviderError):
    """Raised when speech-to-text fails."""

    def __init__(self, detail: str = "Failed to convert speech to text") -> None:
        super().__init__(detail=detail, code="TRANSCRIPTION_FAILED")


class SynthesisFailedError(ProviderError):
    """Raised when text-to-speech fails or returns no audio."""

    def __init__(self, detail: str = "Failed to convert text to speech") -> None:
        super().__init__(detail=detail, code="SYNTHESIS_FAILED")


class VoiceListFailedError(ProviderError):
    """Raised when the provider voice list cannot be fetched."""

    def __init__(self, detail: str = "Failed to fetch voices") -> None:
        super().__init__(detail=detail, code="VOICE_LIST_FAILED")


class ConversationError(ProviderError):
    """Raised when the dialogue backend fails to produce a reply."""

    def __init__(self, detail: str = "Failed to process conversation") -> None:
        super().__init__(detail=detail, code="CONVERSATION_FAILED")


class ProviderTimeoutError(ProviderError):
    """Raised when a provider call exceeds the configured timeout."""

    def __init__(self, operation: str = "Provider request", timeout: float | None = None) -> None:
        detail = f"{operation} timed out"
        if timeout is not None:
            detail += f" after {timeout:g}s"
        super().__init__(detail=detail, code="PROVIDER_TIMEOUT", status_code=504)


# ---------------------------------------------------------------------------
# Client-side (audio device) errors
# ---------------------------------------------------------------------------


class DeviceUnavailableError(VoiceAssistantError):
    """Raised when no input device exists or access to it is denied."""

    def __init__(self, detail: str = "Audio input device unavailable") -> None:
        super().__init__(detail=detail, code="DEVICE_UNAVAILABLE", status_code=503)


class AlreadyRecordingError(VoiceAssistantError):
    """Raised when trying to start a recording while one is already active."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="ALREADY_RECORDING",
            status_code=409,
        )


class PlaybackError(VoiceAssistantError):
    """Raised when synthesized audio cannot be decoded or played."""

    def __init__(self, detail: str = "Failed to play audio") -> None:
        super().__init__(detail=detail, code="PLAYBACK_FAILED", status_code=500)
