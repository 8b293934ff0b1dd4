"""
Application configuration via pydantic-settings.

Loads values from the environment or a ``.env`` file. The gateway settings are
immutable once built: ``load_settings()`` validates them and the resulting
object is handed to ``create_app()`` rather than read from a global.
"""

from typing import Literal

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Voice gateway settings loaded from environment / .env file.

    Field names map directly to env var names (case-insensitive).

    Attributes:
        elevenlabs_api_key: Provider credential. Required; startup fails without it.
        stt_provider: Transcription backend ("placeholder" or "elevenlabs").
        dialogue_provider: Conversation backend ("echo" or "claude").
        provider_timeout_seconds: Upper bound on any single provider call.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
        frozen=True,
    )

    # --- ElevenLabs provider ---
    elevenlabs_api_key: str
    elevenlabs_base_url: str | None = None  # None = SDK default endpoint
    default_voice_id: str = "pNInz6obpgDQGcFmaJgB"
    tts_model_id: str = "eleven_multilingual_v2"
    tts_output_format: str = "mp3_44100_128"

    # Voice tuning, passed to the provider unchanged
    voice_stability: float = 0.1
    voice_similarity_boost: float = 0.3
    voice_style: float = 0.2

    provider_timeout_seconds: float = 30.0

    # --- Speech-to-text ---
    # "placeholder" returns a fixed string; "elevenlabs" calls the provider STT
    stt_provider: Literal["placeholder", "elevenlabs"] = "placeholder"
    stt_model_id: str = "scribe_v1"

    # --- Dialogue ---
    # "echo" is the templated stub; "claude" uses the Anthropic Messages API
    dialogue_provider: Literal["echo", "claude"] = "echo"
    claude_api_key: str = ""  # Required when dialogue_provider="claude"
    claude_model: str = "claude-sonnet-4-20250514"

    # --- Application ---
    app_host: str = "0.0.0.0"
    app_port: int = 3001
    cors_origins: list[str] = ["http://localhost:8501", "http://localhost:3000"]
    log_level: str = "INFO"

    @field_validator("elevenlabs_api_key")
    @classmethod
    def _api_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ELEVENLABS_API_KEY must not be empty")
        return value

    @model_validator(mode="after")
    def _claude_key_when_selected(self) -> "Settings":
        if self.dialogue_provider == "claude" and not self.claude_api_key.strip():
            raise ValueError("CLAUDE_API_KEY is required when DIALOGUE_PROVIDER=claude")
        return self


def load_settings(**overrides) -> Settings:
    """Build and validate the gateway settings.

    Args:
        **overrides: Explicit values that take precedence over env / .env.

    Returns:
        Settings: The frozen configuration object.

    Raises:
        ConfigurationError: If a required value (the provider API key) is
            missing or any value fails validation.
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as exc:
        errors = exc.errors()
        fields = [".".join(str(p) for p in err["loc"]) for err in errors]
        if "elevenlabs_api_key" in fields:
            raise ConfigurationError("ELEVENLABS_API_KEY is required") from exc
        # Cross-field checks carry no field location, only a message
        problems = [field or err["msg"] for field, err in zip(fields, errors)]
        raise ConfigurationError(f"Invalid configuration: {', '.join(problems)}") from exc
