"""Voice client configuration via pydantic-settings.

Values come from ``VOICE_CLIENT_*`` environment variables or ``.env``.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for the terminal and Streamlit voice clients."""

    model_config = SettingsConfigDict(
        env_prefix="VOICE_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    api_base_url: str = "http://localhost:3001"
    request_timeout_seconds: float = 60.0
    voice_id: str | None = None  # None = gateway default voice

    # Capture format
    sample_rate: int = 16000
    channels: int = 1
    input_device: int | str | None = None  # sounddevice device index or name, None = default

    log_level: str = "INFO"

    @field_validator("input_device", mode="before")
    @classmethod
    def _device_index(cls, value):
        # Env values arrive as strings; digits select a PortAudio device index
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value or None
