"""
Asynchronous HTTP client for the voice gateway API.

Uses ``httpx.AsyncClient`` so each pipeline stage suspends on its network
call. JSON endpoints never raise on failure: transport and HTTP errors are
folded into ``{"success": False, "error": ...}`` so the orchestrator handles
every failure the same way.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


class VoiceAPIClient:
    """Thin async wrapper around httpx for calling the voice gateway.

    Usable as an async context manager; the underlying connection pool is
    closed on exit.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the voice gateway.
            timeout: Per-request timeout in seconds.
            transport: Optional transport override (tests, ASGI in-process).
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "VoiceAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                f"Voice gateway is not reachable at {self._base_url}",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError("Request timed out", category="timeout") from None
        except httpx.HTTPStatusError as exc:
            try:
                body = exc.response.json()
            except ValueError:
                body = None
            detail = None
            if isinstance(body, dict):
                detail = body.get("error") or body.get("detail")
            detail = detail or exc.response.text or f"HTTP error! status: {exc.response.status_code}"
            raise APIError(str(detail), category="http") from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    async def health_check(self) -> dict:
        return (await self._request("GET", "/health")).json()

    # -- voice --

    async def speech_to_text(
        self,
        audio: bytes,
        filename: str = "recording.wav",
        content_type: str = "audio/wav",
    ) -> dict:
        """Upload a recording; returns ``{success, transcription?, error?}``."""
        try:
            resp = await self._request(
                "POST",
                "/voice/speech-to-text",
                files={"audio": (filename, audio, content_type)},
            )
        except APIError as exc:
            logger.error("Error in speech_to_text: %s", exc.message)
            return {"success": False, "error": exc.message}
        return resp.json()

    async def text_to_speech(self, text: str, voice_id: str | None = None) -> bytes | None:
        """Synthesize ``text``; returns MP3 bytes, or ``None`` on any failure."""
        body: dict = {"text": text}
        if voice_id:
            body["voiceId"] = voice_id
        try:
            resp = await self._request("POST", "/voice/text-to-speech", json=body)
        except APIError as exc:
            logger.error("Error in text_to_speech: %s", exc.message)
            return None
        return resp.content or None

    async def process_conversation(self, message: str) -> dict:
        """Returns ``{success, response?, error?}``."""
        try:
            resp = await self._request(
                "POST", "/voice/process-conversation", json={"message": message}
            )
        except APIError as exc:
            logger.error("Error in process_conversation: %s", exc.message)
            return {"success": False, "error": exc.message}
        return resp.json()

    async def list_voices(self) -> dict:
        """Returns ``{success, voices?, error?}``."""
        try:
            resp = await self._request("GET", "/voice/voices")
        except APIError as exc:
            logger.error("Error in list_voices: %s", exc.message)
            return {"success": False, "error": exc.message}
        return resp.json()
