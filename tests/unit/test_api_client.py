"""Unit tests for the async VoiceAPIClient.

Uses ``httpx.MockTransport`` so requests are built by the real client and
answered by a local handler.
"""

import json

import httpx
import pytest

from src.client.api_client import APIError, VoiceAPIClient


def _client(handler) -> VoiceAPIClient:
    return VoiceAPIClient(base_url="http://gateway:3001/", transport=httpx.MockTransport(handler))


class TestSpeechToText:
    async def test_uploads_multipart_audio(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = request.read()
            return httpx.Response(200, json={"success": True, "transcription": "hello"})

        async with _client(handler) as client:
            result = await client.speech_to_text(b"RIFFdata")

        assert result == {"success": True, "transcription": "hello"}
        assert seen["path"] == "/voice/speech-to-text"
        assert seen["content_type"].startswith("multipart/form-data")
        assert b'name="audio"' in seen["body"]
        assert b"RIFFdata" in seen["body"]

    async def test_http_error_folded_into_failure(self):
        def handler(request):
            return httpx.Response(400, json={"success": False, "error": "No audio file provided"})

        async with _client(handler) as client:
            result = await client.speech_to_text(b"x")

        assert result == {"success": False, "error": "No audio file provided"}

    async def test_connection_error_folded_into_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            result = await client.speech_to_text(b"x")

        assert result["success"] is False
        assert "not reachable" in result["error"]


class TestTextToSpeech:
    async def test_returns_audio_bytes(self):
        seen = {}

        def handler(request):
            seen["json"] = json.loads(request.read())
            return httpx.Response(200, content=b"mp3", headers={"content-type": "audio/mpeg"})

        async with _client(handler) as client:
            audio = await client.text_to_speech("hello", voice_id="v1")

        assert audio == b"mp3"
        assert seen["json"] == {"text": "hello", "voiceId": "v1"}

    async def test_voice_id_omitted_when_none(self):
        seen = {}

        def handler(request):
            seen["json"] = json.loads(request.read())
            return httpx.Response(200, content=b"mp3")

        async with _client(handler) as client:
            await client.text_to_speech("hello")

        assert seen["json"] == {"text": "hello"}

    async def test_failure_returns_none(self):
        def handler(request):
            return httpx.Response(500, json={"success": False, "error": "Failed to generate speech"})

        async with _client(handler) as client:
            assert await client.text_to_speech("hello") is None

    async def test_timeout_returns_none(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        async with _client(handler) as client:
            assert await client.text_to_speech("hello") is None


class TestConversationAndVoices:
    async def test_process_conversation(self):
        def handler(request):
            assert json.loads(request.read()) == {"message": "hi"}
            return httpx.Response(200, json={"success": True, "response": "ok"})

        async with _client(handler) as client:
            assert await client.process_conversation("hi") == {"success": True, "response": "ok"}

    async def test_list_voices(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/voice/voices"
            return httpx.Response(200, json={"success": True, "voices": [{"voice_id": "v1"}]})

        async with _client(handler) as client:
            result = await client.list_voices()

        assert result["voices"][0]["voice_id"] == "v1"


class TestRequest:
    async def test_non_json_error_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        async with _client(handler) as client:
            with pytest.raises(APIError) as exc_info:
                await client.health_check()

        assert exc_info.value.category == "http"
        assert exc_info.value.message == "Bad Gateway"

    async def test_non_object_json_error_body(self):
        def handler(request):
            return httpx.Response(502, json=["bad gateway"])

        async with _client(handler) as client:
            result = await client.process_conversation("hi")
            voices = await client.list_voices()
            audio = await client.text_to_speech("hi")

        assert result["success"] is False
        assert "bad gateway" in result["error"]
        assert voices["success"] is False
        assert audio is None

    async def test_empty_error_body_uses_status(self):
        def handler(request):
            return httpx.Response(503)

        async with _client(handler) as client:
            with pytest.raises(APIError, match="status: 503"):
                await client.health_check()

    async def test_timeout_category(self):
        def handler(request):
            raise httpx.ConnectTimeout("slow", request=request)

        async with _client(handler) as client:
            with pytest.raises(APIError) as exc_info:
                await client.health_check()

        assert exc_info.value.category == "timeout"
