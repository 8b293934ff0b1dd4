"""Tests for health check, CORS headers, and startup configuration.

Exercises the FastAPI app through an async HTTP client to verify the health
endpoint, CORS origin filtering, and that a missing provider key prevents
the application from being built.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.core.exceptions import ConfigurationError


@pytest.fixture
def app(settings, gateway):
    """Create a fresh FastAPI application instance."""
    return create_app(settings, gateway=gateway)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


async def test_health_returns_200(client):
    """GET /health returns 200 with status, version, and timestamp."""
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == "0.1.0"
    assert "timestamp" in body


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


async def test_cors_allows_streamlit_origin(client):
    """Streamlit's default origin (localhost:8501) is in the CORS allow-list."""
    resp = await client.options(
        "/voice/voices",
        headers={
            "Origin": "http://localhost:8501",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.headers.get("access-control-allow-origin") == "http://localhost:8501"


async def test_cors_rejects_unknown_origin(client):
    """Origins not in the allow-list receive no CORS header."""
    resp = await client.options(
        "/voice/voices",
        headers={
            "Origin": "http://evil.example.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert "access-control-allow-origin" not in resp.headers


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------


def test_create_app_without_api_key_fails(monkeypatch, tmp_path):
    """No ELEVENLABS_API_KEY in env or .env -> ConfigurationError at build time."""
    monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)  # no .env here

    with pytest.raises(ConfigurationError, match="ELEVENLABS_API_KEY"):
        create_app()


def test_gateway_stored_on_app_state(app, gateway, settings):
    assert app.state.gateway is gateway
    assert app.state.settings is settings
