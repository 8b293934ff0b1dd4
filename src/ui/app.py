"""
Voice assistant Streamlit UI: main entry point.

Run with: ``streamlit run src/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from src.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (src/ui/),
# which removes the project root needed for absolute ``src.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from src.client.api_client import APIError  # noqa: E402
from src.client.config import ClientSettings  # noqa: E402
from src.ui.components.conversation import (  # noqa: E402
    fetch_voices,
    render_error,
    render_messages,
    run_turn,
)

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Voice Virtual Assistant",
    page_icon="\U0001f399️",
    layout="centered",
)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_settings = ClientSettings()
_DEFAULTS = {
    "api_base_url": _settings.api_base_url,
    "voice_id": _settings.voice_id,
    "voices": None,
    "messages": [],
    "turn_error": None,
    "state_history": [],
    "last_audio_id": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value


# Failures raise, so only a successful voice list is cached
_cached_voices = st.cache_data(ttl=300)(fetch_voices)


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f399️ Voice Assistant")
    st.session_state.api_base_url = st.text_input(
        "Gateway URL",
        value=st.session_state.api_base_url,
        help="URL of the voice gateway (default: http://localhost:3001)",
    )

    try:
        voices = _cached_voices(st.session_state.api_base_url)
    except APIError as exc:
        voices = None
        st.error(f"Gateway: {exc.message}")

    if voices is not None:
        options = [None] + [v["voice_id"] for v in voices]
        names = {v["voice_id"]: v.get("name") or v["voice_id"] for v in voices}
        current = st.session_state.voice_id
        st.session_state.voice_id = st.selectbox(
            "Voice",
            options,
            index=options.index(current) if current in options else 0,
            format_func=lambda vid: "Default" if vid is None else names[vid],
        )

    if st.button("Clear conversation", use_container_width=True):
        st.session_state.messages = []
        st.session_state.turn_error = None
        st.rerun()

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
st.header("Voice Virtual Assistant")

audio = st.audio_input("Record your message")
if audio is not None and audio.file_id != st.session_state.last_audio_id:
    # st.audio_input keeps returning the same clip on every rerun
    st.session_state.last_audio_id = audio.file_id
    run_turn(audio.getvalue())

render_error()
render_messages(st.session_state.messages)
