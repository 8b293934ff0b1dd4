"""Terminal voice client.

Press Enter to start recording, Enter again to stop; the reply is spoken
through the default output device. ``q`` quits.

Run with ``python -m src.client`` (gateway must be running).
"""

import argparse
import asyncio
import logging
import threading

from src.client.api_client import VoiceAPIClient
from src.client.config import ClientSettings
from src.client.orchestrator import ConversationOrchestrator
from src.client.player import AudioPlayer
from src.client.recorder import RecordingController
from src.core.models import MessageRole, TurnState

logger = logging.getLogger(__name__)

_STATUS_TEXT = {
    TurnState.idle: "Ready",
    TurnState.recording: "Recording...",
    TurnState.processing: "Processing...",
    TurnState.playing: "Playing response...",
}


def _print_status(state: TurnState) -> None:
    print(f"[{_STATUS_TEXT[state]}]")


async def _prompt(text: str) -> str:
    """Read one line from stdin without blocking the event loop.

    The read runs on a daemon thread so Ctrl-C can end the process while
    ``input()`` is still waiting.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _resolve(line: str | None, exc: BaseException | None) -> None:
        if future.done():
            return
        if exc is not None:
            future.set_exception(exc)
        else:
            future.set_result(line)

    def _read() -> None:
        try:
            line, exc = input(text), None
        except (EOFError, OSError) as err:
            line, exc = None, err
        if not loop.is_closed():
            loop.call_soon_threadsafe(_resolve, line, exc)

    threading.Thread(target=_read, name="stdin-prompt", daemon=True).start()
    return await future


async def _print_voices(client: VoiceAPIClient) -> int:
    result = await client.list_voices()
    if not result.get("success"):
        print(f"Error: {result.get('error', 'Failed to fetch voices')}")
        return 1
    for voice in result.get("voices", []):
        print(f"{voice['voice_id']}  {voice.get('name') or ''}  {voice.get('category') or ''}")
    return 0


async def run(settings: ClientSettings, voice_id: str | None = None) -> int:
    """Interactive loop: one turn per pair of Enter presses."""
    async with VoiceAPIClient(settings.api_base_url, settings.request_timeout_seconds) as client:
        recorder = RecordingController(
            sample_rate=settings.sample_rate,
            channels=settings.channels,
            device=settings.input_device,
        )
        orchestrator = ConversationOrchestrator(
            recorder,
            client,
            AudioPlayer(),
            voice_id=voice_id or settings.voice_id,
            on_state_change=_print_status,
        )
        seen = 0
        try:
            while True:
                answer = await _prompt("Press Enter to talk (q to quit): ")
                if answer.strip().lower() == "q":
                    break
                await orchestrator.start_recording()
                if orchestrator.state is TurnState.recording:
                    await _prompt("Press Enter to stop: ")
                    await orchestrator.stop_recording()

                for message in orchestrator.messages[seen:]:
                    speaker = "You" if message.role is MessageRole.user else "Assistant"
                    print(f"{speaker} ({message.timestamp:%H:%M:%S}): {message.text}")
                seen = len(orchestrator.messages)
                if orchestrator.error:
                    print(f"Error: {orchestrator.error}")
                    orchestrator.dismiss_error()
        except (asyncio.CancelledError, EOFError):
            print()
        finally:
            orchestrator.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Talk to the voice assistant gateway.")
    parser.add_argument("--api-url", help="Gateway base URL (default from VOICE_CLIENT_API_BASE_URL)")
    parser.add_argument("--voice-id", help="Provider voice id to answer with")
    parser.add_argument("--list-voices", action="store_true", help="Print available voices and exit")
    parser.add_argument("--log-level", help="Python logging level")
    args = parser.parse_args(argv)

    overrides = {}
    if args.api_url:
        overrides["api_base_url"] = args.api_url
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = ClientSettings(**overrides)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if args.list_voices:
        async def _list() -> int:
            async with VoiceAPIClient(settings.api_base_url, settings.request_timeout_seconds) as client:
                return await _print_voices(client)

        return asyncio.run(_list())

    try:
        return asyncio.run(run(settings, voice_id=args.voice_id))
    except KeyboardInterrupt:
        return 130
