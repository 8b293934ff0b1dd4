"""
Claude dialogue backend.

Uses the Anthropic Python SDK (``anthropic.AsyncAnthropic``) as the external
dialogue system. Replies are kept short because they are spoken back to the
user. A failed call is terminal for the turn: there is no retry.
"""

import logging

from anthropic import APIConnectionError, APIStatusError, APITimeoutError, AsyncAnthropic

from src.core.exceptions import ConversationError, ProviderTimeoutError
from src.services.dialogue.base import BaseDialogue

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a friendly voice assistant. Your answers are read aloud, so reply "
    "in one to three short sentences of plain text without markdown or lists."
)


class ClaudeDialogue(BaseDialogue):
    """Claude API dialogue backend.

    Args:
        api_key: Anthropic API key.
        model: Claude model name.
        max_tokens: Upper bound on reply length.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 300,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._client = AsyncAnthropic(api_key=self._api_key, timeout=timeout, max_retries=0)

    async def reply(self, message: str) -> str:
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": message}],
            )
        except APITimeoutError as exc:
            logger.warning("Claude API timeout: %s", exc)
            raise ProviderTimeoutError("Conversation") from exc
        except APIConnectionError as exc:
            logger.warning("Claude API connection error: %s", exc)
            raise ConversationError() from exc
        except APIStatusError as exc:
            logger.error("Claude API error (status %s): %s", exc.status_code, exc)
            raise ConversationError() from exc

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        ).strip()
        if not text:
            raise ConversationError("Dialogue backend returned an empty reply")
        return text

    async def aclose(self) -> None:
        await self._client.close()
