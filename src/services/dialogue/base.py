"""
Abstract base class for dialogue backends.

The gateway treats dialogue as an integration point: a backend receives the
user's transcribed message and returns the assistant's reply text.
"""

from abc import ABC, abstractmethod


class BaseDialogue(ABC):
    """Interface that every dialogue backend must implement."""

    @abstractmethod
    async def reply(self, message: str) -> str:
        """Produce the assistant reply for one user message.

        Raises:
            ConversationError: If the backend fails.
        """

    async def aclose(self) -> None:
        """Release backend resources. No-op by default."""
