"""Templated echo dialogue backend.

Placeholder for a real dialogue system: the reply is a deterministic template
around the user's message and involves no I/O.
"""

from src.services.dialogue.base import BaseDialogue

REPLY_TEMPLATE = 'You said: "{message}". This is a placeholder response from the virtual assistant.'


class EchoDialogue(BaseDialogue):
    """Echoes the message back inside :data:`REPLY_TEMPLATE`."""

    async def reply(self, message: str) -> str:
        return REPLY_TEMPLATE.format(message=message)
