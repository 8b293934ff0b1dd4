"""
Dialogue module - Conversation backend abstraction layer.

Factory function for creating dialogue backends based on provider configuration.
"""

from .base import BaseDialogue

__all__ = ["BaseDialogue", "create_dialogue"]


def create_dialogue(provider: str, **kwargs) -> BaseDialogue:
    """
    Factory function to create a dialogue backend based on provider.

    Args:
        provider: Dialogue provider name ("echo", "claude")
        **kwargs: Provider-specific configuration

    Returns:
        BaseDialogue implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "echo":
        from .echo import EchoDialogue

        return EchoDialogue()
    elif provider == "claude":
        from .claude import ClaudeDialogue

        return ClaudeDialogue(**kwargs)
    else:
        raise ValueError(f"Unknown dialogue provider: {provider}")
