"""
Synthesis module - Text-to-speech and voice catalogue abstraction layer.
"""

from .base import BaseTTS

__all__ = ["BaseTTS"]
