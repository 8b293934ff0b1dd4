"""
Client module - microphone capture, gateway calls and playback for one turn.
"""

from .orchestrator import ConversationOrchestrator
from .recorder import RecordingController

__all__ = ["ConversationOrchestrator", "RecordingController"]
