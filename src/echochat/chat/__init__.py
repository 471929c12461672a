"""Conversation module for echochat.

Holds the session's messages and the mock assistant that answers them.
"""

from .models import Conversation, RawMessage, Role
from .replies import GREETING, build_assistant_reply

__all__ = [
    "GREETING",
    "Conversation",
    "RawMessage",
    "Role",
    "build_assistant_reply",
]
