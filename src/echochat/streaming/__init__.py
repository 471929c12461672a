"""Streaming reveal module for echochat.

Presents the illusion of a reply arriving over the network, then swaps in
the fully formatted reply.
"""

from .base import DisplaySink
from .config import StreamConfig
from .simulator import StreamCursor, StreamSimulator, StreamState
from .sinks import BufferSink, LiveConsoleSink

__all__ = [
    "BufferSink",
    "DisplaySink",
    "LiveConsoleSink",
    "StreamConfig",
    "StreamCursor",
    "StreamSimulator",
    "StreamState",
]
