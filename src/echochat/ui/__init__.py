"""Terminal UI module for echochat.

Provides a Textual-based chat TUI that streams simulated replies.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (message bubbles, code blocks, composer, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes for the light and dark preference
- callbacks.py: Display sink adapter (how streamed text reaches the widgets)
- config.py: UI constants
- app.py: Application orchestration (user interaction flow)
"""

from .app import EchoChatApp, run_textual_tui
from .callbacks import BubbleSink
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, CodeBlockView, DebugPanel, MessageBubble

__all__ = [
    "BubbleSink",
    "ChatHistoryWidget",
    "ChatInputBar",
    "CodeBlockView",
    "DebugPanel",
    "EchoChatApp",
    "LogLevel",
    "MessageBubble",
    "run_textual_tui",
]
