"""
Echochat: a chat interface that streams simulated assistant replies.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .errors import EchochatError, SinkWriteFailure
from .render import CodeBlock, FormattedBlock, Paragraph, format_text, render_html
from .streaming import DisplaySink, StreamConfig, StreamSimulator, StreamState

__all__ = [
    "CodeBlock",
    "DisplaySink",
    "EchochatError",
    "FormattedBlock",
    "Paragraph",
    "SinkWriteFailure",
    "StreamConfig",
    "StreamSimulator",
    "StreamState",
    "format_text",
    "render_html",
]
