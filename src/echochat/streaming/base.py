"""Abstract display sink.

This module defines the write-only surface the stream simulator renders
into. The abstraction hides:
- What the surface is (terminal widget, console, HTML document, test recorder)
- How raw and formatted content are drawn

Implementations must not block: both methods are called from the event
loop and are expected to return promptly.
"""

from abc import ABC, abstractmethod

from ..render.models import FormattedBlock


class DisplaySink(ABC):
    """Destination for a streamed reply."""

    @abstractmethod
    def set_raw_text(self, text: str) -> None:
        """Replace the displayed content with unformatted text."""

    @abstractmethod
    def set_formatted(self, blocks: list[FormattedBlock]) -> None:
        """Replace the displayed content with the final formatted blocks."""
