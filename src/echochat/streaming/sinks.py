"""Display sink implementations outside the TUI.

- BufferSink records every write (used by the render command and tests)
- LiveConsoleSink draws into a Rich Live display
"""

from rich.live import Live
from rich.text import Text

from ..render import FormattedBlock
from ..render.console import to_renderable
from .base import DisplaySink


class BufferSink(DisplaySink):
    """Sink that keeps a record of every write.

    Attributes:
        raw_updates: Arguments of every set_raw_text call, in order
        formatted: Blocks of the last set_formatted call, or None
        commit_count: Number of set_formatted calls
    """

    def __init__(self) -> None:
        self.raw_updates: list[str] = []
        self.formatted: list[FormattedBlock] | None = None
        self.commit_count = 0

    def set_raw_text(self, text: str) -> None:
        self.raw_updates.append(text)

    def set_formatted(self, blocks: list[FormattedBlock]) -> None:
        self.formatted = list(blocks)
        self.commit_count += 1

    @property
    def raw_text(self) -> str:
        """Latest raw text, or empty string before the first update."""
        return self.raw_updates[-1] if self.raw_updates else ""


class LiveConsoleSink(DisplaySink):
    """Sink that redraws a Rich Live region on every write."""

    def __init__(self, live: Live) -> None:
        self._live = live

    def set_raw_text(self, text: str) -> None:
        self._live.update(Text(text, overflow="fold"), refresh=True)

    def set_formatted(self, blocks: list[FormattedBlock]) -> None:
        self._live.update(to_renderable(blocks), refresh=True)
