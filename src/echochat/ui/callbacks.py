"""Display sink adapter for the TUI.

Hides the details of how streamed replies reach the chat widgets. The
stream runs on the app's own event loop, so writes go straight to the
widgets without thread hand-off.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from ..render import FormattedBlock
from ..streaming import DisplaySink

if TYPE_CHECKING:
    from .widgets import MessageBubble


class BubbleSink(DisplaySink):
    """Writes a streamed reply into a MessageBubble."""

    def __init__(
        self,
        bubble: "MessageBubble",
        on_update: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the sink.

        Args:
            bubble: Bubble to render into
            on_update: Called after every write (e.g. to keep the history scrolled)
        """
        self.bubble = bubble
        self._on_update = on_update

    def _updated(self) -> None:
        if self._on_update is not None:
            self._on_update()

    def set_raw_text(self, text: str) -> None:
        self.bubble.show_raw(text)
        self._updated()

    def set_formatted(self, blocks: list[FormattedBlock]) -> None:
        self.bubble.show_formatted(blocks)
        self._updated()
