"""Stream simulator: progressive reveal of a reply, then a formatted commit.

Hidden design decisions:
- Reveal runs as one asyncio task per reply; ticks are strictly sequential
  and the only suspension points are the delays between ticks
- Chunks are sliced from the str itself, so a chunk never splits a code point
- The final commit formats the full original text, never the reveal buffer
- Cancellation is checked before every sink write, so no write follows a
  cancel request
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import SinkPhase, SinkWriteFailure
from ..render import FormattedBlock, format_text
from .base import DisplaySink
from .config import StreamConfig


class StreamState(str, Enum):
    """Lifecycle of a single reveal."""

    IDLE = "idle"
    STREAMING = "streaming"
    FINALIZING = "finalizing"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


TERMINAL_STATES = frozenset({StreamState.DONE, StreamState.CANCELLED, StreamState.FAILED})


@dataclass
class StreamCursor:
    """Transient position of a reveal within its text."""

    text: str
    chunk_size: int
    offset: int = 0
    buffer: str = ""

    @property
    def exhausted(self) -> bool:
        return self.offset >= len(self.text)

    def advance(self) -> str:
        """Reveal the next chunk and return the whole revealed prefix."""
        chunk = self.text[self.offset:self.offset + self.chunk_size]
        self.offset += len(chunk)
        self.buffer += chunk
        return self.buffer


class StreamSimulator:
    """Simulates a streaming reply by revealing text into a display sink.

    Example:
        simulator = StreamSimulator(StreamConfig(chunk_size=2, interval_ms=12))
        handler = simulator.stream(reply, sink)
        blocks = await handler  # or handler.cancel()
    """

    def __init__(
        self,
        config: StreamConfig | None = None,
        formatter: Callable[[str], list[FormattedBlock]] = format_text,
    ) -> None:
        """Initialize the simulator.

        Args:
            config: Reveal cadence (defaults to 2 scalars every 12 ms)
            formatter: Function producing the final blocks from the full text
        """
        self._config = config or StreamConfig()
        self._formatter = formatter
        self._debug_callback: Any | None = None

    @property
    def config(self) -> StreamConfig:
        return self._config

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for reveal tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Stream", message)

    def stream(self, text: str, sink: DisplaySink) -> "StreamSimulator.StreamHandler":
        """Start revealing text into sink.

        Must be called from a running event loop.

        Args:
            text: The complete reply
            sink: Display surface to write into

        Returns:
            StreamHandler that resolves to the committed blocks

        Raises:
            ValueError: If text is empty
        """
        if not text:
            raise ValueError("Cannot stream empty text")

        handler = self.StreamHandler(simulator=self, text=text, sink=sink)
        handler.background_task = asyncio.create_task(handler._execute_reveal_loop())
        self._debug("info", f"Streaming {len(text)} chars in chunks of {self._config.chunk_size}")
        return handler

    async def run(self, text: str, sink: DisplaySink) -> list[FormattedBlock]:
        """Stream text into sink and wait for the formatted commit."""
        return await self.stream(text, sink)

    class StreamHandler(asyncio.Future):
        """Handle for one reveal.

        Awaiting it returns the committed blocks, raises SinkWriteFailure if
        the sink failed, or raises asyncio.CancelledError if it was cancelled.
        """

        def __init__(
            self,
            simulator: "StreamSimulator",
            text: str,
            sink: DisplaySink,
            *args: Any,
            **kwargs: Any
        ):
            super().__init__(*args, **kwargs)
            self.simulator = simulator
            self.text = text
            self.sink = sink
            self.tick_count = 0
            self._reveal_state = StreamState.IDLE
            self._cursor: StreamCursor | None = StreamCursor(text, simulator.config.chunk_size)
            self._background_task: asyncio.Task | None = None

        @property
        def state(self) -> StreamState:
            return self._reveal_state

        @property
        def cursor(self) -> StreamCursor | None:
            """Reveal position, or None once the reveal is over."""
            return self._cursor

        async def _execute_reveal_loop(self) -> None:
            interval = self.simulator.config.interval_seconds
            self._reveal_state = StreamState.STREAMING
            try:
                while self._cursor is not None and not self._cursor.exhausted:
                    buffer = self._cursor.advance()
                    if not self._write("raw", self.sink.set_raw_text, buffer):
                        return
                    self.tick_count += 1
                    await asyncio.sleep(interval)

                if self._reveal_state is not StreamState.STREAMING:
                    return

                self._reveal_state = StreamState.FINALIZING
                blocks = self.simulator._formatter(self.text)
                if not self._write("formatted", self.sink.set_formatted, blocks):
                    return

                self._reveal_state = StreamState.DONE
                self._cursor = None
                self.simulator._debug("debug", f"Committed {len(blocks)} block(s) after {self.tick_count} tick(s)")
                if not self.done():
                    self.set_result(blocks)
            except asyncio.CancelledError:
                self.cancel()
                raise

        def _write(self, phase: SinkPhase, write: Callable[[Any], None], value: Any) -> bool:
            """Deliver one sink write.

            Returns:
                True if the reveal should continue
            """
            if self._reveal_state in TERMINAL_STATES:
                return False
            try:
                write(value)
            except Exception as e:
                self._cursor = None
                # A failed final commit still ends the reveal
                self._reveal_state = StreamState.DONE if phase == "formatted" else StreamState.FAILED
                failure = SinkWriteFailure(phase, self.tick_count, e)
                failure.__cause__ = e
                self.simulator._debug("error", str(failure))
                if not self.done():
                    self.set_exception(failure)
                return False
            return self._reveal_state not in TERMINAL_STATES

        def cancel(self, msg: Any | None = None) -> bool:
            """Cancel the reveal.

            Idempotent: cancelling a finished or already cancelled reveal
            does nothing and returns False.
            """
            if self._reveal_state in TERMINAL_STATES:
                return False

            self._reveal_state = StreamState.CANCELLED
            self._cursor = None
            task = self._background_task
            if task is not None and not task.done() and task is not asyncio.current_task():
                task.cancel()
            self.simulator._debug("info", f"Cancelled after {self.tick_count} tick(s)")
            return super().cancel(msg)

        @property
        def background_task(self) -> asyncio.Task:
            """Get the background task."""
            if not self._background_task:
                raise RuntimeError("No background task running")
            return self._background_task

        @background_task.setter
        def background_task(self, task: asyncio.Task) -> None:
            """Set the background task."""
            if self._background_task is not None:
                raise RuntimeError("Background task already set")
            self._background_task = task
