"""Tests for the stream simulator."""
import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from echochat.errors import SinkWriteFailure
from echochat.render import format_text
from echochat.streaming import BufferSink, StreamConfig, StreamSimulator, StreamState


class CancellingSink(BufferSink):
    """Sink that cancels its own reveal on a given raw write."""

    def __init__(self, cancel_on: int):
        super().__init__()
        self.cancel_on = cancel_on
        self.handler = None

    def set_raw_text(self, text: str) -> None:
        super().set_raw_text(text)
        if len(self.raw_updates) == self.cancel_on:
            self.handler.cancel()


class FailingSink(BufferSink):
    """Sink that raises on a given raw write or on the formatted commit."""

    def __init__(self, fail_on_raw: int | None = None, fail_on_commit: bool = False):
        super().__init__()
        self.fail_on_raw = fail_on_raw
        self.fail_on_commit = fail_on_commit

    def set_raw_text(self, text: str) -> None:
        if self.fail_on_raw is not None and len(self.raw_updates) + 1 == self.fail_on_raw:
            raise RuntimeError("display detached")
        super().set_raw_text(text)

    def set_formatted(self, blocks) -> None:
        if self.fail_on_commit:
            raise RuntimeError("render failed")
        super().set_formatted(blocks)


class SignallingSink(BufferSink):
    """Sink that sets an event once a number of raw writes has landed."""

    def __init__(self, signal_on: int):
        super().__init__()
        self.signal_on = signal_on
        self.reached = asyncio.Event()

    def set_raw_text(self, text: str) -> None:
        super().set_raw_text(text)
        if len(self.raw_updates) == self.signal_on:
            self.reached.set()


class TestStreamConfig:
    """Tests for StreamConfig."""

    def test_defaults(self):
        """Test default cadence of two scalars every 12 ms."""
        config = StreamConfig()
        assert config.chunk_size == 2
        assert config.interval_ms == 12
        assert config.interval_seconds == pytest.approx(0.012)

    def test_rejects_zero_chunk_size(self):
        """Test that chunk_size must be at least one."""
        with pytest.raises(ValidationError):
            StreamConfig(chunk_size=0)

    def test_rejects_negative_interval(self):
        """Test that interval_ms cannot be negative."""
        with pytest.raises(ValidationError):
            StreamConfig(interval_ms=-1)

    def test_from_env(self, monkeypatch):
        """Test loading cadence from environment variables."""
        monkeypatch.setenv("ECHOCHAT_CHUNK_SIZE", "5")
        monkeypatch.setenv("ECHOCHAT_INTERVAL_MS", "0")

        config = StreamConfig.from_env()

        assert config.chunk_size == 5
        assert config.interval_ms == 0

    def test_from_env_defaults(self, monkeypatch):
        """Test that missing variables fall back to defaults."""
        monkeypatch.delenv("ECHOCHAT_CHUNK_SIZE", raising=False)
        monkeypatch.delenv("ECHOCHAT_INTERVAL_MS", raising=False)
        assert StreamConfig.from_env() == StreamConfig()


class TestReveal:
    """Tests for the progressive reveal and final commit."""

    @pytest.mark.asyncio
    async def test_reveals_prefixes_then_commits(self, fast_config, sink, sample_reply):
        """Test that raw updates grow by chunk and the commit is formatted."""
        simulator = StreamSimulator(fast_config)

        blocks = await simulator.run(sample_reply, sink)

        expected_ticks = -(-len(sample_reply) // 2)
        assert len(sink.raw_updates) == expected_ticks
        for previous, current in zip(sink.raw_updates, sink.raw_updates[1:]):
            assert current.startswith(previous)
            assert len(current) - len(previous) <= 2
        assert sink.raw_text == sample_reply
        assert sink.formatted == format_text(sample_reply)
        assert blocks == sink.formatted
        assert sink.commit_count == 1

    @pytest.mark.asyncio
    async def test_state_transitions(self, fast_config):
        """Test idle, streaming, and done states."""
        simulator = StreamSimulator(fast_config)
        seen = []

        class StateSink(BufferSink):
            def set_raw_text(self, text):
                super().set_raw_text(text)
                seen.append(handler.state)

            def set_formatted(self, blocks):
                super().set_formatted(blocks)
                seen.append(handler.state)

        handler = simulator.stream("abcd", StateSink())
        assert handler.state == StreamState.IDLE

        await handler

        assert seen == [StreamState.STREAMING, StreamState.STREAMING, StreamState.FINALIZING]
        assert handler.state == StreamState.DONE
        assert handler.cursor is None
        assert handler.tick_count == 2

    @pytest.mark.asyncio
    async def test_chunks_never_split_code_points(self, sink):
        """Test that emoji outside the BMP are revealed whole."""
        text = "😀😁😂🤖"
        simulator = StreamSimulator(StreamConfig(chunk_size=1, interval_ms=0))

        await simulator.run(text, sink)

        assert sink.raw_updates == ["😀", "😀😁", "😀😁😂", "😀😁😂🤖"]

    @pytest.mark.asyncio
    async def test_chunk_larger_than_text(self, sink):
        """Test a single tick when the chunk covers the whole text."""
        simulator = StreamSimulator(StreamConfig(chunk_size=50, interval_ms=0))

        await simulator.run("short", sink)

        assert sink.raw_updates == ["short"]
        assert sink.commit_count == 1

    @pytest.mark.asyncio
    async def test_formatter_receives_full_text(self, fast_config, sink):
        """Test that the commit formats the original text."""
        received = []

        def formatter(text):
            received.append(text)
            return format_text(text)

        simulator = StreamSimulator(fast_config, formatter=formatter)
        await simulator.run("hello `world`", sink)

        assert received == ["hello `world`"]

    @pytest.mark.asyncio
    async def test_unterminated_fence_mid_stream_stays_raw(self, fast_config, sink):
        """Test that partial fences only appear as raw text before the commit."""
        text = "Here:\n```py\nx = 1\n```\n"
        simulator = StreamSimulator(fast_config)

        await simulator.run(text, sink)

        assert any("```py" in update and update.count("```") == 1 for update in sink.raw_updates)
        assert sink.formatted[-1].kind == "code_block"

    @pytest.mark.asyncio
    async def test_empty_text_rejected(self, fast_config, sink):
        """Test that streaming empty text raises."""
        simulator = StreamSimulator(fast_config)

        with pytest.raises(ValueError):
            simulator.stream("", sink)
        assert sink.raw_updates == []

    @pytest.mark.asyncio
    async def test_background_task_set_once(self, fast_config, sink):
        """Test that a handler accepts a single background task."""
        simulator = StreamSimulator(fast_config)
        handler = simulator.stream("abc", sink)

        with pytest.raises(RuntimeError):
            handler.background_task = asyncio.create_task(asyncio.sleep(0))

        await handler

    @pytest.mark.asyncio
    async def test_debug_callback(self, fast_config, sink):
        """Test that reveal progress is reported to the debug callback."""
        messages = []
        simulator = StreamSimulator(fast_config)
        simulator.set_debug_callback(lambda level, component, msg: messages.append((level, component, msg)))

        await simulator.run("abcdef", sink)

        assert messages
        assert all(component == "Stream" for _, component, _ in messages)
        assert any("3 tick(s)" in msg for _, _, msg in messages)

    @settings(max_examples=40, deadline=None)
    @given(
        text=st.text(alphabet="ab`\n<é😀", min_size=1, max_size=40),
        chunk_size=st.integers(min_value=1, max_value=7),
    )
    def test_raw_updates_are_growing_prefixes(self, text: str, chunk_size: int):
        """Property test: every raw update is a prefix of the text and of the next update."""
        sink = BufferSink()
        simulator = StreamSimulator(StreamConfig(chunk_size=chunk_size, interval_ms=0))

        asyncio.run(simulator.run(text, sink))

        assert len(sink.raw_updates) == -(-len(text) // chunk_size)
        for previous, current in zip(sink.raw_updates, sink.raw_updates[1:]):
            assert current.startswith(previous)
            assert len(current) > len(previous)
        assert all(text.startswith(update) for update in sink.raw_updates)
        assert sink.raw_text == text
        assert sink.formatted == format_text(text)


class TestCancellation:
    """Tests for cancelling a reveal."""

    @pytest.mark.asyncio
    async def test_cancel_from_sink_stops_further_writes(self):
        """Test cancelling during the second of ten ticks."""
        sink = CancellingSink(cancel_on=2)
        simulator = StreamSimulator(StreamConfig(chunk_size=2, interval_ms=0))

        handler = simulator.stream("a" * 20, sink)
        sink.handler = handler

        with pytest.raises(asyncio.CancelledError):
            await handler

        await asyncio.sleep(0.01)
        assert sink.raw_updates == ["aa", "aaaa"]
        assert sink.commit_count == 0
        assert handler.state == StreamState.CANCELLED
        assert handler.cursor is None

    @pytest.mark.asyncio
    async def test_external_cancel(self):
        """Test cancelling from another task while the reveal sleeps."""
        sink = SignallingSink(signal_on=2)
        simulator = StreamSimulator(StreamConfig(chunk_size=2, interval_ms=10))

        handler = simulator.stream("b" * 20, sink)
        await sink.reached.wait()

        assert handler.cancel() is True

        with pytest.raises(asyncio.CancelledError):
            await handler
        with pytest.raises(asyncio.CancelledError):
            await handler.background_task

        assert len(sink.raw_updates) == 2
        assert sink.formatted is None
        assert handler.state == StreamState.CANCELLED

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self, fast_config, sink):
        """Test that a second cancel does nothing."""
        simulator = StreamSimulator(fast_config)
        handler = simulator.stream("some text", sink)

        assert handler.cancel() is True
        assert handler.cancel() is False
        assert handler.state == StreamState.CANCELLED

        with pytest.raises(asyncio.CancelledError):
            await handler

    @pytest.mark.asyncio
    async def test_cancel_before_first_tick(self, fast_config, sink):
        """Test that cancelling immediately produces no writes."""
        simulator = StreamSimulator(fast_config)
        handler = simulator.stream("some text", sink)
        handler.cancel()

        with pytest.raises(asyncio.CancelledError):
            await handler.background_task

        assert sink.raw_updates == []
        assert sink.commit_count == 0

    @pytest.mark.asyncio
    async def test_cancel_after_done_is_noop(self, fast_config, sink):
        """Test that a finished reveal cannot be cancelled."""
        simulator = StreamSimulator(fast_config)
        handler = simulator.stream("done soon", sink)
        blocks = await handler

        assert handler.cancel() is False
        assert handler.state == StreamState.DONE
        assert handler.result() == blocks


class TestSinkFailures:
    """Tests for sink write failures."""

    @pytest.mark.asyncio
    async def test_raw_write_failure(self, fast_config):
        """Test that a failing raw write aborts the reveal."""
        sink = FailingSink(fail_on_raw=3)
        simulator = StreamSimulator(fast_config)
        handler = simulator.stream("x" * 20, sink)

        with pytest.raises(SinkWriteFailure) as exc_info:
            await handler

        failure = exc_info.value
        assert failure.phase == "raw"
        assert failure.tick == 2
        assert isinstance(failure.__cause__, RuntimeError)
        assert handler.state == StreamState.FAILED
        assert len(sink.raw_updates) == 2
        assert sink.commit_count == 0

    @pytest.mark.asyncio
    async def test_formatted_write_failure(self, fast_config):
        """Test that a failing commit is reported with the formatted phase."""
        sink = FailingSink(fail_on_commit=True)
        simulator = StreamSimulator(fast_config)
        handler = simulator.stream("abcdef", sink)

        with pytest.raises(SinkWriteFailure) as exc_info:
            await handler

        assert exc_info.value.phase == "formatted"
        assert exc_info.value.tick == 3
        assert "render failed" in str(exc_info.value)
        assert handler.state == StreamState.DONE
        assert sink.raw_text == "abcdef"

    @pytest.mark.asyncio
    async def test_failure_reported_to_debug_callback(self, fast_config):
        """Test that failures are logged at error level."""
        levels = []
        simulator = StreamSimulator(fast_config)
        simulator.set_debug_callback(lambda level, component, msg: levels.append(level))

        with pytest.raises(SinkWriteFailure):
            await simulator.run("abc", FailingSink(fail_on_raw=1))

        assert "error" in levels

    @pytest.mark.asyncio
    async def test_cancel_after_failure_is_noop(self, fast_config):
        """Test that a failed reveal cannot be cancelled."""
        simulator = StreamSimulator(fast_config)
        handler = simulator.stream("abc", FailingSink(fail_on_raw=1))

        with pytest.raises(SinkWriteFailure):
            await handler

        assert handler.cancel() is False
        assert handler.state == StreamState.FAILED
