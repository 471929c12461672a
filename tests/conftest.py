"""Pytest configuration and shared fixtures."""
import pytest

from echochat.preferences import create_preference_store
from echochat.streaming import BufferSink, StreamConfig


@pytest.fixture
def fast_config():
    """Stream config that reveals two characters per tick with no delay."""
    return StreamConfig(chunk_size=2, interval_ms=0)


@pytest.fixture
def sink():
    """Return a sink that records every write."""
    return BufferSink()


@pytest.fixture
def memory_store():
    """Return an empty in-memory preference store."""
    return create_preference_store("memory")


@pytest.fixture
def sample_reply():
    """Return a reply with prose, inline code, and a fenced block."""
    return (
        "Use `greet()` like this:\n"
        "\n"
        "```python\n"
        "def greet(name):\n"
        "    return f\"<b>{name}</b>\"\n"
        "```\n"
        "\n"
        "That's all & more."
    )
