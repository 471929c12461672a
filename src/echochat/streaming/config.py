"""Stream reveal configuration."""

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CHUNK_SIZE = 2  # Unicode scalars revealed per tick
DEFAULT_INTERVAL_MS = 12  # Delay between ticks


class StreamConfig(BaseModel):
    """Cadence of the simulated stream.

    Attributes:
        chunk_size: Unicode scalars revealed per tick
        interval_ms: Delay between ticks in milliseconds
    """

    model_config = ConfigDict(frozen=True)

    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1)
    interval_ms: int = Field(default=DEFAULT_INTERVAL_MS, ge=0)

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000

    @classmethod
    def from_env(cls) -> "StreamConfig":
        """Create config from environment variables.

        Environment variables:
            ECHOCHAT_CHUNK_SIZE: Scalars per tick (default: 2)
            ECHOCHAT_INTERVAL_MS: Delay between ticks (default: 12)
        """
        return cls(
            chunk_size=int(os.getenv("ECHOCHAT_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))),
            interval_ms=int(os.getenv("ECHOCHAT_INTERVAL_MS", str(DEFAULT_INTERVAL_MS))),
        )
