"""Exceptions raised by echochat."""

from typing import Literal

SinkPhase = Literal["raw", "formatted"]


class EchochatError(Exception):
    """Base class for echochat errors."""


class SinkWriteFailure(EchochatError):
    """A display sink raised while being written to.

    Attributes:
        phase: "raw" if a streaming update failed, "formatted" if the final
            commit failed (the formatted result did not land)
        tick: Number of raw updates delivered before the failure
    """

    def __init__(self, phase: SinkPhase, tick: int, cause: BaseException) -> None:
        self.phase = phase
        self.tick = tick
        self.cause = cause
        super().__init__(f"Sink write failed during {phase} update after {tick} tick(s): {cause}")
