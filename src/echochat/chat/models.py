"""Data models for the conversation.

Messages are immutable once created. The conversation lives in memory for
the current session only.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..render import FormattedBlock, format_text


class Role(str, Enum):
    """Who sent a message."""

    USER = "user"
    ASSISTANT = "assistant"


class RawMessage(BaseModel):
    """A chat message as sent or generated.

    Attributes:
        role: Sender role
        text: Message text, never mutated after creation
        timestamp: Creation time
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)

    def formatted(self) -> list[FormattedBlock]:
        """Format the message text (computed on demand, never cached)."""
        return format_text(self.text)


class Conversation(BaseModel):
    """Ordered messages of the current session."""

    messages: list[RawMessage] = Field(default_factory=list)

    def add(self, role: Role | str, text: str) -> RawMessage:
        """Append a new message.

        Args:
            role: Sender role
            text: Message text

        Returns:
            The created message
        """
        message = RawMessage(role=Role(role), text=text)
        self.messages.append(message)
        return message

    def last(self, role: Role | str | None = None) -> RawMessage | None:
        """Get the most recent message, optionally of a given role."""
        wanted = Role(role) if role is not None else None
        for message in reversed(self.messages):
            if wanted is None or message.role == wanted:
                return message
        return None

    def clear(self) -> None:
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)
