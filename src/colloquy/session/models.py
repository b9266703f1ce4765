"""Data models for the conversation.

Hides the internal representation of chat messages and session state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single entry of the conversation log. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex, description="Unique message identifier")
    role: Role = Field(description="Author of the message")
    text: str = Field(min_length=1, description="Message content, never empty")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation time, display only")

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message text must not be blank")
        return value

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role=Role.ASSISTANT, text=text)


@dataclass
class SessionState:
    """Mutable state of the one ongoing conversation.

    Owned by SessionController; consumers only ever see snapshots.
    """

    log: list[Message] = field(default_factory=list)
    pending: bool = False
    draft: str = ""

    def snapshot(self) -> tuple[Message, ...]:
        """Read-only copy of the log."""
        return tuple(self.log)
