"""Conversation history entries for the command assistant."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

Role = Literal["user", "assistant"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ConversationEntry:
    role: Role
    text: str
    timestamp: datetime = field(default_factory=_now)
    confidence: float | None = None  # recognizer confidence, user entries only
