"""Conversation history shared between the capture layer and the interpreter."""

from __future__ import annotations

import threading

from stockwise.domain.conversation import ConversationEntry, Role

HISTORY_LIMIT = 10


class ConversationHistory:
    """Append-only log of user and assistant turns.

    Everything is kept internally; reads only ever surface the most recent
    ``HISTORY_LIMIT`` entries. Appends, reads and clears are serialized so
    a speech callback thread and a request thread can share one history.
    """

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self.limit = limit
        self._entries: list[ConversationEntry] = []
        self._lock = threading.Lock()

    def append(self, role: Role, text: str, confidence: float | None = None) -> ConversationEntry:
        entry = ConversationEntry(role=role, text=text, confidence=confidence)
        with self._lock:
            self._entries.append(entry)
        return entry

    def recent(self, limit: int | None = None) -> list[ConversationEntry]:
        """Most recent entries, oldest first."""
        count = self.limit if limit is None else min(limit, self.limit)
        if count <= 0:
            return []
        with self._lock:
            return self._entries[-count:]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
