"""Trigger-phrase command interpreter for voice and chat input.

Matching is coarse: a trigger fires when the normalized
transcript equals it or contains it as a plain substring (no word
boundaries), and the first trigger in registration order wins. When nothing
fires, a ``search for <term>`` pattern is tried, then word-overlap
suggestions are offered.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Literal

from stockwise.commands.history import ConversationHistory
from stockwise.commands.navigation import normalize_phrase
from stockwise.domain.conversation import ConversationEntry
from stockwise.runtime.logging import get_logger

logger = get_logger(__name__)

CommandAction = Callable[[str], None]
SpeechSink = Callable[[str], None]
SearchDispatcher = Callable[[str], None]

SEARCH_PATTERN = re.compile(r"search (?:for )?(.+)")
MAX_SUGGESTIONS = 3
UNRECOGNIZED_REPLY = 'I didn\'t understand that command. Say "help" to see what I can do.'

CommandStatus = Literal["executed", "searched", "suggested", "unrecognized"]


@dataclass(frozen=True)
class CommandOutcome:
    """What happened to one utterance."""

    status: CommandStatus
    transcript: str
    trigger: str | None = None
    search_term: str | None = None
    suggestions: tuple[str, ...] = ()
    reply: str | None = None


def extract_search_term(transcript: str) -> str | None:
    """Return ``<term>`` from ``search [for] <term>``, or None."""
    match = SEARCH_PATTERN.search(transcript)
    if match is None:
        return None
    term = match.group(1).strip()
    return term or None


class CommandInterpreter:
    """Maps an utterance to at most one registered action."""

    def __init__(
        self,
        speak: SpeechSink | None = None,
        dispatch_search: SearchDispatcher | None = None,
        history: ConversationHistory | None = None,
    ) -> None:
        self._speech_sink = speak
        self._dispatch_search = dispatch_search
        self.history = history or ConversationHistory()
        # dict keeps insertion order; re-adding a key keeps its slot.
        self._commands: dict[str, CommandAction] = {}
        self._state_lock = threading.Lock()
        self._last_command = ""
        self._is_listening = False

    # --- Registration ---

    def add_command(self, triggers: str | Iterable[str], action: CommandAction) -> None:
        """Bind one or more trigger phrases to ``action``.

        Registering a phrase that already exists replaces its action.
        """
        phrases = [triggers] if isinstance(triggers, str) else list(triggers)
        for phrase in phrases:
            key = normalize_phrase(phrase)
            if not key:
                continue
            if key in self._commands:
                logger.debug("Replacing action for trigger '%s'", key)
            self._commands[key] = action

    @property
    def triggers(self) -> list[str]:
        return list(self._commands)

    # --- State ---

    @property
    def last_command(self) -> str:
        with self._state_lock:
            return self._last_command

    @property
    def is_listening(self) -> bool:
        with self._state_lock:
            return self._is_listening

    def start_listening(self) -> bool:
        """Mark capture as active; False when it already was."""
        with self._state_lock:
            if self._is_listening:
                return False
            self._is_listening = True
        logger.debug("Listening started")
        return True

    def stop_listening(self) -> None:
        with self._state_lock:
            self._is_listening = False
        logger.debug("Listening stopped")

    @property
    def conversation_history(self) -> list[ConversationEntry]:
        return self.history.recent()

    def clear_conversation_history(self) -> None:
        self.history.clear()

    # --- Output ---

    def speak(self, text: str) -> None:
        """Send ``text`` to the speech sink and record it as an assistant turn."""
        if self._speech_sink is not None:
            try:
                self._speech_sink(text)
            except Exception:
                logger.exception("Speech output failed")
        self.history.append("assistant", text)

    # --- Matching ---

    def hear(self, transcript: str, confidence: float | None = None) -> CommandOutcome:
        """Record a user utterance (with recognizer confidence) and process it."""
        text = normalize_phrase(transcript)
        if confidence is not None:
            logger.info("Voice input: %s (confidence: %.2f)", text, confidence)
        self.history.append("user", text, confidence=confidence)
        return self.process_command(text)

    def process_command(self, transcript: str) -> CommandOutcome:
        """Run the first matching action, else fall back to search or suggestions."""
        text = normalize_phrase(transcript)
        with self._state_lock:
            self._last_command = text

        for trigger, action in list(self._commands.items()):
            if text != trigger and trigger not in text:
                continue
            try:
                action(text)
            except Exception:
                logger.exception("Command action for trigger '%s' failed", trigger)
                continue
            self.history.append("assistant", f"Executed: {trigger}")
            return CommandOutcome(status="executed", transcript=text, trigger=trigger)

        search_term = extract_search_term(text)
        if search_term is not None:
            reply = f"Searching for {search_term}"
            self.speak(reply)
            self.trigger_search(search_term)
            return CommandOutcome(status="searched", transcript=text, search_term=search_term, reply=reply)

        suggestions = self.get_suggestions(text)
        if suggestions:
            reply = f'I didn\'t understand "{text}". Did you mean: {", or ".join(suggestions)}?'
            self.speak(reply)
            return CommandOutcome(
                status="suggested",
                transcript=text,
                suggestions=tuple(suggestions),
                reply=reply,
            )

        self.speak(UNRECOGNIZED_REPLY)
        return CommandOutcome(status="unrecognized", transcript=text, reply=UNRECOGNIZED_REPLY)

    def get_suggestions(self, transcript: str) -> list[str]:
        """Triggers sharing at least one word with ``transcript``, in table order."""
        words = set(normalize_phrase(transcript).split())
        suggestions: list[str] = []
        for trigger in self._commands:
            if words.intersection(trigger.split()):
                suggestions.append(trigger)
                if len(suggestions) == MAX_SUGGESTIONS:
                    break
        return suggestions

    def trigger_search(self, term: str) -> None:
        if self._dispatch_search is None:
            logger.warning("No search dispatcher configured; dropping search for '%s'", term)
            return
        try:
            self._dispatch_search(term)
        except Exception:
            logger.exception("Search dispatch failed for '%s'", term)
