"""The inventory assistant's built-in command vocabulary.

``build_assistant`` wires a CommandInterpreter to a host application: the
host owns navigation, speech output, search and inventory stats, the
interpreter owns matching and conversation state.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

from stockwise.commands.history import ConversationHistory
from stockwise.commands.interpreter import CommandAction, CommandInterpreter, extract_search_term
from stockwise.commands.navigation import NavigationCommand
from stockwise.domain.money import ZERO
from stockwise.runtime.logging import get_logger

logger = get_logger(__name__)

GREETINGS = (
    "Hello! How can I help you with your inventory?",
    "Hi there! What would you like me to do?",
    "Hey! I'm ready to assist you.",
    "Hello! Ask me anything about your inventory system.",
)

HELP_MESSAGE = """I can help you navigate and manage your inventory. Here are some commands you can try:

Navigation: "go to dashboard", "show items", "add item", "analytics", "financial reports"

Data: "total items", "inventory value", "inventory status"

Search: "search for laptops"

System: "refresh page", "go back"

Just speak naturally and I'll understand!"""

VOICE_CHECK_MESSAGE = (
    "Voice assistant is working correctly! I can understand commands like "
    '"go to dashboard", "total items", or "search for products". Try talking to me!'
)

STATS_UNAVAILABLE = "Unable to retrieve inventory statistics at the moment."

_RECOGNITION_ERRORS = {
    "no-speech": "I didn't hear anything. Please try again.",
    "audio-capture": "Microphone access denied. Please check your permissions.",
    "not-allowed": "Voice recognition not allowed. Please enable microphone permissions.",
}


def recognition_error_message(code: str) -> str:
    """Spoken message for a speech recognizer error code."""
    return _RECOGNITION_ERRORS.get(code, "Voice recognition error occurred. Please try again.")


@dataclass(frozen=True)
class InventoryStats:
    total_items: int = 0
    total_value: Decimal = ZERO
    total_quantity: int = 0
    freshness_status_count: Mapping[str, int] = field(default_factory=dict)


class AssistantHost(Protocol):
    """Side effects the assistant asks the surrounding application to perform."""

    def navigate(self, route: str) -> None: ...

    def reload(self) -> None: ...

    def go_back(self) -> None: ...

    def dispatch_search(self, term: str) -> None: ...

    def speak(self, text: str) -> None: ...

    def inventory_stats(self) -> InventoryStats | None: ...


def describe_stats(stats: InventoryStats | None, kind: str = "overview") -> str:
    """Sentence answering a data command for the given stats snapshot."""
    if stats is None:
        return STATS_UNAVAILABLE
    if kind == "items":
        return f"You have {stats.total_items} total items in your inventory."
    if kind == "value":
        return f"Your total inventory value is ${stats.total_value:.2f}."
    fresh = stats.freshness_status_count.get("Fresh", 0)
    return f"You have {stats.total_items} items worth ${stats.total_value:.2f}. {fresh} items are fresh."


class InventoryAssistant:
    """Registers the default command set against a host."""

    def __init__(
        self,
        host: AssistantHost,
        navigation: Iterable[NavigationCommand],
        history: ConversationHistory | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.host = host
        self.rng = rng or random.Random()
        self.interpreter = CommandInterpreter(
            speak=host.speak,
            dispatch_search=host.dispatch_search,
            history=history,
        )
        self._register_navigation(navigation)
        self._register_builtin()

    def _register_navigation(self, navigation: Iterable[NavigationCommand]) -> None:
        for command in navigation:
            self.interpreter.add_command(command.triggers, self._navigator(command))

    def _navigator(self, command: NavigationCommand) -> CommandAction:
        def navigate(transcript: str) -> None:
            self.host.navigate(command.route)
            self.interpreter.speak(command.reply)

        navigate.__name__ = f"navigate_{command.route.strip('/') or 'home'}"
        return navigate

    def _register_builtin(self) -> None:
        add = self.interpreter.add_command

        add(["refresh", "refresh page", "reload"], self._refresh)
        add(["back", "go back"], self._back)

        add(["total items", "how many items", "item count"], lambda _t: self.speak_inventory_stats("items"))
        add(["total value", "inventory value", "how much worth"], lambda _t: self.speak_inventory_stats("value"))
        add(["inventory status", "status", "overview"], lambda _t: self.speak_inventory_stats("overview"))

        add(["search"], self._search)
        add(["help", "what can you do", "commands", "show help"], lambda _t: self.show_help())
        add(["stop", "stop listening", "quit"], self._stop)

        add(["hello", "hi", "hey"], lambda _t: self.interpreter.speak(self.rng.choice(GREETINGS)))
        add(["thank you", "thanks"], lambda _t: self.interpreter.speak("You're welcome! Happy to help."))
        add(["goodbye", "bye"], lambda _t: self.interpreter.speak("Goodbye! Talk to you later."))

    def _refresh(self, transcript: str) -> None:
        self.host.reload()
        self.interpreter.speak("Refreshing page")

    def _back(self, transcript: str) -> None:
        self.host.go_back()
        self.interpreter.speak("Going back")

    def _search(self, transcript: str) -> None:
        term = extract_search_term(transcript)
        if term is None:
            return
        self.interpreter.speak(f"Searching for {term}")
        self.interpreter.trigger_search(term)

    def _stop(self, transcript: str) -> None:
        self.interpreter.stop_listening()
        self.interpreter.speak("Voice assistant stopped")

    def speak_inventory_stats(self, kind: str = "overview") -> None:
        try:
            stats = self.host.inventory_stats()
        except Exception:
            logger.exception("Inventory stats provider failed")
            self.interpreter.speak("Error accessing inventory data.")
            return
        self.interpreter.speak(describe_stats(stats, kind))

    def show_help(self) -> None:
        self.interpreter.speak(HELP_MESSAGE)

    def test_voice(self) -> None:
        self.interpreter.speak(VOICE_CHECK_MESSAGE)

    def report_recognition_error(self, code: str) -> None:
        logger.error("Voice recognition error: %s", code)
        self.interpreter.stop_listening()
        self.interpreter.speak(recognition_error_message(code))


def build_assistant(
    host: AssistantHost,
    navigation: Iterable[NavigationCommand] = (),
    history: ConversationHistory | None = None,
    rng: random.Random | None = None,
) -> InventoryAssistant:
    """Create an assistant bound to ``host`` with the given navigation vocabulary."""
    return InventoryAssistant(host, navigation, history=history, rng=rng)
