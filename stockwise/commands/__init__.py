"""Voice and chat command interpretation.

Usage:
    from stockwise.commands import CommandInterpreter

    interpreter = CommandInterpreter(speak=print)
    interpreter.add_command(["hello", "hi"], lambda transcript: interpreter.speak("Hello!"))
    interpreter.process_command("hi there")
"""

from stockwise.commands.assistant import (
    AssistantHost,
    InventoryAssistant,
    InventoryStats,
    build_assistant,
    describe_stats,
    recognition_error_message,
)
from stockwise.commands.history import HISTORY_LIMIT, ConversationHistory
from stockwise.commands.interpreter import (
    MAX_SUGGESTIONS,
    CommandInterpreter,
    CommandOutcome,
    extract_search_term,
)
from stockwise.commands.navigation import NavigationCommand, build_navigation_commands

__all__ = [
    "AssistantHost",
    "CommandInterpreter",
    "CommandOutcome",
    "ConversationHistory",
    "HISTORY_LIMIT",
    "InventoryAssistant",
    "InventoryStats",
    "MAX_SUGGESTIONS",
    "NavigationCommand",
    "build_assistant",
    "build_navigation_commands",
    "describe_stats",
    "extract_search_term",
    "recognition_error_message",
]
