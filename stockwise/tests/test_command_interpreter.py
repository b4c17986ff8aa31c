"""Tests for trigger matching, fallbacks and state in CommandInterpreter."""

from __future__ import annotations

import pytest

from stockwise.commands.interpreter import UNRECOGNIZED_REPLY, CommandInterpreter, extract_search_term


def _recorder(calls: list[str], label: str):
    def action(transcript: str) -> None:
        calls.append(f"{label}:{transcript}")

    return action


@pytest.mark.parametrize("phrase", ["dashboard", "go to dashboard", "show dashboard"])
def test_exact_trigger_invokes_bound_action_once(phrase: str) -> None:
    calls: list[str] = []
    interpreter = CommandInterpreter()
    interpreter.add_command(["dashboard", "go to dashboard", "show dashboard"], _recorder(calls, "nav"))

    outcome = interpreter.process_command(phrase)

    assert calls == [f"nav:{phrase}"]
    assert outcome.status == "executed"


def test_substring_match_uses_first_registered_trigger() -> None:
    calls: list[str] = []
    interpreter = CommandInterpreter()
    interpreter.add_command("show", _recorder(calls, "show"))
    interpreter.add_command("show items", _recorder(calls, "items"))

    outcome = interpreter.process_command("please show items now")

    assert calls == ["show:please show items now"]
    assert outcome.trigger == "show"


def test_substring_match_ignores_word_boundaries() -> None:
    calls: list[str] = []
    interpreter = CommandInterpreter()
    interpreter.add_command("hi", _recorder(calls, "greet"))

    interpreter.process_command("this one")

    assert calls == ["greet:this one"]


def test_transcript_is_normalized_before_matching() -> None:
    calls: list[str] = []
    interpreter = CommandInterpreter()
    interpreter.add_command("Show Items", _recorder(calls, "items"))

    interpreter.process_command("  SHOW ITEMS  ")

    assert calls == ["items:show items"]
    assert interpreter.last_command == "show items"
    assert interpreter.triggers == ["show items"]


def test_re_registering_trigger_replaces_action_and_keeps_position() -> None:
    calls: list[str] = []
    interpreter = CommandInterpreter()
    interpreter.add_command("hello", _recorder(calls, "first"))
    interpreter.add_command("bye", _recorder(calls, "bye"))
    interpreter.add_command("hello", _recorder(calls, "second"))

    interpreter.process_command("hello")

    assert calls == ["second:hello"]
    assert interpreter.triggers == ["hello", "bye"]


def test_failing_action_does_not_stop_later_candidates() -> None:
    calls: list[str] = []

    def broken(transcript: str) -> None:
        raise RuntimeError("handler blew up")

    interpreter = CommandInterpreter()
    interpreter.add_command("status", broken)
    interpreter.add_command("inventory status", _recorder(calls, "overview"))

    outcome = interpreter.process_command("inventory status")

    assert outcome.status == "executed"
    assert outcome.trigger == "inventory status"
    assert calls == ["overview:inventory status"]


def test_only_one_action_runs_per_utterance() -> None:
    calls: list[str] = []
    interpreter = CommandInterpreter()
    interpreter.add_command("items", _recorder(calls, "items"))
    interpreter.add_command("total items", _recorder(calls, "total"))

    interpreter.process_command("total items")

    assert calls == ["items:total items"]


def test_executed_command_is_recorded_in_history() -> None:
    interpreter = CommandInterpreter()
    interpreter.add_command("refresh", lambda transcript: None)

    interpreter.process_command("refresh")

    entries = interpreter.conversation_history
    assert [(e.role, e.text) for e in entries] == [("assistant", "Executed: refresh")]


def test_search_fallback_dispatches_term() -> None:
    spoken: list[str] = []
    searches: list[str] = []
    interpreter = CommandInterpreter(speak=spoken.append, dispatch_search=searches.append)

    outcome = interpreter.process_command("search for laptops")

    assert outcome.status == "searched"
    assert outcome.search_term == "laptops"
    assert searches == ["laptops"]
    assert spoken == ["Searching for laptops"]


@pytest.mark.parametrize(
    ("transcript", "term"),
    [
        ("search for red apples", "red apples"),
        ("search widgets", "widgets"),
        ("could you search for milk", "milk"),
        ("research", None),
        ("search", None),
    ],
)
def test_extract_search_term(transcript: str, term: str | None) -> None:
    assert extract_search_term(transcript) == term


def test_unmatched_command_offers_up_to_three_suggestions() -> None:
    spoken: list[str] = []
    interpreter = CommandInterpreter(speak=spoken.append)
    for trigger in ["show items", "show dashboard", "go home", "show news", "show help"]:
        interpreter.add_command(trigger, lambda transcript: None)

    outcome = interpreter.process_command("show me something")

    assert outcome.status == "suggested"
    assert outcome.suggestions == ("show items", "show dashboard", "show news")
    assert spoken == [
        'I didn\'t understand "show me something". Did you mean: show items, or show dashboard, or show news?'
    ]


def test_get_suggestions_requires_whole_word_overlap() -> None:
    interpreter = CommandInterpreter()
    interpreter.add_command("add item", lambda transcript: None)
    interpreter.add_command("news", lambda transcript: None)

    assert interpreter.get_suggestions("item please") == ["add item"]
    assert interpreter.get_suggestions("newsletter") == []


def test_unrecognized_command_gets_generic_reply() -> None:
    spoken: list[str] = []
    interpreter = CommandInterpreter(speak=spoken.append)
    interpreter.add_command("dashboard", lambda transcript: None)

    outcome = interpreter.process_command("xyzzy")

    assert outcome.status == "unrecognized"
    assert spoken == [UNRECOGNIZED_REPLY]
    assert interpreter.conversation_history[-1].text == UNRECOGNIZED_REPLY


def test_speech_sink_failure_is_contained() -> None:
    def broken_speaker(text: str) -> None:
        raise OSError("audio device gone")

    interpreter = CommandInterpreter(speak=broken_speaker)

    outcome = interpreter.process_command("nothing matches this")

    assert outcome.status == "unrecognized"
    assert interpreter.conversation_history[-1].role == "assistant"


def test_hear_records_user_entry_with_confidence() -> None:
    interpreter = CommandInterpreter()
    interpreter.add_command("thanks", lambda transcript: None)

    interpreter.hear("Thanks", confidence=0.93)

    user_entry, assistant_entry = interpreter.conversation_history
    assert user_entry.role == "user"
    assert user_entry.text == "thanks"
    assert user_entry.confidence == pytest.approx(0.93)
    assert assistant_entry.text == "Executed: thanks"


def test_history_reads_are_capped_and_chronological() -> None:
    interpreter = CommandInterpreter()
    interpreter.add_command("ping", lambda transcript: None)

    for i in range(15):
        interpreter.hear(f"ping {i}")

    entries = interpreter.conversation_history
    assert len(entries) == 10
    assert len(interpreter.history) == 30
    expected: list[str] = []
    for i in range(10, 15):
        expected.extend([f"ping {i}", "Executed: ping"])
    assert [e.text for e in entries] == expected
    timestamps = [e.timestamp for e in entries]
    assert timestamps == sorted(timestamps)


def test_clear_conversation_history() -> None:
    interpreter = CommandInterpreter()
    interpreter.hear("anything")

    interpreter.clear_conversation_history()

    assert interpreter.conversation_history == []


def test_listening_state_transitions() -> None:
    interpreter = CommandInterpreter()

    assert interpreter.is_listening is False
    assert interpreter.start_listening() is True
    assert interpreter.start_listening() is False
    interpreter.stop_listening()
    assert interpreter.is_listening is False
