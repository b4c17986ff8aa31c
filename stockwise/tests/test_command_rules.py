from __future__ import annotations

from pathlib import Path

import pytest

from stockwise.commands.navigation import NavigationCommand, build_navigation_commands
from stockwise.runtime.command_rules import load_navigation_commands
from stockwise.runtime.paths import get_paths


def test_bundled_vocabulary_loads_in_file_order() -> None:
    load_navigation_commands.cache_clear()
    commands = load_navigation_commands((str(get_paths().default_command_rules),))

    routes = [command.route for command in commands]
    assert routes[:3] == ["/dashboard", "/items", "/add-item"]
    assert routes[-1] == "/"
    assert commands[0].triggers == ("dashboard", "go to dashboard", "show dashboard")


def test_project_rules_replace_routes_in_place_and_append_new_ones(tmp_path: Path) -> None:
    override = tmp_path / "commands.toml"
    override.write_text(
        """
[[commands]]
route = "/news"
triggers = ["Headlines", "latest news"]
reply = "Opening headlines"

[[commands]]
route = "/settings"
triggers = "settings"
"""
    )

    load_navigation_commands.cache_clear()
    commands = load_navigation_commands((str(get_paths().default_command_rules), str(override)))
    by_route = {command.route: command for command in commands}

    assert by_route["/news"] == NavigationCommand(
        route="/news",
        triggers=("headlines", "latest news"),
        reply="Opening headlines",
    )
    assert by_route["/settings"].reply == "Opening /settings"
    assert [c.route for c in commands].index("/news") < [c.route for c in commands].index("/")
    assert commands[-1].route == "/settings"


def test_entries_without_route_or_triggers_are_skipped() -> None:
    configs = [
        {
            "commands": [
                {"route": "", "triggers": ["orphan"]},
                {"route": "/empty", "triggers": []},
                {"route": "/ok", "triggers": ["  OK  "], "reply": "Fine"},
                "not a table",
            ]
        }
    ]

    assert build_navigation_commands(configs) == (NavigationCommand(route="/ok", triggers=("ok",), reply="Fine"),)


def test_missing_rules_file_raises(tmp_path: Path) -> None:
    load_navigation_commands.cache_clear()
    with pytest.raises(FileNotFoundError):
        load_navigation_commands((str(tmp_path / "nope.toml"),))


def test_rules_file_without_commands_raises(tmp_path: Path) -> None:
    rules_path = tmp_path / "commands.toml"
    rules_path.write_text("")
    load_navigation_commands.cache_clear()
    with pytest.raises(ValueError):
        load_navigation_commands((str(rules_path),))
