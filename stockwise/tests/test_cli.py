"""CLI entrypoint tests: exit codes and printed output."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stockwise.cli.main import main
from stockwise.runtime.command_rules import load_navigation_commands
from stockwise.runtime.paths import get_paths


@pytest.fixture
def inventory_csv(tmp_path: Path) -> Path:
    path = tmp_path / "items.csv"
    path.write_text("name,category,quantity,price\nGala Apples,A,10,5\nWhole Milk,B,5,20\n")
    return path


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "Inventory assistant" in capsys.readouterr().out


def test_break_even(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["break-even", "1000", "5", "12.5"]) == 0

    out = capsys.readouterr().out
    assert "Break-even units: 134" in out
    assert "Break-even revenue: $1,675.00" in out


def test_break_even_unreachable_exits_nonzero(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["break-even", "1000", "5", "5"]) == 1
    assert "Price must be higher than variable cost" in capsys.readouterr().out


def test_break_even_rejects_non_numbers(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["break-even", "lots", "5", "6"]) == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_analyze_text_report(inventory_csv: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["analyze", str(inventory_csv)]) == 0

    out = capsys.readouterr().out
    assert "Total Inventory Value: $150.00" in out
    assert "Average Profit Margin: 30.00%" in out
    assert "[SUCCESS] Top Performing Category" in out


def test_analyze_json_report(inventory_csv: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["analyze", "--json", str(inventory_csv)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert list(report["categories"]) == ["A", "B"]


def test_analyze_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["analyze", str(tmp_path / "absent.csv")]) == 1
    assert "Inventory file not found" in capsys.readouterr().out


def test_ask_prints_side_effects_and_reply(capsys: pytest.CaptureFixture[str]) -> None:
    load_navigation_commands.cache_clear()
    default_rules = str(get_paths().default_command_rules)

    assert main(["ask", "--commands", default_rules, "go", "to", "dashboard"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["-> navigate /dashboard", "Navigating to dashboard"]


def test_ask_with_inventory_answers_data_command(inventory_csv: Path, capsys: pytest.CaptureFixture[str]) -> None:
    load_navigation_commands.cache_clear()
    default_rules = str(get_paths().default_command_rules)

    assert main(["ask", "--commands", default_rules, "--inventory", str(inventory_csv), "item count"]) == 0

    assert capsys.readouterr().out.strip() == "You have 2 total items in your inventory."
