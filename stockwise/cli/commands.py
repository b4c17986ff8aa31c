"""Command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from stockwise.application.reports import (
    CostAnalysisRequest,
    build_calculator,
    render_break_even,
    render_cost_analysis,
    run_cost_analysis,
)
from stockwise.application.serialization import to_jsonable
from stockwise.commands.assistant import InventoryStats, build_assistant
from stockwise.runtime import get_logger, load_navigation_commands

logger = get_logger(__name__)


class ConsoleHost:
    """Assistant host for a terminal: speech and side effects are printed."""

    def __init__(self, stats: InventoryStats | None = None) -> None:
        self.stats = stats

    def navigate(self, route: str) -> None:
        print(f"-> navigate {route}")

    def reload(self) -> None:
        print("-> reload")

    def go_back(self) -> None:
        print("-> back")

    def dispatch_search(self, term: str) -> None:
        print(f"-> search {term!r}")

    def speak(self, text: str) -> None:
        print(text)

    def inventory_stats(self) -> InventoryStats | None:
        return self.stats


def _stats_from_inventory(path: Path, settings_path: Path | None) -> InventoryStats | None:
    result = run_cost_analysis(CostAnalysisRequest(inventory_path=path, settings_path=settings_path))
    if result.status == "error" or result.report is None:
        print(f"Error: {result.error}")
        sys.exit(1)
    overall = result.report.overall
    return InventoryStats(
        total_items=overall.item_count,
        total_value=overall.total_retail_value,
        total_quantity=overall.total_quantity,
    )


def cmd_ask(args: argparse.Namespace) -> None:
    """Interpret one utterance, or read utterances from stdin with ``-``."""
    try:
        navigation = load_navigation_commands(tuple(args.commands) if args.commands else None)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    stats = None
    if args.inventory:
        stats = _stats_from_inventory(Path(args.inventory), Path(args.settings) if args.settings else None)

    assistant = build_assistant(ConsoleHost(stats), navigation)
    interpreter = assistant.interpreter

    utterances = [" ".join(args.utterance)] if args.utterance != ["-"] else [line for line in sys.stdin]
    for utterance in utterances:
        if not utterance.strip():
            continue
        outcome = interpreter.hear(utterance)
        logger.debug("Outcome for %r: %s", utterance, outcome.status)

    if args.history:
        print("")
        for entry in interpreter.conversation_history:
            print(f"[{entry.timestamp:%H:%M:%S}] {entry.role}: {entry.text}")


def cmd_analyze(args: argparse.Namespace) -> None:
    """Print a cost analysis for an inventory export."""
    result = run_cost_analysis(
        CostAnalysisRequest(
            inventory_path=Path(args.inventory),
            settings_path=Path(args.settings) if args.settings else None,
        )
    )
    if result.status == "error" or result.report is None:
        print(f"Error: {result.error}")
        sys.exit(1)

    if args.json:
        print(json.dumps(to_jsonable(result.report), indent=2))
        return
    for line in render_cost_analysis(result.report, result.currency):
        print(line)


def cmd_break_even(args: argparse.Namespace) -> None:
    """Print break-even units and revenue."""
    try:
        calculator = build_calculator(Path(args.settings) if args.settings else None)
        result = calculator.calculate_break_even(args.fixed_costs, args.variable_cost, args.price)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    for line in render_break_even(result, calculator.settings.currency):
        print(line)
    if result.error is not None:
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI assistant server."""
    import uvicorn

    from stockwise.runtime import load_finance_settings
    from stockwise.runtime.assistant_server import create_app

    app = create_app(load_finance_settings(), load_navigation_commands())

    print(f"Starting assistant server on {args.host}:{args.port}")
    print(f"Command endpoint: http://{args.host}:{args.port}/command")
    print("Press Ctrl+C to stop")

    uvicorn.run(app, host=args.host, port=args.port)
