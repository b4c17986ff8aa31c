#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that may call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stockwise",
        description="Inventory assistant and financial reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  ask <utterance...>         Interpret a voice/chat command ("-" reads lines from stdin)
  analyze <inventory>        Cost analysis for a .csv or .json inventory export
  break-even <fixed> <variable> <price>
                             Units and revenue needed to cover fixed costs
  serve [--host] [--port]    Start the assistant HTTP server

Configuration:
  config/finance.toml        tax rates, default cost ratio, recommendation thresholds
  config/commands.toml       extra or replacement navigation commands
""",
    )
    parser.add_argument("--settings", default=None, help="Finance settings TOML (default: config/finance.toml)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    ask_parser = subparsers.add_parser("ask", help="Interpret a voice/chat command")
    ask_parser.add_argument("utterance", nargs="+", help="Utterance text, or - to read one per line from stdin")
    ask_parser.add_argument("--inventory", default=None, help="Inventory export backing the data commands")
    ask_parser.add_argument(
        "--commands",
        action="append",
        default=None,
        help="Navigation command TOML file (repeatable; replaces the default vocabulary)",
    )
    ask_parser.add_argument("--history", action="store_true", help="Print the conversation history afterwards")

    analyze_parser = subparsers.add_parser("analyze", help="Cost analysis for an inventory export")
    analyze_parser.add_argument("inventory", help="Path to a .csv or .json inventory export")
    analyze_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    break_even_parser = subparsers.add_parser("break-even", help="Break-even analysis")
    break_even_parser.add_argument("fixed_costs", help="Fixed costs for the period")
    break_even_parser.add_argument("variable_cost", help="Variable cost per unit")
    break_even_parser.add_argument("price", help="Selling price per unit")

    serve_parser = subparsers.add_parser("serve", help="Start the assistant HTTP server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "ask":
        from stockwise.cli.commands import cmd_ask

        return _run_command(cmd_ask, args)
    elif args.command == "analyze":
        from stockwise.cli.commands import cmd_analyze

        return _run_command(cmd_analyze, args)
    elif args.command == "break-even":
        from stockwise.cli.commands import cmd_break_even

        return _run_command(cmd_break_even, args)
    elif args.command == "serve":
        from stockwise.cli.commands import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
