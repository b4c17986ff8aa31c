"""Runtime loader for the assistant's navigation command vocabulary."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from stockwise.commands.navigation import NavigationCommand, build_navigation_commands
from stockwise.runtime.logging import get_logger
from stockwise.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_navigation_commands(rule_paths: tuple[str, ...] | None = None) -> tuple[NavigationCommand, ...]:
    """
    Load navigation commands from TOML files, later files overriding earlier routes.

    With no explicit paths, the bundled vocabulary is read first and the
    project's config/commands.toml (if present) layered on top.

    Raises:
        FileNotFoundError: an explicitly listed file does not exist.
        ValueError: no valid command entries were found.
    """
    if rule_paths is None:
        p = get_paths()
        files = [p.default_command_rules]
        if p.command_rules.exists():
            files.append(p.command_rules)
    else:
        files = [Path(path) for path in rule_paths]
        for path in files:
            if not path.exists():
                raise FileNotFoundError(f"Command rules file not found: {path}")

    configs = tuple(_load_toml(path) for path in files)
    commands = build_navigation_commands(configs)
    if not commands:
        raise ValueError(f"No valid navigation commands found in {', '.join(str(f) for f in files)}")

    logger.debug("Loaded %d navigation commands from %d file(s)", len(commands), len(files))
    return commands
