"""Navigation vocabulary: trigger phrases bound to application routes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NavigationCommand:
    route: str
    triggers: tuple[str, ...]
    reply: str


def normalize_phrase(text: str) -> str:
    return text.lower().strip()


def _parse_command(entry: Mapping[str, Any]) -> NavigationCommand | None:
    route = str(entry.get("route", "")).strip()
    raw_triggers = entry.get("triggers", [])
    if isinstance(raw_triggers, str):
        raw_triggers = [raw_triggers]
    triggers = tuple(t for t in (normalize_phrase(str(raw)) for raw in raw_triggers) if t)
    if not route or not triggers:
        return None
    reply = str(entry.get("reply", "")).strip() or f"Opening {route}"
    return NavigationCommand(route=route, triggers=triggers, reply=reply)


def build_navigation_commands(configs: Iterable[Mapping[str, Any]]) -> tuple[NavigationCommand, ...]:
    """Merge parsed TOML configs into an ordered command tuple.

    A later entry for an already-seen route replaces it in place; entries
    missing a route or triggers are skipped.
    """
    by_route: dict[str, NavigationCommand] = {}
    for config in configs:
        for entry in config.get("commands", []):
            if not isinstance(entry, Mapping):
                continue
            command = _parse_command(entry)
            if command is not None:
                by_route[command.route] = command
    return tuple(by_route.values())
