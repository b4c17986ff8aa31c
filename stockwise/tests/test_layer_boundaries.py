"""Architecture boundary checks between domain, finance and commands."""

from __future__ import annotations

import ast
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[1]


def _imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    result: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                result.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            base = "." * node.level + (node.module or "")
            result.append(base)
    return result


def _violations(package: str, forbidden: tuple[str, ...]) -> list[str]:
    violations: list[str] = []
    for path in sorted((PACKAGE_DIR / package).rglob("*.py")):
        for mod in _imports(path):
            if any(mod == prefix or mod.startswith(prefix + ".") for prefix in forbidden):
                violations.append(f"{path}: {mod}")
    return violations


def test_domain_is_pure() -> None:
    violations = _violations(
        "domain",
        ("stockwise.runtime", "stockwise.finance", "stockwise.commands", "stockwise.application"),
    )
    assert not violations, "Domain import violations:\n" + "\n".join(violations)


def test_finance_does_not_import_commands() -> None:
    violations = _violations("finance", ("stockwise.commands", "stockwise.application", "stockwise.cli"))
    assert not violations, "Finance -> commands import violations:\n" + "\n".join(violations)


def test_commands_do_not_import_finance() -> None:
    violations = _violations("commands", ("stockwise.finance", "stockwise.application", "stockwise.cli"))
    assert not violations, "Commands -> finance import violations:\n" + "\n".join(violations)
