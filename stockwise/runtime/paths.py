"""Centralized path management for stockwise.

This module provides a single source of truth for the configuration files
the command and finance layers read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory.

    ``STOCKWISE_HOME`` wins when set; otherwise the current working directory.
    """
    env_root = os.environ.get("STOCKWISE_HOME")
    if env_root:
        return Path(env_root).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Source code paths ---
    @property
    def src(self) -> Path:
        """Installed stockwise package directory."""
        return Path(__file__).resolve().parent.parent

    @property
    def default_command_rules(self) -> Path:
        """Bundled navigation command vocabulary."""
        return self.src / "commands" / "rules" / "default_commands.toml"

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def finance_settings(self) -> Path:
        """Tax rates, cost ratio and recommendation thresholds TOML file."""
        return self.config / "finance.toml"

    @property
    def command_rules(self) -> Path:
        """Project-level navigation command vocabulary TOML file."""
        return self.config / "commands.toml"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the process-wide ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def set_project_root(root: Path | str) -> ProjectPaths:
    """Point path resolution at a different project root.

    Args:
        root: Directory holding the ``config/`` folder.
    """
    global _paths
    _paths = ProjectPaths(root=Path(root))
    return _paths
