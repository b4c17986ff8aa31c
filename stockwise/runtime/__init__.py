"""Runtime infrastructure for stockwise.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Config loading via load_finance_settings(), load_navigation_commands()

Usage:
    from stockwise.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.finance_settings)
"""

from stockwise.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from stockwise.runtime.paths import ProjectPaths, get_paths, set_project_root
from stockwise.runtime.command_rules import load_navigation_commands
from stockwise.runtime.finance_settings import load_finance_settings

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Config
    "load_finance_settings",
    "load_navigation_commands",
    # Paths
    "get_paths",
    "set_project_root",
    "ProjectPaths",
]
