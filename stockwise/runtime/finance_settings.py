"""Runtime loader for finance settings (tax rates, cost ratio, thresholds)."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from stockwise.finance.settings import FinanceSettings, build_finance_settings
from stockwise.runtime.logging import get_logger
from stockwise.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        logger.debug("Finance settings file not found, using defaults: %s", path)
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=4)
def load_finance_settings(config_path: str | None = None) -> FinanceSettings:
    """Load finance settings from TOML.

    Args:
        config_path: Path to the TOML file. If None, uses config/finance.toml
                     under the project root.

    Returns:
        Frozen FinanceSettings; defaults for anything the file leaves out.
    """
    path = Path(config_path) if config_path is not None else get_paths().finance_settings
    settings = build_finance_settings(_load_toml(path))
    logger.debug(
        "Finance settings: sales tax %s, cost ratio %s, currency %s",
        settings.tax_rates.sales,
        settings.default_cost_ratio,
        settings.currency,
    )
    return settings
