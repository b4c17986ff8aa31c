"""In-memory finance settings built from parsed configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from stockwise.domain.money import to_decimal

# Cost assumed for items without a recorded cost price (30% gross margin).
DEFAULT_COST_RATIO = Decimal("0.7")


@dataclass(frozen=True)
class TaxRates:
    """Tax rates as fractions (0.0825 is 8.25%)."""

    federal: Decimal = Decimal("0.21")
    state: Decimal = Decimal("0.08")
    sales: Decimal = Decimal("0.0825")


@dataclass(frozen=True)
class RecommendationThresholds:
    # Overall margin percent below which pricing gets flagged.
    low_margin_percent: Decimal = Decimal("20")
    # Average units per distinct item above which stock counts as high.
    overstock_units_per_item: int = 50


@dataclass(frozen=True)
class FinanceSettings:
    tax_rates: TaxRates = field(default_factory=TaxRates)
    default_cost_ratio: Decimal = DEFAULT_COST_RATIO
    thresholds: RecommendationThresholds = field(default_factory=RecommendationThresholds)
    currency: str = "USD"


def _rate(section: Mapping[str, Any], key: str, default: Decimal, *, upper: Decimal | None = None) -> Decimal:
    if key not in section:
        return default
    try:
        value = to_decimal(section[key])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for {key!r}: {section[key]!r}") from exc
    if value < 0 or (upper is not None and value > upper):
        raise ValueError(f"Value for {key!r} out of range: {value}")
    return value


def build_finance_settings(config: Mapping[str, Any]) -> FinanceSettings:
    """Build FinanceSettings from a parsed TOML mapping.

    Missing sections and keys keep their defaults.
    """
    defaults = FinanceSettings()

    tax_section = config.get("tax_rates", {})
    tax_rates = TaxRates(
        federal=_rate(tax_section, "federal", defaults.tax_rates.federal, upper=Decimal("1")),
        state=_rate(tax_section, "state", defaults.tax_rates.state, upper=Decimal("1")),
        sales=_rate(tax_section, "sales", defaults.tax_rates.sales, upper=Decimal("1")),
    )

    valuation_section = config.get("valuation", {})
    cost_ratio = _rate(valuation_section, "default_cost_ratio", defaults.default_cost_ratio)

    rec_section = config.get("recommendations", {})
    low_margin = _rate(
        rec_section,
        "low_margin_percent",
        defaults.thresholds.low_margin_percent,
        upper=Decimal("100"),
    )
    overstock = rec_section.get("overstock_units_per_item", defaults.thresholds.overstock_units_per_item)
    if not isinstance(overstock, int) or isinstance(overstock, bool) or overstock < 0:
        raise ValueError(f"Invalid value for 'overstock_units_per_item': {overstock!r}")

    currency = str(config.get("display", {}).get("currency", defaults.currency)).strip().upper()
    if not currency:
        raise ValueError("Display currency must not be empty")

    return FinanceSettings(
        tax_rates=tax_rates,
        default_cost_ratio=cost_ratio,
        thresholds=RecommendationThresholds(
            low_margin_percent=low_margin,
            overstock_units_per_item=overstock,
        ),
        currency=currency,
    )
