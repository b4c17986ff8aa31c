"""Rule engine for cost-analysis recommendations.

Rules are plain Python functions evaluated in registration order. Each one
looks at the overall valuation and the per-category breakdown and returns a
Recommendation or None. Rules are independent: any subset may fire, and the
output order is the rule order.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from stockwise.domain.analysis import CategoryBreakdown, InventoryValuation, Recommendation
from stockwise.domain.money import HUNDRED
from stockwise.finance.settings import RecommendationThresholds
from stockwise.runtime.logging import get_logger

logger = get_logger(__name__)

RecommendationRule = Callable[
    [InventoryValuation, Mapping[str, CategoryBreakdown], RecommendationThresholds],
    Recommendation | None,
]


def low_margin_rule(
    valuation: InventoryValuation,
    categories: Mapping[str, CategoryBreakdown],
    thresholds: RecommendationThresholds,
) -> Recommendation | None:
    # No retail value means no defined margin; nothing to warn about.
    if not valuation.total_retail_value:
        return None
    margin = valuation.total_profit_potential / valuation.total_retail_value * HUNDRED
    if margin >= thresholds.low_margin_percent:
        return None
    return Recommendation(
        type="warning",
        title="Low Profit Margins",
        description=(
            f"Overall profit margin is below {thresholds.low_margin_percent.normalize():f}%. "
            "Consider reviewing pricing strategy."
        ),
        action="Review pricing for low-margin items",
    )


def top_category_rule(
    valuation: InventoryValuation,
    categories: Mapping[str, CategoryBreakdown],
    thresholds: RecommendationThresholds,
) -> Recommendation | None:
    if not categories:
        return None
    # sorted() is stable: equal retail values keep first-seen order.
    ranked = sorted(categories.items(), key=lambda entry: entry[1].retail_value, reverse=True)
    top_name = ranked[0][0]
    return Recommendation(
        type="success",
        title="Top Performing Category",
        description=f"{top_name} represents your highest value category",
        action="Consider expanding this category",
    )


def overstock_rule(
    valuation: InventoryValuation,
    categories: Mapping[str, CategoryBreakdown],
    thresholds: RecommendationThresholds,
) -> Recommendation | None:
    if valuation.total_quantity <= valuation.item_count * thresholds.overstock_units_per_item:
        return None
    return Recommendation(
        type="info",
        title="High Inventory Levels",
        description="Inventory quantity is high relative to item diversity",
        action="Consider inventory optimization strategies",
    )


DEFAULT_RULES: tuple[RecommendationRule, ...] = (low_margin_rule, top_category_rule, overstock_rule)


class RecommendationEngine:
    """Evaluates recommendation rules in a fixed order."""

    def __init__(
        self,
        thresholds: RecommendationThresholds | None = None,
        rules: tuple[RecommendationRule, ...] | None = DEFAULT_RULES,
    ) -> None:
        self.thresholds = thresholds or RecommendationThresholds()
        self.rules: list[RecommendationRule] = list(rules or ())

    def register_rule(self, rule: RecommendationRule) -> None:
        """Append a rule; it runs after every rule registered before it."""
        self.rules.append(rule)
        logger.debug("Registered recommendation rule: %s", getattr(rule, "__name__", rule))

    def generate(
        self,
        valuation: InventoryValuation,
        categories: Mapping[str, CategoryBreakdown],
    ) -> list[Recommendation]:
        recommendations: list[Recommendation] = []
        for rule in self.rules:
            result = rule(valuation, categories, self.thresholds)
            if result is not None:
                logger.debug("Rule %s produced %s recommendation", getattr(rule, "__name__", rule), result.type)
                recommendations.append(result)
        return recommendations
