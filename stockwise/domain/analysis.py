"""Result models for valuation, cost analysis and break-even calculations."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

RecommendationType = Literal["warning", "success", "info"]


@dataclass(frozen=True)
class InventoryValuation:
    total_cost_value: Decimal
    total_retail_value: Decimal
    total_profit_potential: Decimal
    item_count: int
    total_quantity: int


@dataclass(frozen=True)
class CategoryBreakdown:
    item_count: int
    total_quantity: int
    cost_value: Decimal
    retail_value: Decimal
    profit_margin: Decimal  # percent


@dataclass(frozen=True)
class OverallAnalysis:
    total_cost_value: Decimal
    total_retail_value: Decimal
    total_profit_potential: Decimal
    item_count: int
    total_quantity: int
    avg_profit_margin: Decimal


@dataclass(frozen=True)
class Recommendation:
    type: RecommendationType
    title: str
    description: str
    action: str


@dataclass(frozen=True)
class CostAnalysisReport:
    overall: OverallAnalysis
    # Insertion order is first-seen category order in the snapshot.
    categories: dict[str, CategoryBreakdown] = field(default_factory=dict)
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass(frozen=True)
class BreakEvenResult:
    """Break-even figures, or an error-flagged result with infinite sentinels."""

    break_even_units: int | float
    break_even_revenue: Decimal
    contribution_margin: Decimal | None = None
    contribution_margin_percentage: Decimal | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class YearEndTaxes:
    gross_profit: Decimal
    inventory_value: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    total_tax: Decimal
    net_income: Decimal
