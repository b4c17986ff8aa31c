"""Financial calculations for stockwise.

Usage:
    from stockwise.finance import FinancialCalculator

    calculator = FinancialCalculator()
    report = calculator.generate_cost_analysis(items)
"""

from stockwise.finance.calculator import BREAK_EVEN_ERROR, FinancialCalculator
from stockwise.finance.formatting import format_currency, format_percentage
from stockwise.finance.recommendations import DEFAULT_RULES, RecommendationEngine
from stockwise.finance.settings import (
    DEFAULT_COST_RATIO,
    FinanceSettings,
    RecommendationThresholds,
    TaxRates,
    build_finance_settings,
)

__all__ = [
    "BREAK_EVEN_ERROR",
    "DEFAULT_COST_RATIO",
    "DEFAULT_RULES",
    "FinanceSettings",
    "FinancialCalculator",
    "RecommendationEngine",
    "RecommendationThresholds",
    "TaxRates",
    "build_finance_settings",
    "format_currency",
    "format_percentage",
]
