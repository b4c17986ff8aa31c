"""Financial report workflows used by the CLI and the assistant server."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from stockwise.application.inventory_snapshot import InventorySnapshotError, load_inventory_snapshot
from stockwise.domain.analysis import BreakEvenResult, CostAnalysisReport
from stockwise.finance.calculator import FinancialCalculator
from stockwise.finance.formatting import format_currency, format_percentage
from stockwise.runtime.finance_settings import load_finance_settings
from stockwise.runtime.logging import get_logger

logger = get_logger(__name__)

ReportStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class CostAnalysisRequest:
    """Inputs for the cost analysis workflow."""

    inventory_path: Path
    settings_path: Path | None = None


@dataclass(frozen=True)
class CostAnalysisResult:
    """Outcome for the cost analysis workflow."""

    status: ReportStatus
    report: CostAnalysisReport | None = None
    currency: str = "USD"
    error: str | None = None


def build_calculator(settings_path: Path | None = None) -> FinancialCalculator:
    settings = load_finance_settings(str(settings_path) if settings_path is not None else None)
    return FinancialCalculator(settings)


def run_cost_analysis(request: CostAnalysisRequest) -> CostAnalysisResult:
    """Load an inventory export and analyse it."""
    try:
        calculator = build_calculator(request.settings_path)
    except ValueError as exc:
        return CostAnalysisResult(status="error", error=f"Invalid finance settings: {exc}")

    try:
        items = load_inventory_snapshot(request.inventory_path)
    except (FileNotFoundError, InventorySnapshotError) as exc:
        logger.error("%s", exc)
        return CostAnalysisResult(status="error", error=str(exc))

    report = calculator.generate_cost_analysis(items)
    return CostAnalysisResult(status="ok", report=report, currency=calculator.settings.currency)


def render_cost_analysis(report: CostAnalysisReport, currency: str = "USD") -> list[str]:
    """Plain-text summary of a cost analysis, one line per entry."""
    overall = report.overall
    lines = [
        "COST ANALYSIS",
        f"Total Inventory Value: {format_currency(overall.total_retail_value, currency)}",
        f"Total Cost Value: {format_currency(overall.total_cost_value, currency)}",
        f"Profit Potential: {format_currency(overall.total_profit_potential, currency)}",
        f"Average Profit Margin: {format_percentage(overall.avg_profit_margin)}",
        f"Items: {overall.item_count} ({overall.total_quantity} units)",
    ]

    if report.categories:
        lines.append("")
        lines.append("Categories:")
        width = max(len(name) for name in report.categories)
        for name, data in report.categories.items():
            lines.append(
                f"  {name.ljust(width)}  {format_currency(data.retail_value, currency):>14}"
                f"  margin {format_percentage(data.profit_margin)}"
            )

    if report.recommendations:
        lines.append("")
        lines.append("Recommendations:")
        for rec in report.recommendations:
            lines.append(f"  [{rec.type.upper()}] {rec.title}: {rec.description} -> {rec.action}")

    return lines


def render_break_even(result: BreakEvenResult, currency: str = "USD") -> list[str]:
    if result.error is not None:
        return [f"Break-even not reachable: {result.error}"]
    assert result.contribution_margin is not None
    assert result.contribution_margin_percentage is not None
    return [
        f"Break-even units: {result.break_even_units}",
        f"Break-even revenue: {format_currency(result.break_even_revenue, currency)}",
        f"Contribution margin: {format_currency(result.contribution_margin, currency)}"
        f" ({format_percentage(result.contribution_margin_percentage)})",
    ]
