"""Financial calculations over inventory snapshots and business documents.

Every method is a pure function of its arguments and the calculator's frozen
settings: nothing here does I/O or mutates caller-supplied collections, so a
single calculator can be shared freely between threads.

Degenerate inputs (zero price, zero cost, empty inventory) are answered with
explicit zero guards. Input validation (negative quantities, missing fields)
is the caller's job; see ``stockwise.application.inventory_snapshot``.
"""

from __future__ import annotations

import math
import time
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal
from typing import Any

from stockwise.domain.analysis import (
    BreakEvenResult,
    CategoryBreakdown,
    CostAnalysisReport,
    InventoryValuation,
    OverallAnalysis,
    Recommendation,
    YearEndTaxes,
)
from stockwise.domain.documents import Invoice, InvoiceLine, InvoiceTotals, PurchaseOrder, PurchaseOrderLine
from stockwise.domain.inventory import InventoryItem
from stockwise.domain.money import HUNDRED, ZERO, Number, round_money, to_decimal
from stockwise.finance.recommendations import RecommendationEngine
from stockwise.finance.settings import FinanceSettings
from stockwise.runtime.logging import get_logger

logger = get_logger(__name__)

BREAK_EVEN_ERROR = "Price must be higher than variable cost"


def _line_field(line: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in line:
            return line[name]
    raise KeyError(f"Line item is missing {' / '.join(names)}: {dict(line)!r}")


def _margin_percent(retail: Decimal, cost: Decimal) -> Decimal:
    if not retail:
        return ZERO
    return round_money((retail - cost) / retail * HUNDRED)


class FinancialCalculator:
    """Valuation, margin, tax and document totals for an inventory business."""

    def __init__(
        self,
        settings: FinanceSettings | None = None,
        recommendation_engine: RecommendationEngine | None = None,
    ) -> None:
        self.settings = settings or FinanceSettings()
        self.recommendation_engine = recommendation_engine or RecommendationEngine(self.settings.thresholds)

    # --- Unit economics ---

    def calculate_profit_margin(self, selling_price: Number, cost_price: Number) -> Decimal:
        """Profit as a percentage of the selling price; 0 when the price is 0."""
        selling = to_decimal(selling_price)
        if not selling:
            return ZERO
        return round_money((selling - to_decimal(cost_price)) / selling * HUNDRED)

    def calculate_markup(self, selling_price: Number, cost_price: Number) -> Decimal:
        """Profit as a percentage of the cost price; 0 when the cost is 0."""
        cost = to_decimal(cost_price)
        if not cost:
            return ZERO
        return round_money((to_decimal(selling_price) - cost) / cost * HUNDRED)

    def calculate_sales_tax(self, amount: Number, rate: Number | None = None) -> Decimal:
        """Sales tax on ``amount``; ``rate`` defaults to the configured sales rate."""
        tax_rate = self.settings.tax_rates.sales if rate is None else to_decimal(rate)
        return round_money(to_decimal(amount) * tax_rate)

    def calculate_total_cost(
        self,
        base_cost: Number,
        include_state_tax: bool = True,
        include_federal_tax: bool = False,
    ) -> Decimal:
        """Base cost plus state and/or federal tax on it."""
        base = to_decimal(base_cost)
        total = base
        if include_state_tax:
            total += base * self.settings.tax_rates.state
        if include_federal_tax:
            total += base * self.settings.tax_rates.federal
        return round_money(total)

    # --- Documents ---

    @staticmethod
    def next_document_number(prefix: str, now_ms: int | None = None) -> str:
        """Build a time-based document number such as ``INV-1718000000000``."""
        if now_ms is None:
            now_ms = time.time_ns() // 1_000_000
        return f"{prefix}-{now_ms}"

    def generate_invoice(
        self,
        invoice_number: str,
        customer_info: Mapping[str, Any],
        items: Iterable[Mapping[str, Any]],
        due_date: date | None,
        issue_date: date | None = None,
        tax_rate: Number | None = None,
        discount_rate: Number = 0,
    ) -> Invoice:
        """
        Price an invoice.

        Args:
            items: Line mappings with ``description``, ``quantity`` and
                   ``unit_price`` (``unitPrice`` is accepted too).
            tax_rate: Fraction (0.0825); None uses the configured sales rate.
            discount_rate: Percent (10 means 10%) taken off the subtotal before tax.

        Negative quantities or prices are not rejected here.
        """
        rate = self.settings.tax_rates.sales if tax_rate is None else to_decimal(tax_rate)
        discount = to_decimal(discount_rate)

        lines: list[InvoiceLine] = []
        subtotal = ZERO
        for line in items:
            quantity = to_decimal(_line_field(line, "quantity"))
            unit_price = to_decimal(_line_field(line, "unit_price", "unitPrice"))
            line_total = quantity * unit_price
            subtotal += line_total
            lines.append(
                InvoiceLine(
                    description=str(line.get("description", "")),
                    quantity=quantity,
                    unit_price=unit_price,
                    line_total=round_money(line_total),
                )
            )

        discount_amount = subtotal * discount / HUNDRED
        taxable_amount = subtotal - discount_amount
        tax_amount = self.calculate_sales_tax(taxable_amount, rate)
        total = taxable_amount + tax_amount

        invoice = Invoice(
            invoice_number=invoice_number,
            customer_info=dict(customer_info),
            items=tuple(lines),
            issue_date=issue_date or date.today(),
            due_date=due_date,
            calculations=InvoiceTotals(
                subtotal=round_money(subtotal),
                discount_rate=discount,
                discount_amount=round_money(discount_amount),
                tax_rate=rate,
                tax_amount=tax_amount,
                total=round_money(total),
            ),
        )
        logger.debug("Generated invoice %s: %d lines, total %s", invoice_number, len(lines), invoice.calculations.total)
        return invoice

    def generate_purchase_order(
        self,
        po_number: str,
        vendor_info: Mapping[str, Any],
        items: Iterable[Mapping[str, Any]],
        expected_delivery: date | None = None,
        order_date: date | None = None,
        terms: str = "Net 30",
    ) -> PurchaseOrder:
        """Price a purchase order: ``quantity * unit_cost`` per line, no tax or discount."""
        lines: list[PurchaseOrderLine] = []
        total = ZERO
        for line in items:
            quantity = to_decimal(_line_field(line, "quantity"))
            unit_cost = to_decimal(_line_field(line, "unit_cost", "unitCost"))
            line_total = quantity * unit_cost
            total += line_total
            lines.append(
                PurchaseOrderLine(
                    description=str(line.get("description", "")),
                    quantity=quantity,
                    unit_cost=unit_cost,
                    line_total=round_money(line_total),
                )
            )

        return PurchaseOrder(
            po_number=po_number,
            vendor_info=dict(vendor_info),
            items=tuple(lines),
            order_date=order_date or date.today(),
            expected_delivery=expected_delivery,
            total=round_money(total),
            terms=terms,
        )

    # --- Inventory ---

    def calculate_inventory_valuation(self, items: Iterable[InventoryItem]) -> InventoryValuation:
        """Accumulate cost, retail and profit potential in one pass."""
        ratio = self.settings.default_cost_ratio
        total_cost = ZERO
        total_retail = ZERO
        item_count = 0
        total_quantity = 0

        for item in items:
            total_cost += item.quantity * item.effective_cost(ratio)
            total_retail += item.quantity * item.price
            item_count += 1
            total_quantity += item.quantity

        return InventoryValuation(
            total_cost_value=total_cost,
            total_retail_value=total_retail,
            total_profit_potential=total_retail - total_cost,
            item_count=item_count,
            total_quantity=total_quantity,
        )

    def _category_breakdown(self, items: Sequence[InventoryItem]) -> dict[str, CategoryBreakdown]:
        ratio = self.settings.default_cost_ratio
        buckets: dict[str, dict[str, Any]] = {}
        for item in items:
            bucket = buckets.setdefault(
                item.category_key,
                {"item_count": 0, "total_quantity": 0, "cost_value": ZERO, "retail_value": ZERO},
            )
            bucket["item_count"] += 1
            bucket["total_quantity"] += item.quantity
            bucket["cost_value"] += item.quantity * item.effective_cost(ratio)
            bucket["retail_value"] += item.quantity * item.price

        return {
            name: CategoryBreakdown(
                item_count=bucket["item_count"],
                total_quantity=bucket["total_quantity"],
                cost_value=bucket["cost_value"],
                retail_value=bucket["retail_value"],
                profit_margin=_margin_percent(bucket["retail_value"], bucket["cost_value"]),
            )
            for name, bucket in buckets.items()
        }

    def generate_recommendations(
        self,
        valuation: InventoryValuation,
        categories: Mapping[str, CategoryBreakdown],
    ) -> list[Recommendation]:
        return self.recommendation_engine.generate(valuation, categories)

    def generate_cost_analysis(self, items: Iterable[InventoryItem]) -> CostAnalysisReport:
        """Valuation, per-category breakdown and recommendations for a snapshot."""
        snapshot = tuple(items)
        valuation = self.calculate_inventory_valuation(snapshot)
        categories = self._category_breakdown(snapshot)

        overall = OverallAnalysis(
            total_cost_value=valuation.total_cost_value,
            total_retail_value=valuation.total_retail_value,
            total_profit_potential=valuation.total_profit_potential,
            item_count=valuation.item_count,
            total_quantity=valuation.total_quantity,
            avg_profit_margin=_margin_percent(valuation.total_retail_value, valuation.total_cost_value),
        )
        recommendations = self.generate_recommendations(valuation, categories)
        logger.info(
            "Cost analysis: %d items in %d categories, %d recommendation(s)",
            valuation.item_count,
            len(categories),
            len(recommendations),
        )
        return CostAnalysisReport(overall=overall, categories=categories, recommendations=recommendations)

    # --- Planning ---

    def calculate_break_even(
        self,
        fixed_costs: Number,
        variable_cost_per_unit: Number,
        price_per_unit: Number,
    ) -> BreakEvenResult:
        """Units and revenue needed to cover fixed costs.

        When the price does not exceed the variable cost the result carries
        ``error`` and infinite sentinels instead of raising.
        """
        fixed = to_decimal(fixed_costs)
        price = to_decimal(price_per_unit)
        contribution_margin = price - to_decimal(variable_cost_per_unit)
        if contribution_margin <= 0:
            return BreakEvenResult(
                break_even_units=math.inf,
                break_even_revenue=Decimal("Infinity"),
                error=BREAK_EVEN_ERROR,
            )

        units = math.ceil(fixed / contribution_margin)
        return BreakEvenResult(
            break_even_units=units,
            break_even_revenue=round_money(units * price),
            contribution_margin=round_money(contribution_margin),
            contribution_margin_percentage=round_money(contribution_margin / price * HUNDRED),
        )

    def calculate_year_end_taxes(
        self,
        revenue: Number,
        expenses: Number,
        items: Iterable[InventoryItem],
    ) -> YearEndTaxes:
        """Simplified federal plus state tax on gross profit."""
        gross_profit = to_decimal(revenue) - to_decimal(expenses)
        inventory_value = self.calculate_inventory_valuation(items).total_cost_value
        federal_tax = gross_profit * self.settings.tax_rates.federal
        state_tax = gross_profit * self.settings.tax_rates.state
        total_tax = federal_tax + state_tax

        return YearEndTaxes(
            gross_profit=round_money(gross_profit),
            inventory_value=round_money(inventory_value),
            federal_tax=round_money(federal_tax),
            state_tax=round_money(state_tax),
            total_tax=round_money(total_tax),
            net_income=round_money(gross_profit - total_tax),
        )
