"""Invoice and purchase order models.

Both are produced by ``FinancialCalculator`` and are immutable once built;
storing them is the caller's business.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class InvoiceLine:
    description: str
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    discount_rate: Decimal  # percent, 10 means 10%
    discount_amount: Decimal
    tax_rate: Decimal  # fraction, 0.0825 means 8.25%
    tax_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class Invoice:
    invoice_number: str
    customer_info: Mapping[str, Any]
    items: tuple[InvoiceLine, ...]
    issue_date: date
    due_date: date | None
    calculations: InvoiceTotals


@dataclass(frozen=True)
class PurchaseOrderLine:
    description: str
    quantity: Decimal
    unit_cost: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class PurchaseOrder:
    po_number: str
    vendor_info: Mapping[str, Any]
    items: tuple[PurchaseOrderLine, ...]
    order_date: date
    expected_delivery: date | None
    total: Decimal
    terms: str = "Net 30"
