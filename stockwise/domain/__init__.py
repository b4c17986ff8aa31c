"""Core domain models for stockwise.

This module provides the data models shared by the command and finance layers:
- InventoryItem: inventory snapshot line
- Invoice, PurchaseOrder: generated business documents
- CostAnalysisReport and friends: finance calculation results
- ConversationEntry: assistant history entry

Usage:
    from stockwise.domain import InventoryItem, Invoice, CostAnalysisReport
"""

from stockwise.domain.analysis import (
    BreakEvenResult,
    CategoryBreakdown,
    CostAnalysisReport,
    InventoryValuation,
    OverallAnalysis,
    Recommendation,
    YearEndTaxes,
)
from stockwise.domain.conversation import ConversationEntry
from stockwise.domain.documents import Invoice, InvoiceLine, InvoiceTotals, PurchaseOrder, PurchaseOrderLine
from stockwise.domain.inventory import UNCATEGORIZED, InventoryItem

__all__ = [
    "BreakEvenResult",
    "CategoryBreakdown",
    "ConversationEntry",
    "CostAnalysisReport",
    "InventoryItem",
    "InventoryValuation",
    "Invoice",
    "InvoiceLine",
    "InvoiceTotals",
    "OverallAnalysis",
    "PurchaseOrder",
    "PurchaseOrderLine",
    "Recommendation",
    "UNCATEGORIZED",
    "YearEndTaxes",
]
