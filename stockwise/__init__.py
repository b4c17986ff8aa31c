"""Inventory assistant core: command interpretation and financial calculations."""

__version__ = "0.1.0"
