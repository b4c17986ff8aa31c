"""Unified command-line interface for stockwise.

Usage:
    stockwise ask "show dashboard"
    stockwise ask --inventory items.csv "inventory status"
    stockwise analyze items.csv [--json]
    stockwise break-even 1000 5 12.5
    stockwise serve [--port]
"""
