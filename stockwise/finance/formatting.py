"""Display helpers for money and percentages (en-US conventions)."""

from __future__ import annotations

from stockwise.domain.money import Number, round_money, to_decimal

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
}


def format_currency(amount: Number, currency: str = "USD") -> str:
    """Format ``amount`` like ``-$1,234.50``.

    Currencies without a known symbol are prefixed with their code.
    """
    value = round_money(to_decimal(amount))
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    prefix = symbol if symbol is not None else f"{code} "
    sign = "-" if value < 0 else ""
    return f"{sign}{prefix}{abs(value):,.2f}"


def format_percentage(value: Number) -> str:
    return f"{round_money(to_decimal(value)):.2f}%"
