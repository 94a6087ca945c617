from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

MONTH_LABELS_NL = ["jan", "feb", "mrt", "apr", "mei", "jun", "jul", "aug", "sep", "okt", "nov", "dec"]

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}

NBSP = "\u00a0"


def format_currency(value: Union[Decimal, int, float], currency_code: str = "EUR") -> str:
    """Dutch notation without cents, e.g. ``€ 1.250``."""
    amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(int(amount)):,}".replace(",", ".")
    symbol = CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code.upper())
    return f"{symbol}{NBSP}{sign}{grouped}"


def format_month_label(month_key: str) -> str:
    month_start = date.fromisoformat(month_key)
    return f"{MONTH_LABELS_NL[month_start.month - 1]} {month_start.year % 100:02d}"
