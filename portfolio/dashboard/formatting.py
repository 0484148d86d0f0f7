"""
Display formatting for the presentation layer.

Both formatters are total: non-numeric, NaN or infinite input returns the
fallback string instead of raising. The metrics engine never calls these.
"""
import math
import numbers

from config.settings import CURRENCY_SYMBOL

CURRENCY_FALLBACK = f"{CURRENCY_SYMBOL}0.00"
PERCENT_FALLBACK = "0.00%"


def _valid(value) -> bool:
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def group_indian(integer_digits: str) -> str:
    """
    Indian digit grouping: last three digits, then pairs.

    "12450" → "12,450", "124500" → "1,24,500", "10000000" → "1,00,00,000"
    """
    if len(integer_digits) <= 3:
        return integer_digits
    head, tail = integer_digits[:-3], integer_digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(value) -> str:
    """₹ amount with Indian grouping and 2 decimals, e.g. ₹1,24,500.00."""
    if not _valid(value):
        return CURRENCY_FALLBACK
    text = f"{abs(value):.2f}"
    integer_digits, decimals = text.split(".")
    sign = "-" if value < 0 and text != "0.00" else ""
    return f"{sign}{CURRENCY_SYMBOL}{group_indian(integer_digits)}.{decimals}"


def format_percentage(value) -> str:
    """Signed percentage with 2 decimals, e.g. +2.50% / -1.25%."""
    if not _valid(value):
        return PERCENT_FALLBACK
    text = f"{value:.2f}"
    if text == "-0.00":
        text = "0.00"
    return f"{text}%" if text.startswith("-") else f"+{text}%"
