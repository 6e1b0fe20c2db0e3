"""Locale-independent monetary formatting"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

CENT = Decimal("0.01")


def to_cents(amount: Union[Decimal, int, float, str]) -> Decimal:
    """Round an amount half-up to two decimals"""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Union[Decimal, int, float, str]) -> str:
    """
    Format an amount with exactly two fractional digits and '.' as separator.

    Example:
        Decimal("25") → "25.00"
        Decimal("1234.5") → "1234.50" (no thousands grouping)
    """
    return f"{to_cents(amount):f}"


def control_sum(amounts: Iterable[Decimal]) -> Decimal:
    """Sum of amounts after rounding each one, so it matches the per-line values"""
    return sum((to_cents(a) for a in amounts), Decimal("0.00"))
