"""Conversions between decimal currency amounts and integer cents."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

CENT = Decimal("0.01")

Amount = Union[Decimal, int, float, str]


def to_cents(amount: Amount) -> int:
    """
    Convert a currency amount to integer cents.

    Half cents round away from zero. Floats go through ``str`` first so
    ``0.1 + 0.2`` style artifacts do not leak into the result.

    Raises:
        decimal.InvalidOperation: For unparseable or non-finite amounts
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if not value.is_finite():
        raise InvalidOperation(f"Cannot convert non-finite amount to cents: {amount!r}")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_euros(cents: int) -> Decimal:
    """Convert integer cents back to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def sum_cents(items: Iterable) -> int:
    """Sum the ``amount_cents`` attribute (or key) of remittance items."""
    total = 0
    for item in items:
        if isinstance(item, dict):
            total += item["amount_cents"]
        else:
            total += item.amount_cents
    return total
