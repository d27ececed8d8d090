"""Split amount balance check, in integer cents."""

from typing import Iterable

# Absorbs rounding artifacts of percentage-based splits
DEFAULT_SPLIT_TOLERANCE_CENTS = 2


def split_delta_cents(parent_cents: int, line_cents: Iterable[int]) -> int:
    """
    Difference between the split lines and the parent amount.

    Args:
        parent_cents: Parent amount in cents (may be negative)
        line_cents: Split line amounts in cents

    Returns:
        ``sum(line_cents) - parent_cents``
    """
    return sum(line_cents) - parent_cents


def is_split_balanced(
    parent_cents: int,
    line_cents: Iterable[int],
    tolerance_cents: int = DEFAULT_SPLIT_TOLERANCE_CENTS,
) -> bool:
    """True when the lines reconcile with the parent within ``tolerance_cents`` (inclusive)."""
    return abs(split_delta_cents(parent_cents, line_cents)) <= tolerance_cents
