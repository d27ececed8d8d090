"""Shared builders for tests."""

from decimal import Decimal

from fiscal_rules.models.transaction import Transaction


def make_tx(amount, **kwargs) -> Transaction:
    """Build a transaction with sensible defaults for rule tests."""
    kwargs.setdefault("date", "2024-06-15")
    return Transaction(amount=Decimal(str(amount)), **kwargs)
