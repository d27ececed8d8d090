"""Fiscal rules for nonprofit transaction ledgers."""

from .models.transaction import Transaction, TransactionType
from .rules import (
    compute_net_amount,
    is_return_like,
    split_delta_cents,
    is_split_balanced,
    is_visible_in_ledger,
    normalize_import_type,
)

__version__ = "0.1.0"

__all__ = [
    "Transaction",
    "TransactionType",
    "compute_net_amount",
    "is_return_like",
    "split_delta_cents",
    "is_split_balanced",
    "is_visible_in_ledger",
    "normalize_import_type",
]
