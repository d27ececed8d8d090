"""Primary ledger visibility filter."""

from typing import Iterable

from ..models.transaction import Transaction


def is_visible_in_ledger(tx: Transaction, show_archived: bool = False) -> bool:
    """
    Decide whether a transaction belongs in the primary ledger view.

    Remittance children are never shown; they only aggregate into their
    parent. Archived rows are hidden unless ``show_archived`` is set.
    Remittance parents stay visible.
    """
    if tx.is_remittance_item:
        return False
    if not show_archived and tx.is_archived:
        return False
    return True


def filter_ledger(
    transactions: Iterable[Transaction], show_archived: bool = False
) -> list[Transaction]:
    """Visible transactions, in input order."""
    return [tx for tx in transactions if is_visible_in_ledger(tx, show_archived=show_archived)]
