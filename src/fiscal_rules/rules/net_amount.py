"""
Net fiscal amount of a transaction.

Only donations and returns carry a fiscal effect. Archived records and
parents of remittances or splits are neutral because their effect lives in
the child records (or nowhere, once soft-deleted).
"""

from decimal import Decimal

from ..models.transaction import DonationStatus, Transaction, TransactionType

ZERO = Decimal("0")


def is_fiscally_excluded(tx: Transaction) -> bool:
    """True for archived transactions and remittance or split parents."""
    return tx.is_archived or bool(tx.is_remittance) or bool(tx.is_split)


def compute_net_amount(tx: Transaction) -> Decimal:
    """
    Return the signed fiscal amount of a transaction.

    Rules are evaluated in order and the first match wins:

    1. Excluded (archived, remittance parent, split parent) -> 0
    2. ``return`` with a negative amount -> the amount itself
    3. Positive amount with donation status ``returned`` -> -amount
    4. Positive ``donation`` -> the amount
    5. Anything else -> 0

    Args:
        tx: Transaction projection

    Returns:
        Signed Decimal; never raises
    """
    if is_fiscally_excluded(tx):
        return ZERO

    amount = tx.amount
    if tx.transaction_type == TransactionType.RETURN and amount < 0:
        return amount
    if amount > 0 and tx.donation_status == DonationStatus.RETURNED:
        return -amount
    if amount > 0 and tx.transaction_type == TransactionType.DONATION:
        return amount
    return ZERO


def is_return_like(tx: Transaction) -> bool:
    """True when the transaction contributes a negative net under rules 2 or 3."""
    if is_fiscally_excluded(tx):
        return False
    if tx.transaction_type == TransactionType.RETURN and tx.amount < 0:
        return True
    return tx.amount > 0 and tx.donation_status == DonationStatus.RETURNED
