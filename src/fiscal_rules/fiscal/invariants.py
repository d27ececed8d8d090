"""
Save-time invariants for fiscal transactions.

A1: the contact is required for returns and for positive remittance lines,
and forbidden on fees.
A2: amounts carry the sign of their type: returns and fees negative,
donations positive.
"""

from typing import Any, Optional
import logging

from ..models.transaction import Transaction, TransactionType
from ..utils.exceptions import FiscalRulesError

logger = logging.getLogger(__name__)

CONTACT_INVARIANT = "A1_VIOLATED"
SIGN_INVARIANT = "A2_VIOLATED"

REMITTANCE_SOURCE = "remittance"


class FiscalInvariantError(FiscalRulesError):
    """A fiscal transaction may not be saved as it stands."""

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.details = details or {}


def _violation(
    code: str, message: str, tx: Transaction, operation: Optional[str]
) -> FiscalInvariantError:
    details = {
        "operation": operation,
        "transaction_type": getattr(tx.transaction_type, "value", tx.transaction_type),
        "amount": str(tx.amount),
        "has_contact_id": bool(tx.contact_id),
        "source": tx.source,
    }
    logger.error(f"Fiscal invariant violated: [{code}] {message} {details}")
    return FiscalInvariantError(code, message, details)


def assert_fiscal_tx_can_be_saved(tx: Transaction, operation: Optional[str] = None) -> None:
    """
    Check the A1 and A2 invariants before a fiscal transaction is written.

    Stripe donations may lack a contact; they simply stay out of donor
    totals, so A1 does not cover them.

    Args:
        tx: Candidate transaction
        operation: Caller operation name, carried into the error details

    Raises:
        FiscalInvariantError: ``A1_VIOLATED`` or ``A2_VIOLATED``
    """
    tx_type = tx.transaction_type

    if tx_type == TransactionType.RETURN and not tx.contact_id:
        raise _violation(CONTACT_INVARIANT, "Return transaction requires contact_id", tx, operation)

    if tx.source == REMITTANCE_SOURCE and tx.amount > 0 and not tx.contact_id:
        raise _violation(
            CONTACT_INVARIANT,
            "Remittance IN (positive amount) requires contact_id",
            tx,
            operation,
        )

    if tx_type == TransactionType.FEE and tx.contact_id:
        raise _violation(CONTACT_INVARIANT, "Fee transaction must not have contact_id", tx, operation)

    if tx_type == TransactionType.RETURN and tx.amount >= 0:
        raise _violation(SIGN_INVARIANT, "Return transaction must have negative amount", tx, operation)

    if tx_type == TransactionType.DONATION and tx.amount <= 0:
        raise _violation(SIGN_INVARIANT, "Donation transaction must have positive amount", tx, operation)

    if tx_type == TransactionType.FEE and tx.amount >= 0:
        raise _violation(SIGN_INVARIANT, "Fee transaction must have negative amount", tx, operation)


def is_fiscal_tx_valid(tx: Transaction) -> bool:
    """Non-raising form of :func:`assert_fiscal_tx_can_be_saved`."""
    try:
        assert_fiscal_tx_can_be_saved(tx)
    except FiscalInvariantError:
        return False
    return True
