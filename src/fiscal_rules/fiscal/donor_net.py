"""Per-donor fiscal net for a single year."""

from typing import Iterable
import logging

from ..models.transaction import (
    DonationStatus,
    DonorNetResult,
    Transaction,
    TransactionType,
)
from ..rules.net_amount import is_fiscally_excluded
from .currency import to_cents

logger = logging.getLogger(__name__)


def calculate_donor_net(
    transactions: Iterable[Transaction], donor_id: str, year: int
) -> DonorNetResult:
    """
    Calculate the fiscal net of one donor for one year.

    Donations are positive amounts not marked ``returned``; returns are
    negative ``return`` transactions. Archived records and remittance or
    split parents are skipped. The net is not clamped at zero.

    Args:
        transactions: Transactions of any donor and year
        donor_id: Contact id of the donor
        year: Calendar year

    Returns:
        DonorNetResult in cents
    """
    result = DonorNetResult()

    for tx in transactions:
        if tx.contact_id != donor_id or tx.year != year:
            continue
        if is_fiscally_excluded(tx):
            continue

        if tx.amount > 0 and tx.donation_status != DonationStatus.RETURNED:
            result.gross_donations_cents += to_cents(tx.amount)
            result.donations_count += 1

        if tx.transaction_type == TransactionType.RETURN and tx.amount < 0:
            result.returns_cents += to_cents(tx.amount)
            result.returns_count += 1

    logger.debug(
        f"Donor {donor_id} {year}: {result.donations_count} donations, "
        f"{result.returns_count} returns, net {result.net_cents} cents"
    )
    return result
