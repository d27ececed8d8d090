"""
Model 182 donor totals (annual declaration of received donations).

Aggregates per-transaction net amounts per donor for the report year and
the two previous years, which decide whether a donor is recurrent.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable
import logging

from ..models.transaction import (
    Donor,
    DonorTotals,
    Model182Result,
    Model182Stats,
    Transaction,
)
from ..rules.net_amount import compute_net_amount, is_return_like

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class _DonorAccumulator:
    donor: Donor
    total: Decimal = ZERO
    returned: Decimal = ZERO
    total_year1: Decimal = ZERO
    total_year2: Decimal = ZERO


def calculate_model182_totals(
    transactions: Iterable[Transaction],
    donors: Iterable[Donor],
    year: int,
) -> Model182Result:
    """
    Calculate Model 182 donor totals.

    Args:
        transactions: Donor transactions across years
        donors: Known donors; those without a tax id are ignored
        year: Fiscal year to report

    Returns:
        Model182Result with rows sorted by total amount, descending
    """
    donor_map = {d.id: d for d in donors if d.has_tax_id}
    year1 = year - 1
    year2 = year - 2

    accumulators: dict[str, _DonorAccumulator] = {}
    stats = Model182Stats()
    skipped = 0

    for tx in transactions:
        if not tx.contact_id or tx.contact_id not in donor_map:
            skipped += 1
            continue

        acc = accumulators.get(tx.contact_id)
        if acc is None:
            acc = _DonorAccumulator(donor=donor_map[tx.contact_id])
            accumulators[tx.contact_id] = acc

        net_amount = compute_net_amount(tx)
        tx_year = tx.year

        if tx_year == year:
            if is_return_like(tx):
                stats.excluded_returns += 1
                stats.excluded_amount += abs(net_amount)

            if net_amount > 0:
                acc.total += net_amount
            elif net_amount < 0:
                acc.returned += abs(net_amount)
        elif tx_year == year1:
            acc.total_year1 += max(ZERO, net_amount)
        elif tx_year == year2:
            acc.total_year2 += max(ZERO, net_amount)

    if skipped:
        logger.debug(f"Skipped {skipped} transactions without a reportable donor")

    donor_totals = [
        DonorTotals(
            donor=acc.donor,
            total_amount=max(ZERO, acc.total - acc.returned),
            returned_amount=acc.returned,
            value1=acc.total_year1,
            value2=acc.total_year2,
        )
        for acc in accumulators.values()
    ]
    donor_totals = [row for row in donor_totals if row.total_amount > 0]
    donor_totals.sort(key=lambda row: row.total_amount, reverse=True)

    stats.total_donors = len(donor_totals)
    stats.total_amount = sum((row.total_amount for row in donor_totals), ZERO)

    logger.info(
        f"Model 182 {year}: {stats.total_donors} donors, total {stats.total_amount}, "
        f"{stats.excluded_returns} returns excluded"
    )
    return Model182Result(year=year, donor_totals=donor_totals, stats=stats)
