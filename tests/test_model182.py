"""Tests for the Model 182 donor totals."""

from decimal import Decimal

import pytest

from fiscal_rules.fiscal.model182 import calculate_model182_totals
from fiscal_rules.models.transaction import DonationStatus, Donor, TransactionType

from .helpers import make_tx

DONATION = TransactionType.DONATION


@pytest.fixture
def model182_donors(donors) -> list[Donor]:
    return donors + [Donor(id="donor-4", name="Only Returns", tax_id="X1234567L")]


@pytest.fixture
def model182_transactions():
    return [
        # donor-1: recurrent, one return this year
        make_tx("120", date="2024-01-10", contact_id="donor-1", transaction_type=DONATION),
        make_tx("-20", date="2024-02-10", contact_id="donor-1", transaction_type=TransactionType.RETURN),
        make_tx("80", date="2024-03-10", contact_id="donor-1", transaction_type=DONATION, archived_at="2024-04-01"),
        make_tx("50", date="2023-05-10", contact_id="donor-1", transaction_type=DONATION),
        make_tx("-10", date="2023-06-10", contact_id="donor-1", transaction_type=TransactionType.RETURN),
        make_tx("30", date="2022-05-10", contact_id="donor-1", transaction_type=DONATION),
        # donor-2: a returned donation, not recurrent
        make_tx("50", date="2024-05-10", contact_id="donor-2", donation_status=DonationStatus.RETURNED),
        make_tx("200", date="2024-06-10", contact_id="donor-2", transaction_type=DONATION),
        make_tx("40", date="2022-06-10", contact_id="donor-2", transaction_type=DONATION),
        # donor-3 has no tax id
        make_tx("999", date="2024-06-10", contact_id="donor-3", transaction_type=DONATION),
        # donor-4 nets to nothing
        make_tx("40", date="2024-07-10", contact_id="donor-4", donation_status=DonationStatus.RETURNED),
        # unknown or missing donor
        make_tx("70", date="2024-07-10", contact_id="ghost", transaction_type=DONATION),
        make_tx("70", date="2024-07-10", transaction_type=DONATION),
        # remittance parent is neutral
        make_tx("500", date="2024-07-10", contact_id="donor-1", transaction_type=DONATION, is_remittance=True),
    ]


class TestCalculateModel182Totals:
    def test_rows_sorted_by_total(self, model182_transactions, model182_donors) -> None:
        result = calculate_model182_totals(model182_transactions, model182_donors, 2024)
        assert [row.donor_id for row in result.donor_totals] == ["donor-2", "donor-1"]

    def test_donor_amounts(self, model182_transactions, model182_donors) -> None:
        result = calculate_model182_totals(model182_transactions, model182_donors, 2024)
        rows = {row.donor_id: row for row in result.donor_totals}

        assert rows["donor-1"].total_amount == Decimal("100")
        assert rows["donor-1"].returned_amount == Decimal("20")
        assert rows["donor-1"].value1 == Decimal("50")
        assert rows["donor-1"].value2 == Decimal("30")
        assert rows["donor-1"].recurrent

        assert rows["donor-2"].total_amount == Decimal("150")
        assert rows["donor-2"].returned_amount == Decimal("50")
        assert rows["donor-2"].value1 == Decimal("0")
        assert rows["donor-2"].value2 == Decimal("40")
        assert not rows["donor-2"].recurrent

    def test_donors_without_tax_id_or_positive_total_are_dropped(
        self, model182_transactions, model182_donors
    ) -> None:
        result = calculate_model182_totals(model182_transactions, model182_donors, 2024)
        ids = {row.donor_id for row in result.donor_totals}
        assert "donor-3" not in ids
        assert "donor-4" not in ids

    def test_stats(self, model182_transactions, model182_donors) -> None:
        stats = calculate_model182_totals(model182_transactions, model182_donors, 2024).stats
        assert stats.total_donors == 2
        assert stats.total_amount == Decimal("250")
        assert stats.excluded_returns == 3
        assert stats.excluded_amount == Decimal("110")

    def test_empty_input(self) -> None:
        result = calculate_model182_totals([], [], 2024)
        assert result.year == 2024
        assert result.donor_totals == []
        assert result.stats.total_amount == Decimal("0")
