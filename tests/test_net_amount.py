"""
Tests for the net fiscal amount rules.

Tests cover:
- Exclusion of archived, remittance parent and split parent records
- Return, returned donation and donation classification
- The return-like predicate
"""

from decimal import Decimal

import pytest

from fiscal_rules.models.transaction import DonationStatus, Transaction, TransactionType
from fiscal_rules.rules.net_amount import (
    compute_net_amount,
    is_fiscally_excluded,
    is_return_like,
)

from .helpers import make_tx


class TestComputeNetAmount:
    """Ordered classification of a single transaction."""

    def test_negative_return_counts_as_is(self) -> None:
        tx = make_tx("-50", transaction_type=TransactionType.RETURN)
        assert compute_net_amount(tx) == Decimal("-50")

    def test_returned_donation_is_negated(self) -> None:
        tx = make_tx("100", donation_status=DonationStatus.RETURNED)
        assert compute_net_amount(tx) == Decimal("-100")

    def test_positive_donation_counts_at_face_value(self) -> None:
        tx = make_tx("100", transaction_type=TransactionType.DONATION)
        assert compute_net_amount(tx) == Decimal("100")

    def test_normal_income_is_neutral(self) -> None:
        tx = make_tx("100", transaction_type=TransactionType.NORMAL)
        assert compute_net_amount(tx) == Decimal("0")

    def test_plain_strings_compare_like_enum_members(self) -> None:
        tx = make_tx("-12.34", transaction_type="return")
        assert compute_net_amount(tx) == Decimal("-12.34")
        tx = make_tx("80", donation_status="returned")
        assert compute_net_amount(tx) == Decimal("-80")

    def test_returned_status_wins_over_donation_type(self) -> None:
        tx = make_tx(
            "75",
            transaction_type=TransactionType.DONATION,
            donation_status=DonationStatus.RETURNED,
        )
        assert compute_net_amount(tx) == Decimal("-75")

    def test_positive_return_is_neutral(self) -> None:
        tx = make_tx("30", transaction_type=TransactionType.RETURN)
        assert compute_net_amount(tx) == Decimal("0")

    def test_negative_donation_is_neutral(self) -> None:
        tx = make_tx("-30", transaction_type=TransactionType.DONATION)
        assert compute_net_amount(tx) == Decimal("0")

    @pytest.mark.parametrize(
        "transaction_type",
        [TransactionType.FEE, TransactionType.RETURN_FEE, TransactionType.NORMAL],
    )
    def test_fees_and_expenses_are_neutral(self, transaction_type: TransactionType) -> None:
        tx = make_tx("-9.99", transaction_type=transaction_type)
        assert compute_net_amount(tx) == Decimal("0")

    def test_zero_amount_never_counts(self) -> None:
        for tx in (
            make_tx("0", transaction_type=TransactionType.DONATION),
            make_tx("0", donation_status=DonationStatus.RETURNED),
            make_tx("0", transaction_type=TransactionType.RETURN),
        ):
            assert compute_net_amount(tx) == Decimal("0")

    @pytest.mark.parametrize(
        "flags",
        [
            {"archived_at": "2024-07-01T12:00:00Z"},
            {"is_remittance": True},
            {"is_split": True},
        ],
    )
    @pytest.mark.parametrize(
        "amount, fields",
        [
            ("100", {"transaction_type": TransactionType.DONATION}),
            ("-50", {"transaction_type": TransactionType.RETURN}),
            ("100", {"donation_status": DonationStatus.RETURNED}),
        ],
    )
    def test_excluded_records_are_always_zero(self, flags, amount, fields) -> None:
        tx = make_tx(amount, **fields, **flags)
        assert compute_net_amount(tx) == Decimal("0")

    def test_empty_archived_at_is_not_archived(self) -> None:
        tx = make_tx("100", transaction_type=TransactionType.DONATION, archived_at="")
        assert compute_net_amount(tx) == Decimal("100")

    def test_remittance_item_is_not_excluded_from_net(self) -> None:
        """Only parents are neutral; children carry the real donations."""
        tx = make_tx("25", transaction_type=TransactionType.DONATION, is_remittance_item=True)
        assert compute_net_amount(tx) == Decimal("25")


class TestIsReturnLike:
    def test_negative_return(self) -> None:
        assert is_return_like(make_tx("-50", transaction_type=TransactionType.RETURN))

    def test_returned_donation(self) -> None:
        assert is_return_like(make_tx("100", donation_status=DonationStatus.RETURNED))

    def test_plain_donation_is_not_return_like(self, donation: Transaction) -> None:
        assert not is_return_like(donation)

    def test_archived_return_is_not_return_like(self) -> None:
        tx = make_tx("-50", transaction_type=TransactionType.RETURN, archived_at="2024-01-01")
        assert not is_return_like(tx)

    def test_agrees_with_negative_net(self) -> None:
        samples = [
            make_tx("-50", transaction_type=TransactionType.RETURN),
            make_tx("100", donation_status=DonationStatus.RETURNED),
            make_tx("100", transaction_type=TransactionType.DONATION),
            make_tx("-10", transaction_type=TransactionType.FEE),
            make_tx("-50", transaction_type=TransactionType.RETURN, is_split=True),
        ]
        for tx in samples:
            assert is_return_like(tx) == (compute_net_amount(tx) < 0)


class TestIsFiscallyExcluded:
    def test_flags(self) -> None:
        assert is_fiscally_excluded(make_tx("1", archived_at="2024-01-01"))
        assert is_fiscally_excluded(make_tx("1", is_remittance=True))
        assert is_fiscally_excluded(make_tx("1", is_split=True))
        assert not is_fiscally_excluded(make_tx("1", is_remittance_item=True))
        assert not is_fiscally_excluded(make_tx("1"))
