"""Fiscal aggregations and remittance guards built on the pure rules."""

from .currency import to_cents, to_euros, sum_cents
from .donor_net import calculate_donor_net
from .invariants import FiscalInvariantError, assert_fiscal_tx_can_be_saved, is_fiscal_tx_valid
from .model182 import calculate_model182_totals
from .remittance import (
    SUM_TOLERANCE_CENTS,
    RemittanceInvariantError,
    RemittanceItem,
    IdempotenceCheck,
    assert_sum_invariant,
    assert_count_invariant,
    check_idempotence,
    compute_input_hash,
)

__all__ = [
    "to_cents",
    "to_euros",
    "sum_cents",
    "calculate_donor_net",
    "FiscalInvariantError",
    "assert_fiscal_tx_can_be_saved",
    "is_fiscal_tx_valid",
    "calculate_model182_totals",
    "SUM_TOLERANCE_CENTS",
    "RemittanceInvariantError",
    "RemittanceItem",
    "IdempotenceCheck",
    "assert_sum_invariant",
    "assert_count_invariant",
    "check_idempotence",
    "compute_input_hash",
]
