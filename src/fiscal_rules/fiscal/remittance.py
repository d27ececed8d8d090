"""
Blocking invariants for processing incoming remittances.

Unlike the pure rules, these guards raise: a caller about to write
remittance children must abort when one fails.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence
import hashlib
import json
import re

from ..utils.exceptions import FiscalRulesError

# Bank rounding tolerance between the parent and the sum of its children
SUM_TOLERANCE_CENTS = 2

SUM_INVARIANT = "R-SUM-1"
COUNT_INVARIANT = "R-COUNT-1"
IDEMPOTENCE_INVARIANT = "R-IDEMP-1"

_WHITESPACE = re.compile(r"\s+")


class RemittanceInvariantError(FiscalRulesError):
    """A remittance invariant does not hold; the operation must abort."""

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.details = details or {}


@dataclass(frozen=True)
class RemittanceItem:
    """One child line of a remittance, as hashed for idempotence."""

    contact_id: str
    amount_cents: int
    iban: Optional[str] = None
    tax_id: Optional[str] = None
    source_row_index: Optional[int] = None


@dataclass(frozen=True)
class IdempotenceCheck:
    should_process: bool
    reason: str


def assert_sum_invariant(
    parent_amount_cents: int,
    children_sum_cents: int,
    tolerance_cents: int = SUM_TOLERANCE_CENTS,
) -> None:
    """
    Check that the children add up to the parent, ignoring sign.

    Raises:
        RemittanceInvariantError: ``R-SUM-1`` when the delta exceeds the tolerance
    """
    parent_abs = abs(parent_amount_cents)
    children_abs = abs(children_sum_cents)
    delta_cents = abs(parent_abs - children_abs)

    if delta_cents > tolerance_cents:
        raise RemittanceInvariantError(
            SUM_INVARIANT,
            f"Children sum ({children_abs} cents) does not match parent "
            f"({parent_abs} cents). Delta: {delta_cents} cents, tolerance: {tolerance_cents}",
            {
                "parent_amount_cents": parent_abs,
                "children_sum_cents": children_abs,
                "delta_cents": delta_cents,
                "tolerance": tolerance_cents,
            },
        )


def assert_count_invariant(transaction_ids: Sequence[str], active_child_count: int) -> None:
    """
    Check that the remittance document lists exactly its active children.

    Raises:
        RemittanceInvariantError: ``R-COUNT-1`` when the counts differ
    """
    if len(transaction_ids) != active_child_count:
        raise RemittanceInvariantError(
            COUNT_INVARIANT,
            f"transaction_ids ({len(transaction_ids)}) != active children ({active_child_count})",
            {
                "transaction_ids_length": len(transaction_ids),
                "active_child_count": active_child_count,
            },
        )


def check_idempotence(
    existing_hash: Optional[str],
    new_hash: str,
    existing_status: Optional[str] = None,
) -> IdempotenceCheck:
    """Decide whether a remittance must be (re)processed given its stored input hash."""
    if not existing_hash:
        return IdempotenceCheck(True, "No previous hash")

    if existing_status == "undone":
        return IdempotenceCheck(True, "Remittance was previously undone")

    if existing_hash == new_hash:
        return IdempotenceCheck(False, f"Remittance already processed with hash {new_hash[:8]}...")

    # A different hash means the input changed: reprocess as an implicit repair
    return IdempotenceCheck(True, "Hash differs, reprocessing")


def _normalize_code(value: Optional[str]) -> str:
    return _WHITESPACE.sub("", value or "").upper()


def compute_input_hash(parent_tx_id: str, items: Iterable[RemittanceItem]) -> str:
    """
    Canonical SHA-256 of a remittance input.

    IBAN and tax id are stripped of whitespace and uppercased, and items
    are sorted so the hash does not depend on input order.
    """
    normalized = [
        {
            "c": item.contact_id,
            "a": item.amount_cents,
            "i": _normalize_code(item.iban),
            "t": _normalize_code(item.tax_id),
            "r": item.source_row_index or 0,
        }
        for item in items
    ]
    normalized.sort(key=lambda x: f"{x['c']}{x['a']}{x['i']}{x['t']}{x['r']}")

    raw = json.dumps(
        {"parent_tx_id": parent_tx_id, "normalized": normalized},
        separators=(",", ":"),
    )
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
