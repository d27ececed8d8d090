"""Pure fiscal rules: net amount, split balance, ledger visibility, import types."""

from .net_amount import compute_net_amount, is_return_like, is_fiscally_excluded
from .splits import DEFAULT_SPLIT_TOLERANCE_CENTS, split_delta_cents, is_split_balanced
from .visibility import is_visible_in_ledger, filter_ledger
from .import_types import ALLOWED_TRANSACTION_TYPES, normalize_import_type

__all__ = [
    "compute_net_amount",
    "is_return_like",
    "is_fiscally_excluded",
    "DEFAULT_SPLIT_TOLERANCE_CENTS",
    "split_delta_cents",
    "is_split_balanced",
    "is_visible_in_ledger",
    "filter_ledger",
    "ALLOWED_TRANSACTION_TYPES",
    "normalize_import_type",
]
