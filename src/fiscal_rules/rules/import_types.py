"""Transaction type normalization at the import boundary."""

from typing import Any

from ..models.transaction import TransactionType

ALLOWED_TRANSACTION_TYPES = frozenset(t.value for t in TransactionType)


def normalize_import_type(raw_value: Any) -> TransactionType:
    """
    Map an untrusted import value to a transaction type.

    Strings in the allowed set come back as the matching member; anything
    else (other strings, numbers, None) becomes ``normal``. Applying it to
    its own output is a no-op.
    """
    if isinstance(raw_value, str) and raw_value in ALLOWED_TRANSACTION_TYPES:
        return TransactionType(raw_value)
    return TransactionType.NORMAL
