"""Data models for fiscal transaction projections and report results."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional, Union


class TransactionType(str, Enum):
    """Closed set of transaction type tags."""

    NORMAL = "normal"
    RETURN = "return"  # Bank return of a previously collected donation
    RETURN_FEE = "return_fee"  # Fee charged by the bank for a return
    DONATION = "donation"
    FEE = "fee"


class DonationStatus(str, Enum):
    """Donation lifecycle status."""

    COMPLETED = "completed"
    RETURNED = "returned"


class DonorType(str, Enum):
    """Kind of donor for tax reporting."""

    INDIVIDUAL = "individual"
    COMPANY = "company"


# External record keys, camelCase first, then snake_case
_RECORD_KEYS: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "date": ("date",),
    "amount": ("amount",),
    "transaction_type": ("transactionType", "transaction_type"),
    "donation_status": ("donationStatus", "donation_status"),
    "archived_at": ("archivedAt", "archived_at"),
    "is_remittance": ("isRemittance", "is_remittance"),
    "is_remittance_item": ("isRemittanceItem", "is_remittance_item"),
    "is_split": ("isSplit", "is_split"),
    "source": ("source",),
    "contact_id": ("contactId", "contact_id"),
}


def _lookup(record: Mapping[str, Any], name: str) -> Any:
    for key in _RECORD_KEYS[name]:
        if key in record:
            return record[key]
    return None


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")
    # NaN and Infinity cannot be ordered against zero
    return amount if amount.is_finite() else Decimal("0")


def _to_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


@dataclass
class Transaction:
    """
    Fiscal projection of a persisted transaction.

    Only the fields the fiscal rules read are carried. Instances are
    snapshots; nothing in this package mutates them.
    """

    # ISO date string ("2024-07-01") or a date object
    date: Union[str, date]

    # Signed amount: positive = inflow, negative = outflow
    amount: Decimal

    transaction_type: Optional[Union[TransactionType, str]] = TransactionType.NORMAL
    donation_status: Optional[Union[DonationStatus, str]] = None

    # Soft-delete timestamp; any non-empty value marks the record archived
    archived_at: Optional[Any] = None

    # Parent of a batch payment
    is_remittance: bool = False

    # Child line of a batch payment
    is_remittance_item: bool = False

    # Parent of a manual split allocation
    is_split: bool = False

    # Provenance tag (bank, remittance, manual, stripe)
    source: Optional[str] = None

    id: Optional[str] = None
    contact_id: Optional[str] = None

    @property
    def is_archived(self) -> bool:
        """True when ``archived_at`` holds a non-null, non-empty value."""
        if self.archived_at is None:
            return False
        if isinstance(self.archived_at, str):
            return self.archived_at.strip() != ""
        return True

    @property
    def year(self) -> Optional[int]:
        """Calendar year of the transaction date, or None if unparseable."""
        if isinstance(self.date, date):
            return self.date.year
        try:
            return int(str(self.date)[:4])
        except ValueError:
            return None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        """
        Build a projection from an external record.

        Accepts both camelCase (``transactionType``) and snake_case keys.
        The transaction type is passed through the import normalizer so
        unknown values land on ``normal``. Flags follow truthiness, with
        textual "true"/"1"/"yes" read as set; non-finite amounts become 0.
        """
        # Imported here to keep models free of a package-level cycle
        from ..rules.import_types import normalize_import_type

        return cls(
            id=_lookup(record, "id"),
            date=_lookup(record, "date") or "",
            amount=_to_decimal(_lookup(record, "amount")),
            transaction_type=normalize_import_type(_lookup(record, "transaction_type")),
            donation_status=_lookup(record, "donation_status"),
            archived_at=_lookup(record, "archived_at"),
            is_remittance=_to_flag(_lookup(record, "is_remittance")),
            is_remittance_item=_to_flag(_lookup(record, "is_remittance_item")),
            is_split=_to_flag(_lookup(record, "is_split")),
            source=_lookup(record, "source"),
            contact_id=_lookup(record, "contact_id"),
        )


@dataclass
class Donor:
    """Donor contact as needed by the Model 182 report."""

    id: str
    name: str
    tax_id: str = ""
    zip_code: str = ""
    province: Optional[str] = None
    donor_type: DonorType = DonorType.INDIVIDUAL

    @property
    def has_tax_id(self) -> bool:
        return bool(self.tax_id and self.tax_id.strip())


@dataclass
class DonorNetResult:
    """
    Fiscal net of one donor for one year, in cents.

    ``net_cents`` is not clamped at zero: more returns than donations
    yields a negative net.
    """

    gross_donations_cents: int = 0
    returns_cents: int = 0  # Negative or zero
    donations_count: int = 0
    returns_count: int = 0

    @property
    def net_cents(self) -> int:
        return self.gross_donations_cents + self.returns_cents

    def as_euros(self) -> dict[str, Any]:
        """Same figures in two-place Decimal euros."""
        cent = Decimal("0.01")
        return {
            "gross_donations": (Decimal(self.gross_donations_cents) / 100).quantize(cent),
            "returns": (Decimal(self.returns_cents) / 100).quantize(cent),
            "net": (Decimal(self.net_cents) / 100).quantize(cent),
            "donations_count": self.donations_count,
            "returns_count": self.returns_count,
        }


@dataclass
class DonorTotals:
    """One donor row of the Model 182 declaration."""

    donor: Donor

    # Net donated in the report year
    total_amount: Decimal

    # Returned in the report year
    returned_amount: Decimal

    # Positive totals of the two previous years
    value1: Decimal = Decimal("0")
    value2: Decimal = Decimal("0")

    @property
    def donor_id(self) -> str:
        return self.donor.id

    @property
    def recurrent(self) -> bool:
        """A donor is recurrent when both previous years have donations."""
        return self.value1 > 0 and self.value2 > 0


@dataclass
class Model182Stats:
    """Aggregate figures of a Model 182 calculation."""

    total_donors: int = 0
    total_amount: Decimal = Decimal("0")
    excluded_returns: int = 0
    excluded_amount: Decimal = Decimal("0")


@dataclass
class Model182Result:
    """Result of the Model 182 donor totals calculation."""

    year: int
    donor_totals: list[DonorTotals] = field(default_factory=list)
    stats: Model182Stats = field(default_factory=Model182Stats)
