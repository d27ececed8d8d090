"""Data models for fiscal rules."""

from .transaction import (
    Transaction,
    TransactionType,
    DonationStatus,
    DonorType,
    Donor,
    DonorNetResult,
    DonorTotals,
    Model182Stats,
    Model182Result,
)

__all__ = [
    "Transaction",
    "TransactionType",
    "DonationStatus",
    "DonorType",
    "Donor",
    "DonorNetResult",
    "DonorTotals",
    "Model182Stats",
    "Model182Result",
]
