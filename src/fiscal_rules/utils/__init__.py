"""Utility modules."""

from .exceptions import (
    FiscalRulesError,
    TransactionParseError,
    DonorParseError,
    ConfigurationError,
    ReportGenerationError,
)
from .logging_config import setup_logging

__all__ = [
    "FiscalRulesError",
    "TransactionParseError",
    "DonorParseError",
    "ConfigurationError",
    "ReportGenerationError",
    "setup_logging",
]
