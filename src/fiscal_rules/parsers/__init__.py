"""CSV parsers for transaction and donor exports."""

from .transaction_parser import TransactionCsvParser, DonorCsvParser

__all__ = ["TransactionCsvParser", "DonorCsvParser"]
