"""
CSV parsers for transaction and donor exports.
Rows are converted to the fiscal projections consumed by the rules.
"""

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional
import logging

import pandas as pd

from ..config import CsvInputConfig, FiscalConfig
from ..models.transaction import Donor, DonorType, Transaction
from ..rules.import_types import normalize_import_type
from ..utils.exceptions import DonorParseError, TransactionParseError

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "y"}


def _read_csv(file_path: Path, input_config: CsvInputConfig) -> pd.DataFrame:
    # Everything as text so empty cells stay "" and ids keep leading zeros
    return pd.read_csv(
        file_path,
        encoding=input_config.encoding,
        delimiter=input_config.delimiter,
        dtype=str,
        keep_default_na=False,
    )


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _column(row: pd.Series, column_mappings: dict[str, str], name: str) -> Any:
    return row.get(column_mappings.get(name, name))


def parse_bool(value: Any) -> bool:
    """Interpret CSV flags: true/1/yes (any case) are True, anything else False."""
    text = _clean(value)
    return text is not None and text.lower() in TRUE_VALUES


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse a signed amount string.

    Accepts a leading minus sign or accounting parentheses and ignores
    currency symbols and thousands separators.

    Returns:
        Decimal amount, or None when the value is empty, unparseable or
        not finite (NaN, Infinity)
    """
    text = _clean(value)
    if text is None:
        return None

    negative = text.startswith("(") and text.endswith(")")
    cleaned = text.strip("()").replace("$", "").replace("€", "").replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not amount.is_finite():
        return None

    return -amount if negative else amount


class TransactionCsvParser:
    """
    Parser for transaction CSV exports.

    Each row's transaction type is normalized at this boundary so that
    unknown values never reach the fiscal rules.
    """

    def __init__(self, config: FiscalConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config
        self.input_config = config.input.transactions
        self.column_mappings = self.input_config.column_mappings

    def parse_file(self, file_path: Path) -> list[Transaction]:
        """
        Parse a transactions CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of transactions; invalid rows are skipped

        Raises:
            TransactionParseError: If the file cannot be read
        """
        logger.info(f"Parsing transactions CSV file: {file_path}")

        try:
            df = _read_csv(file_path, self.input_config)
        except Exception as e:
            logger.error(f"Failed to read CSV file: {e}")
            raise TransactionParseError(f"Failed to read CSV file: {e}") from e

        transactions = self._process_dataframe(df)
        logger.info(f"Extracted {len(transactions)} transactions from {file_path.name}")

        return transactions

    def _process_dataframe(self, df: pd.DataFrame) -> list[Transaction]:
        transactions: list[Transaction] = []

        for idx, row in df.iterrows():
            txn = self._normalize_row(row, int(idx))
            if txn:
                transactions.append(txn)

        return transactions

    def _normalize_row(self, row: pd.Series, idx: int) -> Optional[Transaction]:
        """
        Convert a DataFrame row to a Transaction.

        Args:
            row: Pandas Series representing a row
            idx: Row index

        Returns:
            Transaction, or None if the row has no date or amount
        """
        mappings = self.column_mappings
        txn_date = _clean(_column(row, mappings, "date"))
        if not txn_date:
            logger.warning(f"Row {idx}: Missing date, skipping")
            return None

        raw_amount = _column(row, mappings, "amount")
        amount = parse_amount(raw_amount)
        if amount is None:
            logger.warning(f"Row {idx}: Invalid amount {raw_amount!r}, skipping")
            return None

        raw_type = _clean(_column(row, mappings, "transaction_type"))
        transaction_type = normalize_import_type(raw_type)
        if raw_type is not None and transaction_type.value != raw_type:
            logger.debug(f"Row {idx}: Unknown transaction type {raw_type!r}, using 'normal'")

        return Transaction(
            id=_clean(_column(row, mappings, "id")) or f"row-{idx}",
            date=txn_date,
            amount=amount,
            transaction_type=transaction_type,
            donation_status=_clean(_column(row, mappings, "donation_status")),
            archived_at=_clean(_column(row, mappings, "archived_at")),
            is_remittance=parse_bool(_column(row, mappings, "is_remittance")),
            is_remittance_item=parse_bool(_column(row, mappings, "is_remittance_item")),
            is_split=parse_bool(_column(row, mappings, "is_split")),
            source=_clean(_column(row, mappings, "source")),
            contact_id=_clean(_column(row, mappings, "contact_id")),
        )


class DonorCsvParser:
    """Parser for donor CSV exports."""

    def __init__(self, config: FiscalConfig):
        self.config = config
        self.input_config = config.input.donors
        self.column_mappings = self.input_config.column_mappings

    def parse_file(self, file_path: Path) -> list[Donor]:
        """
        Parse a donors CSV file.

        Raises:
            DonorParseError: If the file cannot be read
        """
        logger.info(f"Parsing donors CSV file: {file_path}")

        try:
            df = _read_csv(file_path, self.input_config)
        except Exception as e:
            logger.error(f"Failed to read CSV file: {e}")
            raise DonorParseError(f"Failed to read CSV file: {e}") from e

        mappings = self.column_mappings
        donors: list[Donor] = []
        for idx, row in df.iterrows():
            donor_id = _clean(_column(row, mappings, "id"))
            if not donor_id:
                logger.warning(f"Row {idx}: Missing donor id, skipping")
                continue

            raw_type = (_clean(_column(row, mappings, "donor_type")) or "").lower()
            donors.append(
                Donor(
                    id=donor_id,
                    name=_clean(_column(row, mappings, "name")) or "",
                    tax_id=_clean(_column(row, mappings, "tax_id")) or "",
                    zip_code=_clean(_column(row, mappings, "zip_code")) or "",
                    province=_clean(_column(row, mappings, "province")),
                    donor_type=(
                        DonorType.COMPANY if raw_type == DonorType.COMPANY.value
                        else DonorType.INDIVIDUAL
                    ),
                )
            )

        logger.info(f"Extracted {len(donors)} donors from {file_path.name}")
        return donors
