"""Test fixtures and utilities."""

from pathlib import Path

import pytest

from fiscal_rules.config import FiscalConfig
from fiscal_rules.models.transaction import Donor, DonorType, Transaction, TransactionType

from .helpers import make_tx

SAMPLE_TRANSACTIONS_CSV = """id,date,amount,transactionType,donationStatus,archivedAt,isRemittance,isRemittanceItem,isSplit,source,contactId
tx1,2024-03-01,120.00,donation,,,false,false,false,bank,donor-1
tx2,2024-03-02,-20.00,return,,,false,false,false,bank,donor-1
tx3,2024-03-03,50.00,donation,returned,,false,false,false,bank,donor-2
tx4,2024-03-04,300.00,donation,,,true,false,false,remittance,
tx5,2024-03-04,150.00,donation,,,false,true,false,remittance,donor-2
tx6,2024-03-05,80.00,donation,,2024-04-01T10:00:00Z,false,false,false,bank,donor-1
tx7,2024-03-06,-45.10,bogus,,,false,false,false,bank,
tx8,2024-03-07,,donation,,,false,false,false,bank,donor-1
"""

SAMPLE_DONORS_CSV = """id,name,taxId,zipCode,province,donorType
donor-1,Anna Puig,12345678Z,08001,Barcelona,individual
donor-2,Fundacio Exemple,B12345678,17001,Girona,company
donor-3,No Tax Id,,25001,Lleida,individual
"""


@pytest.fixture
def config() -> FiscalConfig:
    """Default configuration."""
    return FiscalConfig()


@pytest.fixture
def transactions_csv(tmp_path: Path) -> Path:
    path = tmp_path / "transactions.csv"
    path.write_text(SAMPLE_TRANSACTIONS_CSV, encoding="utf-8")
    return path


@pytest.fixture
def donors_csv(tmp_path: Path) -> Path:
    path = tmp_path / "donors.csv"
    path.write_text(SAMPLE_DONORS_CSV, encoding="utf-8")
    return path


@pytest.fixture
def donors() -> list[Donor]:
    return [
        Donor(id="donor-1", name="Anna Puig", tax_id="12345678Z", zip_code="08001"),
        Donor(
            id="donor-2",
            name="Fundacio Exemple",
            tax_id="B12345678",
            zip_code="17001",
            donor_type=DonorType.COMPANY,
        ),
        Donor(id="donor-3", name="No Tax Id", tax_id="   "),
    ]


@pytest.fixture
def donation() -> Transaction:
    return make_tx("100", transaction_type=TransactionType.DONATION, contact_id="donor-1")
