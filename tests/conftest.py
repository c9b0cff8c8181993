"""
Pytest configuration and shared fixtures.
"""
from decimal import Decimal
from pathlib import Path

import pytest

from nordea_expenses.models import Transaction
from nordea_expenses.style import markup_emphasize

DATA_DIR = Path(__file__).parent / "data"


def make_transaction(
    entry_date: str,
    amount: str,
    beneficiary: str = "",
    transaction: str = "Card purchase",
    message: str = "",
) -> Transaction:
    return Transaction(
        entry_date=entry_date,
        value_date=entry_date,
        payment_date=entry_date,
        amount=Decimal(amount),
        beneficiary=beneficiary,
        account_number="",
        bic="",
        transaction=transaction,
        reference_number="",
        originator_reference="",
        message=message,
        card_number="",
        receipt="",
    )


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def emphasize():
    return markup_emphasize


@pytest.fixture
def may_transactions():
    """The six transactions of the single month statement, in file order."""
    return [
        make_transaction("02.05.2018", "-8.46", "TWILIO", message="USD          10,01 8778894546 KURSSI: 1,1832"),
        make_transaction("02.05.2018", "-2.60", "Iso Tiger Oy", message="HELSINKI"),
        make_transaction("03.05.2018", "-3.80", "RTE Kahvilat Oy", message="HELSINKI"),
        make_transaction("12.05.2018", "-2.60", "Iso Tiger Oy", message="HELSINKI"),
        make_transaction("14.05.2018", "200.00", "Employer", transaction="Deposit", message="HELSINKI"),
        make_transaction("23.05.2018", "-3.80", "RTE Kahvilat Oy", message="HELSINKI"),
    ]


@pytest.fixture
def txn():
    """Factory for transactions with only the reported fields set."""
    return make_transaction
