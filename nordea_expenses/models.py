from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import total_ordering

ZERO = Decimal("0")


@total_ordering
@dataclass(frozen=True, eq=False)
class Transaction:
    entry_date: str
    value_date: str
    payment_date: str
    amount: Decimal
    beneficiary: str
    account_number: str
    bic: str
    transaction: str
    reference_number: str
    originator_reference: str
    message: str
    card_number: str
    receipt: str

    @property
    def month(self) -> str:
        # DD.MM.YYYY -> MM.YYYY
        return self.entry_date[3:]

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def counterparty(self) -> str:
        return self.beneficiary if self.beneficiary else self.transaction

    @property
    def message_text(self) -> str:
        beneficiary = f"{self.beneficiary} -" if self.beneficiary else ""
        return f"{beneficiary} {self.transaction} {self.message}".strip()

    def sort_key(self) -> tuple[Decimal, str]:
        return (self.amount, self.entry_date)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.entry_date == other.entry_date and self.amount == other.amount

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash((self.entry_date, self.amount))


@dataclass(frozen=True)
class Account:
    number: str
    transactions: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class Summary:
    income: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def profit(self) -> Decimal:
        return self.income - self.expenses

    def __add__(self, other: Summary) -> Summary:
        if not isinstance(other, Summary):
            return NotImplemented
        return Summary(income=self.income + other.income, expenses=self.expenses + other.expenses)


@dataclass(frozen=True)
class RecurrentPayment:
    key: str
    total_spent: Decimal
    transactions: tuple[Transaction, ...] = ()

    @property
    def count(self) -> int:
        return len(self.transactions)
