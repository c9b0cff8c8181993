from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .models import ZERO, Summary, Transaction

TOP_EXPENSES = 10


@dataclass(frozen=True)
class MonthBreakdown:
    month: str
    income: tuple[Transaction, ...]
    expenses: tuple[Transaction, ...]
    shown_expenses: tuple[Transaction, ...]
    summary: Summary

    @property
    def hidden_expenses(self) -> int:
        return len(self.expenses) - len(self.shown_expenses)


def summarize(transactions: Iterable[Transaction]) -> Summary:
    income = ZERO
    expenses = ZERO
    for t in transactions:
        if t.is_income:
            income += t.amount
        elif t.is_expense:
            expenses += -t.amount
    return Summary(income=income, expenses=expenses)


def months(transactions: Iterable[Transaction]) -> list[str]:
    # Plain string order on MM.YYYY, most recent string first.
    return sorted({t.month for t in transactions}, reverse=True)


def month_breakdown(
    transactions: Sequence[Transaction],
    month: str,
    top_expenses: int = TOP_EXPENSES,
) -> MonthBreakdown:
    ordered = sorted(t for t in transactions if t.month == month)

    income = tuple(reversed([t for t in ordered if t.is_income]))
    expenses = tuple(t for t in ordered if t.is_expense)

    return MonthBreakdown(
        month=month,
        income=income,
        expenses=expenses,
        shown_expenses=expenses[:top_expenses],
        summary=summarize(income + expenses),
    )


def breakdown_by_month(
    transactions: Sequence[Transaction],
    top_expenses: int = TOP_EXPENSES,
) -> list[MonthBreakdown]:
    return [month_breakdown(transactions, month, top_expenses) for month in months(transactions)]
