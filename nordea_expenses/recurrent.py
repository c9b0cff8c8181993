from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from .models import ZERO, RecurrentPayment, Transaction

MIN_OCCURRENCES = 2


def group_expenses(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    grouped: dict[str, list[Transaction]] = defaultdict(list)
    for t in transactions:
        if not t.is_expense:
            continue
        grouped[t.counterparty].append(t)
    return dict(grouped)


def detect_recurrent(transactions: Iterable[Transaction]) -> list[RecurrentPayment]:
    recurrent: list[RecurrentPayment] = []
    for key, group in group_expenses(transactions).items():
        if len(group) < MIN_OCCURRENCES:
            continue
        total_spent = sum((t.amount for t in group), ZERO)
        recurrent.append(RecurrentPayment(key=key, total_spent=total_spent, transactions=tuple(group)))

    recurrent.sort(key=lambda r: (r.total_spent, r.key))
    return recurrent


def key_width(payments: Sequence[RecurrentPayment]) -> int:
    return max((len(p.key) + 2 for p in payments), default=0)
