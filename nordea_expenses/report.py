from __future__ import annotations

from typing import Sequence, TextIO

from .aggregate import MonthBreakdown
from .models import Account, RecurrentPayment, Summary, Transaction
from .recurrent import key_width
from .style import BOLD, UNDERLINE, Emphasize

ACROSS_ACCOUNTS_RULE = "------------------------"


def _line(out: TextIO, text: str = "") -> None:
    out.write(f"{text}\n")


def write_section_separator(out: TextIO) -> None:
    _line(out)
    _line(out)


def write_account_details(out: TextIO, account: Account) -> None:
    _line(out, f"     Account: {account.number}")
    _line(out, f"Transactions: {len(account.transactions)}")
    if account.transactions:
        first = account.transactions[0]
        last = account.transactions[-1]
        _line(out, f"      Period: {first.entry_date} - {last.entry_date}")


def write_summary(out: TextIO, summary: Summary, emphasize: Emphasize) -> None:
    _line(out, f"      Income: {summary.income:+.2f}")
    _line(out, f"    Expenses: -{summary.expenses:.2f}")
    _line(out, "      " + emphasize(f"Profit: {summary.profit:+.2f}", UNDERLINE))


def write_account_summary(out: TextIO, summary: Summary, emphasize: Emphasize) -> None:
    _line(out, emphasize("Summary:", UNDERLINE))
    _line(out)
    write_summary(out, summary, emphasize)


def format_transaction(t: Transaction) -> str:
    return f"        {t.entry_date}: {t.amount:+.2f} ({t.message_text})"


def format_transaction_short(t: Transaction) -> str:
    return f"        {t.entry_date}: {-t.amount:.2f}"


def write_month(out: TextIO, breakdown: MonthBreakdown, emphasize: Emphasize) -> None:
    _line(out)
    _line(out, "    " + emphasize(f"{breakdown.month}:", BOLD))

    for t in breakdown.income:
        _line(out, format_transaction(t))
    if breakdown.income:
        _line(out)

    for t in breakdown.shown_expenses:
        _line(out, format_transaction(t))

    _line(out)
    write_summary(out, breakdown.summary, emphasize)


def write_months(out: TextIO, breakdowns: Sequence[MonthBreakdown], emphasize: Emphasize) -> None:
    _line(out, emphasize("Months:", UNDERLINE))
    for breakdown in breakdowns:
        write_month(out, breakdown, emphasize)


def write_recurrent(out: TextIO, payments: Sequence[RecurrentPayment], emphasize: Emphasize) -> None:
    _line(out, emphasize("Recurrent payments:", UNDERLINE))
    _line(out)

    width = key_width(payments)
    for payment in payments:
        padding = " " * (width - len(payment.key))
        total = emphasize(f"Total: {-payment.total_spent:.2f}", UNDERLINE)
        _line(out, f"    {emphasize(payment.key, BOLD)}: {padding} {total}")
        for t in payment.transactions:
            _line(out, format_transaction_short(t))


def write_combined_summary(out: TextIO, total: Summary, emphasize: Emphasize) -> None:
    _line(out, ACROSS_ACCOUNTS_RULE)
    _line(out, emphasize("Summary across accounts:", UNDERLINE))
    write_summary(out, total, emphasize)
    _line(out, ACROSS_ACCOUNTS_RULE)
