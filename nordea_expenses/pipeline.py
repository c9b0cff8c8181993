from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence, TextIO

from .aggregate import TOP_EXPENSES, breakdown_by_month, summarize
from .errors import ReportError
from .models import Account, Summary
from .parser import parse_file, parse_lines
from .recurrent import detect_recurrent
from .report import (
    write_account_details,
    write_account_summary,
    write_combined_summary,
    write_months,
    write_recurrent,
    write_section_separator,
)
from .style import Emphasize


class RedactDigitsFilter(logging.Filter):
    def __init__(self, enabled: bool) -> None:
        super().__init__()
        self.enabled = enabled
        self.pattern = re.compile(r"\d{6,}")

    def filter(self, record: logging.LogRecord) -> bool:
        if self.enabled:
            msg = str(record.getMessage())
            record.msg = self.pattern.sub("[REDACTED]", msg)
            record.args = ()
        return True


def build_logger(level: str | int = logging.WARNING, redact_logs: bool = False) -> logging.Logger:
    logger = logging.getLogger("nordea_expenses")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    for handler in logger.handlers:
        handler.filters = [RedactDigitsFilter(redact_logs)]
    return logger


@dataclass
class RunResult:
    total: Summary = field(default_factory=Summary)
    processed: int = 0
    failures: list[tuple[str, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def write_report(
    out: TextIO,
    account: Account,
    emphasize: Emphasize,
    top_expenses: int = TOP_EXPENSES,
    logger: logging.Logger | None = None,
) -> Summary:
    logger = logger or logging.getLogger("nordea_expenses")
    transactions = account.transactions

    write_section_separator(out)
    write_account_details(out, account)
    write_section_separator(out)

    summary = summarize(transactions)
    write_account_summary(out, summary, emphasize)
    write_section_separator(out)

    breakdowns = breakdown_by_month(transactions, top_expenses=top_expenses)
    for breakdown in breakdowns:
        if breakdown.hidden_expenses:
            logger.debug("%s: %d expenses not listed", breakdown.month, breakdown.hidden_expenses)
    write_months(out, breakdowns, emphasize)
    write_section_separator(out)

    payments = detect_recurrent(transactions)
    logger.debug("Account %s: %d recurrent payments", account.number, len(payments))
    write_recurrent(out, payments, emphasize)

    logger.info(
        "Account %s: income %.2f, expenses %.2f, profit %.2f",
        account.number,
        summary.income,
        summary.expenses,
        summary.profit,
    )
    return summary


def process_lines(
    lines: Iterable[str],
    label: str,
    out: TextIO,
    emphasize: Emphasize,
    top_expenses: int = TOP_EXPENSES,
    logger: logging.Logger | None = None,
) -> Summary:
    account = parse_lines(lines, label, out)
    return write_report(out, account, emphasize, top_expenses=top_expenses, logger=logger)


def process_file(
    path: str | Path,
    out: TextIO,
    emphasize: Emphasize,
    top_expenses: int = TOP_EXPENSES,
    encoding: str = "utf-8",
    logger: logging.Logger | None = None,
) -> Summary:
    logger = logger or logging.getLogger("nordea_expenses")
    account = parse_file(path, out, encoding=encoding)
    logger.debug("Parsed %s: account %s, %d transactions", path, account.number, len(account.transactions))
    return write_report(out, account, emphasize, top_expenses=top_expenses, logger=logger)


def run(
    paths: Sequence[str | Path],
    out: TextIO,
    emphasize: Emphasize,
    top_expenses: int = TOP_EXPENSES,
    encoding: str = "utf-8",
    fail_fast: bool = True,
    logger: logging.Logger | None = None,
) -> RunResult:
    logger = logger or logging.getLogger("nordea_expenses")
    result = RunResult()

    for path in paths:
        try:
            summary = process_file(
                path,
                out,
                emphasize,
                top_expenses=top_expenses,
                encoding=encoding,
                logger=logger,
            )
        except (OSError, UnicodeDecodeError, ReportError) as exc:
            if fail_fast:
                raise
            logger.error("Skipping %s: %s", path, exc)
            result.failures.append((str(path), exc))
            continue
        result.total += summary
        result.processed += 1

    if len(paths) > 1:
        write_combined_summary(out, result.total, emphasize)

    return result
