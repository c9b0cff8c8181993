from __future__ import annotations

import logging
import re
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from .errors import AmountError, HeaderError
from .models import Account, Transaction

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"
HEADER_LINES = 4
MIN_FIELDS = 13
UNKNOWN_ACCOUNT = "Unknown"

_AMOUNT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def parse_amount(value: str) -> Decimal | None:
    text = value.replace(",", ".")
    if not _AMOUNT_RE.fullmatch(text):
        return None
    return Decimal(text)


def parse_row(fields: list[str], label: str, line_no: int) -> Transaction:
    amount = parse_amount(fields[3])
    if amount is None:
        raise AmountError(label, line_no, fields[3])

    return Transaction(
        entry_date=fields[0],
        value_date=fields[1],
        payment_date=fields[2],
        amount=amount,
        beneficiary=fields[4],
        account_number=fields[5],
        bic=fields[6],
        transaction=fields[7],
        reference_number=fields[8],
        originator_reference=fields[9],
        message=fields[10],
        card_number=fields[11],
        receipt=fields[12],
    )


def parse_lines(lines: Iterable[str], label: str, out: TextIO) -> Account:
    out.write(f"Reading file {label}\n")

    number = UNKNOWN_ACCOUNT
    records: list[Transaction] = []
    skipped = 0

    for idx, line in enumerate(lines):
        line = _strip_newline(line)
        cols = line.split(FIELD_SEPARATOR)
        if idx == 0:
            if len(cols) < 2:
                raise HeaderError(label, idx + 1, line)
            number = cols[1]
            continue
        if idx < HEADER_LINES:
            continue
        if len(cols) < MIN_FIELDS:
            skipped += 1
            logger.debug("%s:%d: skipping row with %d fields", label, idx + 1, len(cols))
            continue
        records.append(parse_row(cols, label, idx + 1))

    logger.debug("%s: parsed %d transactions, skipped %d rows", label, len(records), skipped)
    return Account(number=number, transactions=tuple(records))


def read_lines(path: Path, encoding: str = "utf-8") -> Iterator[str]:
    # Opened on first iteration so the progress line precedes any I/O error.
    # Only \n ends a line; a lone \r stays inside its field.
    with path.open("r", encoding=encoding, newline="\n") as handle:
        yield from handle


def parse_file(path: str | Path, out: TextIO, encoding: str = "utf-8") -> Account:
    lines = read_lines(Path(path), encoding=encoding)
    try:
        return parse_lines(lines, str(path), out)
    finally:
        lines.close()
