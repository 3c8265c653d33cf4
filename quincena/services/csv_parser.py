"""CSV statement parsing.

Handles the generic ``fecha,concepto,monto`` layout and the BBVA layout with
separate ``cargo`` / ``abono`` columns. Rows with an unreadable date or amount are
skipped rather than failing the whole file.
"""

import datetime as dt
import io
import math
import re

import pandas as pd

from quincena.core.models import Transaction
from quincena.core.utils import get_logger

logger = get_logger("premios-quincena.csv")

DATE_HEADERS = ("fecha", "date")
DESCRIPTION_HEADERS = ("concepto", "descripci", "description")
AMOUNT_HEADERS = ("monto", "importe", "amount")
CHARGE_HEADERS = ("cargo",)
DEPOSIT_HEADERS = ("abono",)
MIN_ROWS = 2  # header plus at least one data row

_DMY_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_HEADER_JUNK_RE = re.compile(r"[^a-záéíóúüñ\s]")
_REF_RE = re.compile(r"\bREF\.?\s*:?\s*\S+", re.IGNORECASE)
_LONG_NUMBER_RE = re.compile(r"\b\w*\d{6,}\w*\b")
_PUNCT_RE = re.compile(r"[|*#_]")
_SPACES_RE = re.compile(r"\s{2,}")


def normalize_date(value: str) -> dt.date | None:
    """Parse ``DD/MM/YYYY``, ``D-M-YYYY`` or ``YYYY-MM-DD``; None for anything else."""
    value = value.strip()
    try:
        if match := _DMY_RE.match(value):
            day, month, year = (int(g) for g in match.groups())
            return dt.date(year, month, day)
        if match := _ISO_RE.match(value):
            year, month, day = (int(g) for g in match.groups())
            return dt.date(year, month, day)
    except ValueError:
        return None
    return None


def parse_amount(value: str) -> float | None:
    """Parse ``$1,234.50``-style amounts; None when not numeric."""
    cleaned = re.sub(r"[$\s]", "", value).replace(",", "")
    try:
        amount = float(cleaned)
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def clean_description(value: str) -> str:
    """Drop reference codes and separator noise from a bank description."""
    value = _REF_RE.sub("", value)
    value = _LONG_NUMBER_RE.sub("", value)
    value = _PUNCT_RE.sub(" ", value)
    value = _SPACES_RE.sub(" ", value)
    return value.strip()


def _normalize_header(value: str) -> str:
    return _HEADER_JUNK_RE.sub("", value.replace("\ufeff", "").lower())


def _find_column(header: list[str], patterns: tuple[str, ...]) -> int:
    for idx, name in enumerate(header):
        if any(p in name for p in patterns):
            return idx
    return -1


def _read_rows(text: str) -> list[list[str]]:
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []
    sep = ";" if lines[0].count(";") > lines[0].count(",") else ","
    data_frame = pd.read_csv(
        io.StringIO("\n".join(lines)),
        sep=sep,
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        on_bad_lines="skip",
    ).fillna("")
    return [[str(cell).strip() for cell in row] for row in data_frame.to_numpy().tolist()]


def _cell(row: list[str], idx: int) -> str:
    return row[idx] if 0 <= idx < len(row) else ""


def parse_csv(text: str) -> list[Transaction]:
    """Parse a bank statement CSV into transactions."""
    rows = _read_rows(text)
    if len(rows) < MIN_ROWS:
        return []

    header = [_normalize_header(h) for h in rows[0]]
    date_col = _find_column(header, DATE_HEADERS)
    desc_col = _find_column(header, DESCRIPTION_HEADERS)
    amount_col = _find_column(header, AMOUNT_HEADERS)
    charge_col = _find_column(header, CHARGE_HEADERS)
    deposit_col = _find_column(header, DEPOSIT_HEADERS)
    if date_col < 0:
        logger.warning(f"No date column found in CSV header: {rows[0]}")
        return []

    is_bbva = charge_col >= 0 and deposit_col >= 0
    logger.info(f"Parsing {len(rows) - 1} CSV rows ({'cargo/abono' if is_bbva else 'single amount'} layout)")

    transactions: list[Transaction] = []
    for row in rows[1:]:
        date = normalize_date(_cell(row, date_col))
        if date is None:
            continue

        if is_bbva:
            charge = parse_amount(_cell(row, charge_col) or "0") or 0.0
            deposit = parse_amount(_cell(row, deposit_col) or "0") or 0.0
            if not charge and not deposit:
                continue
            amount = deposit if deposit > 0 else -charge
        else:
            if amount_col < 0:
                continue
            amount = parse_amount(_cell(row, amount_col))
            if amount is None:
                continue

        description = _cell(row, desc_col) if desc_col >= 0 else _cell(row, 1)
        transactions.append(Transaction(date=date, amount=amount, description=clean_description(description)))

    logger.info(f"Parsed {len(transactions)} transactions from CSV")
    return transactions
