"""Decide which table rows are transactions and split them into columns.

A ledger row on the statement reads::

    Date | Payee/Payer | Type | Reference | Description | Cash In | Cash Out | Balance

Empty cells produce no fragment at all, so the amount columns have to be
inferred from how many amounts a row has, their x positions and the
transaction type.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import List, Optional, Tuple

from .fields import DATE_SHAPE_RE, is_money_fragment, parse_date, parse_money
from .layout import row_to_text
from .models import PositionedFragment, Row, Transaction

# Horizontal distance between two amounts beyond which the left one is taken
# to sit in the Cash In column (the Cash Out cell being empty).  Tuned on the
# observed statement's column widths.
INCOME_GAP = 100

MIN_FRAGMENTS = 3

KNOWN_TYPES = [
    "rent income",
    "management fees",
    "bill",
    "owner distribution",
    "beginning cash balance",
    "ending cash balance",
    "deposit",
    "credit",
    "late fee",
    "nsf fee",
    "security deposit",
    "prepaid rent",
]

INCOME_WORDS = ["rent", "income", "deposit", "late fee", "credit", "prepaid"]

# Types that never land in Cash In, whatever the gap says
EXPENSE_WORDS = ["bill", "management", "owner"]

BALANCE_ECHOES = ["beginning cash balance", "ending cash balance"]

_NOISE_WORDS = ["page ", "total"]

# Reference column values: 1042, ACH123, #20411
_REFERENCE_PATTERNS = [
    re.compile(r"^\d+$"),
    re.compile(r"^[A-Z]{2,4}\d+"),
    re.compile(r"^#?\d{4,}"),
]


def is_reference(text: str) -> bool:
    return any(p.match(text) for p in _REFERENCE_PATTERNS)


def is_income_type(tx_type: str) -> bool:
    lower = tx_type.lower()
    return any(w in lower for w in INCOME_WORDS)


def admits_row(row: Row, text: str) -> bool:
    """Transaction admission test: enough fragments, no footer words, a date first."""
    if len(row.fragments) < MIN_FRAGMENTS:
        return False
    lower = text.lower()
    if not text or any(w in lower for w in _NOISE_WORDS):
        return False
    first = row.fragments[0].text
    return bool(parse_date(first) or DATE_SHAPE_RE.match(first))


def split_text_fields(
    pool: List[PositionedFragment], full_text: str
) -> Tuple[str, str, List[str]]:
    """Return ``(type, payee, extra_description_parts)`` from the text pool."""
    tx_type = ""
    payee = ""
    extra: List[str] = []
    for frag in pool:
        if is_reference(frag.text):
            continue
        lower = frag.text.lower()
        if not tx_type and any(t in lower for t in KNOWN_TYPES):
            tx_type = frag.text
        elif not payee:
            payee = frag.text
        else:
            extra.append(frag.text)

    if not tx_type:
        lower = full_text.lower()
        tx_type = next((t for t in KNOWN_TYPES if t in lower), "")
    return tx_type, payee, extra


def assign_columns(
    amounts: List[PositionedFragment], tx_type: str, income_gap: float = INCOME_GAP
) -> Tuple[Decimal, Decimal, Decimal]:
    """Map amounts (any order) to ``(cash_in, cash_out, balance)``."""
    zero = Decimal("0")
    ordered = sorted(amounts, key=lambda f: f.x)
    values = [parse_money(f.text) for f in ordered]
    income = is_income_type(tx_type)

    if len(ordered) >= 3:
        return values[0], values[1], values[2]

    if len(ordered) == 2:
        balance = values[1]
        if income:
            return values[0], zero, balance
        gap = ordered[1].x - ordered[0].x
        lower = tx_type.lower()
        if gap > income_gap and not any(w in lower for w in EXPENSE_WORDS):
            return values[0], zero, balance
        return zero, values[0], balance

    if len(ordered) == 1:
        return (values[0], zero, zero) if income else (zero, values[0], zero)

    return zero, zero, zero


def classify_row(
    row: Row, text: Optional[str] = None, income_gap: float = INCOME_GAP
) -> Optional[Transaction]:
    """Build a :class:`Transaction` from a table row, or ``None`` for noise."""
    if text is None:
        text = row_to_text(row)
    if not admits_row(row, text):
        return None

    date_frag = row.fragments[0]
    amounts: List[PositionedFragment] = []
    pool: List[PositionedFragment] = []
    for frag in row.fragments[1:]:
        if is_money_fragment(frag.text):
            amounts.append(frag)
        else:
            pool.append(frag)

    if not amounts:
        return None

    tx_type, payee, extra = split_text_fields(pool, text)

    lower = text.lower()
    type_lower = tx_type.lower()
    if any(e in type_lower or e in lower for e in BALANCE_ECHOES):
        return None

    cash_in, cash_out, balance = assign_columns(amounts, tx_type, income_gap)

    display = payee or tx_type or "Unknown"
    extra_text = " ".join(extra)
    return Transaction(
        date=parse_date(date_frag.text),
        payee=payee,
        type=tx_type,
        description=f"{display} - {extra_text}" if extra_text else display,
        cash_in=abs(cash_in),
        cash_out=abs(cash_out),
        balance=balance,
    )
