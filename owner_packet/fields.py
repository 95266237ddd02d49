"""Stateless interpreters for money amounts, dates and the statement period."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from .models import StatementPeriod

# Month names as they appear in period headers ("Jan 01, 2026", "January 1, 2026")
MONTHS = {
    "jan": "01", "january": "01",
    "feb": "02", "february": "02",
    "mar": "03", "march": "03",
    "apr": "04", "april": "04",
    "may": "05",
    "jun": "06", "june": "06",
    "jul": "07", "july": "07",
    "aug": "08", "august": "08",
    "sep": "09", "sept": "09", "september": "09",
    "oct": "10", "october": "10",
    "nov": "11", "november": "11",
    "dec": "12", "december": "12",
}

_MONTH_ALT = "|".join(sorted(MONTHS, key=len, reverse=True))

# "Jan 01, 2026 - Jan 31, 2026" with hyphen, en dash or em dash
_period_re = re.compile(
    rf"\b({_MONTH_ALT})\.?\s+(\d{{1,2}}),?\s+(\d{{4}})\s*[-–—]\s*"
    rf"({_MONTH_ALT})\.?\s+(\d{{1,2}}),?\s+(\d{{4}})",
    re.IGNORECASE,
)

_mdy_re = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})$")
_iso_re = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Raw date shape used by the transaction admission test
DATE_SHAPE_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}$")

# First amount on a cash summary line
MONEY_RE = re.compile(r"[\d,]+\.\d{2}")

# A fragment that is nothing but an amount: $1,234.56  (1,234.56)  -12.00
_money_fragment_re = re.compile(r"^[$(\-]?\s*[\d,]+\.\d{2}\)?$")

_strip_money_re = re.compile(r"[$€£¥,\s]")
_number_re = re.compile(r"^-?\d+(?:\.\d+)?$")


def _iso_or_blank(year: str, month: str, day: str) -> str:
    """Format a calendar date as ``YYYY-MM-DD``; ``""`` if no such day exists."""
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return ""


def parse_money(s: Optional[str]) -> Decimal:
    """Parse ``$1,234.56`` / ``(1,234.56)`` style amounts; 0 when unparseable."""
    if not s:
        return Decimal("0")
    cleaned = _strip_money_re.sub("", s)
    negative = cleaned.startswith("(") and cleaned.endswith(")")
    if negative:
        cleaned = cleaned[1:-1]
    if not _number_re.match(cleaned):
        return Decimal("0")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")
    return -value if negative else value


def parse_date(s: Optional[str]) -> str:
    """Return ``YYYY-MM-DD`` for M/D/YY(YY) or ISO input, else ``""``."""
    if not s:
        return ""
    trimmed = s.strip()
    m = _mdy_re.match(trimmed)
    if m:
        month, day, year = m.groups()
        if len(year) == 2:
            year = "20" + year
        return _iso_or_blank(year, month, day)
    if _iso_re.match(trimmed):
        return _iso_or_blank(*trimmed.split("-"))
    return ""


def is_money_fragment(text: str) -> bool:
    return bool(_money_fragment_re.match(re.sub(r"\s", "", text)))


def find_money(text: str) -> Optional[Decimal]:
    m = MONEY_RE.search(text)
    return parse_money(m.group()) if m else None


def detect_statement_period(full_text: str) -> Optional[StatementPeriod]:
    """Find the first "Month D, YYYY - Month D, YYYY" range in the document."""
    m = _period_re.search(full_text or "")
    if not m:
        return None
    m1, d1, y1, m2, d2, y2 = m.groups()
    start_month = MONTHS[m1.lower()]
    end_month = MONTHS[m2.lower()]
    start_date = _iso_or_blank(y1, start_month, d1)
    end_date = _iso_or_blank(y2, end_month, d2)
    if not (start_date and end_date):
        return None
    return StatementPeriod(
        start_date=start_date,
        end_date=end_date,
        month_key=f"{y2}-{end_month}",
        display_label=f"{m1} {d1}, {y1} – {m2} {d2}, {y2}",
    )
