"""Locate the address header, cash summary block and ledger on a property page."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .classifier import INCOME_GAP, classify_row
from .fields import find_money
from .layout import row_to_text
from .models import CashSummary, PropertyAddress, PropertyPageResult, Row, Transaction

logger = logging.getLogger(__name__)

ADDRESS_SCAN_ROWS = 8
ADDRESS_FALLBACK_ROWS = 6
SUMMARY_SCAN_ROWS = 9

# "123 Main St - Dulin - 123 Main St, Abilene, TX 79605"
_header_re = re.compile(r"^(.+?)\s*[-–]\s*\w+\s*[-–]\s*(.+)")
_street_start_re = re.compile(r"^\d+\s+\w")
# Whole words, abbreviated or spelled out: "St", "Street", "Ave", "Avenue"
_street_suffix_re = re.compile(
    r"\b(?:st(?:reet)?|r(?:oa)?d|ave(?:nue)?|dr(?:ive)?|ln|lane|c(?:our)?t"
    r"|blvd|boulevard|way|pl(?:ace)?|cir(?:cle)?|loop|pkwy|parkway)\b",
    re.IGNORECASE,
)
_short_split_re = re.compile(r"[-–,]")

# Label patterns for the "Property Cash Summary" block, in field order
_SUMMARY_LABELS = [
    ("beginning_balance", re.compile(r"beginning\s*cash", re.IGNORECASE)),
    ("cash_in", re.compile(r"cash\s*in", re.IGNORECASE)),
    ("cash_out", re.compile(r"cash\s*out", re.IGNORECASE)),
    ("management_fees", re.compile(r"management\s*fees?", re.IGNORECASE)),
    ("owner_disbursements", re.compile(r"owner\s*disburse", re.IGNORECASE)),
    ("ending_balance", re.compile(r"ending\s*cash", re.IGNORECASE)),
]
_cash_out_re = _SUMMARY_LABELS[2][1]


def extract_property_address(rows: List[Row]) -> Optional[PropertyAddress]:
    """Find the property header near the top of the page, if any."""
    texts = [row_to_text(r) for r in rows[:ADDRESS_SCAN_ROWS]]
    for text in texts:
        m = _header_re.match(text)
        if m:
            return PropertyAddress(
                short_address=m.group(1).strip(), full_address=m.group(2).strip()
            )

    # Fallback: a line that starts like a street address
    for text in texts[:ADDRESS_FALLBACK_ROWS]:
        if _street_start_re.match(text) and _street_suffix_re.search(text):
            return PropertyAddress(
                short_address=_short_split_re.split(text)[0].strip(),
                full_address=text,
            )
    return None


def extract_cash_summary(rows: List[Row], start: int) -> CashSummary:
    """Read the summary fields from the rows after the header at ``start``."""
    summary = CashSummary()
    for row in rows[start + 1 : start + 1 + SUMMARY_SCAN_ROWS]:
        text = row_to_text(row)
        for name, label in _SUMMARY_LABELS:
            if not label.search(text):
                continue
            if name == "cash_in" and _cash_out_re.search(text):
                continue
            amount = find_money(text)
            if amount is not None:
                setattr(summary, name, amount)
    return summary


def is_table_header(text: str) -> bool:
    lower = text.lower()
    return ("payee" in lower and "type" in lower) or "payee/payer" in lower


def parse_property_page(
    rows: List[Row], income_gap: float = INCOME_GAP, page_number: int = 0
) -> PropertyPageResult:
    """Parse one property detail page into address, cash summary and ledger."""
    address = extract_property_address(rows)
    cash_summary = CashSummary()
    transactions: List[Transaction] = []
    in_table = False

    for i, row in enumerate(rows):
        text = row_to_text(row)

        if "property cash summary" in text.lower():
            cash_summary = extract_cash_summary(rows, i)
            continue

        if is_table_header(text):
            in_table = True
            continue

        if not in_table:
            continue

        tx = classify_row(row, text, income_gap)
        if tx is not None:
            transactions.append(tx)

    logger.debug(
        "page %d: address=%s transactions=%d",
        page_number,
        address.short_address if address else None,
        len(transactions),
    )
    return PropertyPageResult(
        property_address=address,
        cash_summary=cash_summary,
        transactions=transactions,
        page_number=page_number,
    )
