"""Keyword categorisation and income/expense/distribution flags."""

from __future__ import annotations

from dataclasses import asdict
from typing import List, Optional, Tuple

from .models import CategorizedTransaction, PropertyAddress, Transaction

DISTRIBUTION = "owner-distribution"
OTHER = "other"

# First match wins; income categories precede expense categories.
RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("rent income", "rent payment", "monthly rent"), "rent"),
    (("late fee", "late charge"), "late-fee"),
    (("security deposit", "deposit refund"), "deposit"),
    (("management fee", "management fees", "mgmt fee"), "management-fee"),
    (("owner distribution", "owner disbursement", "owner draw"), DISTRIBUTION),
    (("plumb", "drain", "pipe", "toilet", "faucet", "water heater"), "plumbing"),
    (("electric", "wiring", "outlet", "breaker", "j and r electric"), "electrical"),
    (("hvac", "air condition", "furnace", "a/c", "heating"), "hvac"),
    (
        ("appliance", "washer", "dryer", "dishwasher", "refriger", "stove", "oven",
         "grit appliance"),
        "appliance",
    ),
    (("pest", "exterminator", "termite", "roach"), "pest-control"),
    (("clean", "janitorial", "maid"), "cleaning"),
    (("landscap", "lawn", "mow", "yard", "tree", "snow"), "landscaping"),
    (("insur",), "insurance"),
    (("tax", "property tax"), "taxes"),
    (("hoa", "association"), "hoa"),
    (("legal", "attorney", "evict"), "legal"),
    (
        ("reliant", "centerpoint", "atmos", "utility", "water bill", "sewer", "trash"),
        "utilities",
    ),
    (("lowe", "home depot", "menard", "ace hardware"), "repair"),
    (("repair", "fix", "replace", "maintenance", "service"), "repair"),
]


def categorize(tx: Transaction) -> str:
    haystack = f"{tx.payee} {tx.type} {tx.description}".lower()
    for keywords, category in RULES:
        if any(k in haystack for k in keywords):
            return category
    return OTHER


def categorize_transaction(
    tx: Transaction,
    address: Optional[PropertyAddress] = None,
    page_number: int = 0,
) -> CategorizedTransaction:
    """Attach property, category and flow flags to a parsed transaction."""
    category = categorize(tx)
    is_income = tx.cash_in > 0 and tx.cash_out == 0
    is_expense = tx.cash_out > 0
    return CategorizedTransaction(
        **asdict(tx),
        property_address=address.short_address if address else "",
        property_full_address=address.full_address if address else "",
        category=category,
        is_income=is_income,
        is_expense=is_expense,
        is_distribution=category == DISTRIBUTION,
        amount=tx.cash_in if is_income else tx.cash_out,
        flow_type="income" if is_income else "expense",
        page_number=page_number,
    )
