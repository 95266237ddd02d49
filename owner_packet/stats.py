from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict, List

from .models import CategorizedTransaction, PacketSummary, PropertyPageResult


def _zero() -> Decimal:
    return Decimal("0.00")


def summarize(
    properties: List[PropertyPageResult], transactions: List[CategorizedTransaction]
) -> PacketSummary:
    """Document totals.  Distributions are kept out of ``total_expenses``."""
    income = expenses = distributions = _zero()
    for t in transactions:
        if t.is_income:
            income += t.cash_in
        if t.is_expense and not t.is_distribution:
            expenses += t.cash_out
        if t.is_distribution:
            distributions += t.cash_out
    return PacketSummary(
        total_properties=len(properties),
        total_transactions=len(transactions),
        total_income=income,
        total_expenses=expenses,
        total_distributions=distributions,
    )


def _rollups(
    transactions: List[CategorizedTransaction],
    key: Callable[[CategorizedTransaction], str],
) -> Dict[str, Dict[str, Decimal]]:
    out: Dict[str, Dict[str, Decimal]] = {}
    for t in transactions:
        sums = out.setdefault(
            key(t), {"income": _zero(), "expenses": _zero(), "distributions": _zero()}
        )
        if t.is_income:
            sums["income"] += t.cash_in
        if t.is_distribution:
            sums["distributions"] += t.cash_out
        elif t.is_expense:
            sums["expenses"] += t.cash_out
    return out


def category_rollups(
    transactions: List[CategorizedTransaction],
) -> Dict[str, Dict[str, Decimal]]:
    """Returns {category: {"income", "expenses", "distributions"}}."""
    return _rollups(transactions, lambda t: t.category)


def property_rollups(
    transactions: List[CategorizedTransaction],
) -> Dict[str, Dict[str, Decimal]]:
    """Returns {short address: {...}}; unattributed rows roll up under ""."""
    return _rollups(transactions, lambda t: t.property_address)
