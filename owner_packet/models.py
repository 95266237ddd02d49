from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Dict, List, Optional


class PacketOpenError(ValueError):
    """The PDF could not be opened or has no pages."""


@dataclass(frozen=True)
class PositionedFragment:
    """A run of text extracted from a page with its PDF-space position."""

    text: str
    x: float                     # left edge
    y: float                     # PDF space, grows upward
    width: float = 0.0           # 0 when the backend does not know


@dataclass
class Row:
    """Fragments sharing a y band on one page, sorted left to right."""

    y: float                     # key of the first fragment seen in the band
    fragments: List[PositionedFragment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fragments)


@dataclass
class StatementPeriod:
    start_date: str              # YYYY-MM-DD
    end_date: str                # YYYY-MM-DD
    month_key: str               # YYYY-MM of the end date
    display_label: str           # e.g. "Jan 01, 2026 – Jan 31, 2026"


@dataclass
class PropertyAddress:
    short_address: str           # e.g. "123 Main St"
    full_address: str            # e.g. "123 Main St, Abilene, TX 79605"


@dataclass
class CashSummary:
    """Balance block of a property page. Missing fields stay ``None``."""

    beginning_balance: Optional[Decimal] = None
    cash_in: Optional[Decimal] = None
    cash_out: Optional[Decimal] = None
    management_fees: Optional[Decimal] = None
    owner_disbursements: Optional[Decimal] = None
    ending_balance: Optional[Decimal] = None

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class Transaction:
    date: str                    # YYYY-MM-DD, or "" when unknown
    payee: str
    type: str
    description: str
    cash_in: Decimal
    cash_out: Decimal
    balance: Decimal


@dataclass
class CategorizedTransaction(Transaction):
    property_address: str = ""
    property_full_address: str = ""
    category: str = "other"
    is_income: bool = False
    is_expense: bool = False
    is_distribution: bool = False
    amount: Decimal = Decimal("0")
    flow_type: str = "expense"   # "income" or "expense"
    page_number: int = 0


@dataclass
class PropertyPageResult:
    property_address: Optional[PropertyAddress]
    cash_summary: CashSummary
    transactions: List[Transaction]
    page_number: int = 0         # 1-based page in the source PDF


@dataclass
class PacketSummary:
    total_properties: int
    total_transactions: int
    total_income: Decimal
    total_expenses: Decimal      # excludes owner distributions
    total_distributions: Decimal


@dataclass
class ParseResult:
    period: Optional[StatementPeriod]
    properties: List[PropertyPageResult]
    all_transactions: List[CategorizedTransaction]
    summary: PacketSummary
