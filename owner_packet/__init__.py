from .models import (
    CashSummary,
    CategorizedTransaction,
    PacketOpenError,
    PacketSummary,
    ParseResult,
    PositionedFragment,
    PropertyAddress,
    PropertyPageResult,
    Row,
    StatementPeriod,
    Transaction,
)
from .layout import extract_rows, row_to_text
from .fields import detect_statement_period, parse_date, parse_money
from .segmenter import parse_property_page
from .classifier import classify_row
from .categories import categorize
from .parser import OwnerPacketParser, parse_owner_packet
from .text_source import PdfplumberTextSource
from .property_match import KnownProperty, match_property, load_properties
from .outputs import (
    write_csv,
    write_json,
    write_rows,
    write_payee_quadtree_html,
)
from .stats import summarize, category_rollups, property_rollups
