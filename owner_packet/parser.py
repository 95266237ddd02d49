# -*- coding: utf-8 -*-
"""
Core logic for extracting per-property cash summaries and ledgers from
property management owner packet PDFs.

Page 1 of a packet is a consolidated summary; every following page is a
property detail page with an address header, a "Property Cash Summary" block
and a transaction table.
"""

from __future__ import annotations

import logging
from typing import List

from .categories import categorize_transaction
from .classifier import INCOME_GAP
from .fields import detect_statement_period
from .layout import ROW_TOLERANCE, extract_rows, page_text
from .models import (
    CategorizedTransaction,
    PacketOpenError,
    ParseResult,
    PositionedFragment,
    PropertyPageResult,
    Row,
)
from .segmenter import parse_property_page
from .stats import summarize
from .text_source import PdfplumberTextSource, PdfSource

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n---PAGE---\n"
SUMMARY_PAGE_MARKERS = ("consolidated summary", "consolidated owner")


# ------------------------------
# Parser
# ------------------------------
class OwnerPacketParser:
    """Parse one owner packet.

    ``text_source`` is anything with a ``read_pages(source)`` method returning
    a list of :class:`PositionedFragment` lists, one per page.  It defaults to
    :class:`PdfplumberTextSource`.
    """

    def __init__(
        self,
        source: PdfSource,
        text_source=None,
        row_tolerance: float = ROW_TOLERANCE,
        income_gap: float = INCOME_GAP,
    ):
        self.source = source
        self.text_source = text_source or PdfplumberTextSource()
        self.row_tolerance = row_tolerance
        self.income_gap = income_gap

    # ---------- raw extraction ----------
    def extract_page_rows(self) -> List[List[Row]]:
        pages: List[List[PositionedFragment]] = self.text_source.read_pages(self.source)
        if not pages:
            raise PacketOpenError("PDF has no pages")
        return [extract_rows(fragments, self.row_tolerance) for fragments in pages]

    # ---------- page parsing ----------
    @staticmethod
    def is_summary_page(rows: List[Row]) -> bool:
        text = page_text(rows, " ").lower()
        return any(marker in text for marker in SUMMARY_PAGE_MARKERS)

    def parse_pages(self, pages: List[List[Row]]) -> List[PropertyPageResult]:
        properties: List[PropertyPageResult] = []
        start = 1 if len(pages) > 1 else 0
        for index in range(start, len(pages)):
            number = index + 1
            rows = pages[index]
            if self.is_summary_page(rows):
                logger.debug("page %d: consolidated summary, skipped", number)
                continue
            try:
                result = parse_property_page(rows, self.income_gap, page_number=number)
            except Exception as err:
                logger.warning("page %d: could not be parsed: %s", number, err)
                continue
            if result.transactions or result.property_address:
                properties.append(result)
            else:
                logger.debug("page %d: no address or transactions, dropped", number)
        return properties

    @staticmethod
    def flatten(properties: List[PropertyPageResult]) -> List[CategorizedTransaction]:
        return [
            categorize_transaction(tx, prop.property_address, prop.page_number)
            for prop in properties
            for tx in prop.transactions
        ]

    def parse_rows(self, pages: List[List[Row]]) -> ParseResult:
        full_text = "".join(page_text(rows) + PAGE_SEPARATOR for rows in pages)
        period = detect_statement_period(full_text)
        properties = self.parse_pages(pages)
        transactions = self.flatten(properties)
        logger.info(
            "parsed %d pages: %d properties, %d transactions",
            len(pages),
            len(properties),
            len(transactions),
        )
        return ParseResult(
            period=period,
            properties=properties,
            all_transactions=transactions,
            summary=summarize(properties, transactions),
        )

    # ---------- main extraction ----------
    def parse(self) -> ParseResult:
        return self.parse_rows(self.extract_page_rows())


def parse_owner_packet(
    source: PdfSource,
    text_source=None,
    row_tolerance: float = ROW_TOLERANCE,
    income_gap: float = INCOME_GAP,
) -> ParseResult:
    """Parse an owner packet given as bytes, a binary stream or a path."""
    return OwnerPacketParser(
        source, text_source=text_source, row_tolerance=row_tolerance, income_gap=income_gap
    ).parse()
