from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pypdfium2 as pdfium

from .models import ParseResult, StatementPeriod


def property_page_numbers(result: ParseResult) -> List[int]:
    """1-indexed pages that produced a property result, in page order."""
    return sorted({p.page_number for p in result.properties if p.page_number > 0})


def extract_property_pages_pdf(pdf_path: Path, result: ParseResult, out_path: Path) -> List[int]:
    """Copy the property detail pages of a packet into a separate PDF.

    Returns the 1-indexed page numbers that were written.

    Raises
    ------
    ValueError
        If the packet has no property pages.
    """
    pages = property_page_numbers(result)
    if not pages:
        raise ValueError("No property pages found")

    src = pdfium.PdfDocument(str(pdf_path))
    out_pdf = pdfium.PdfDocument.new()
    out_pdf.import_pages(src, pages=[n - 1 for n in pages])
    out_pdf.save(str(out_path))
    return pages


def default_pdf_name(period: Optional[StatementPeriod]) -> Optional[Path]:
    """``YYYY-MM-owner-packet.pdf`` for the statement's month, if known.

    The year-first prefix keeps a directory listing in chronological order.
    """
    if period is None:
        return None
    return Path(f"{period.month_key}-owner-packet.pdf")
