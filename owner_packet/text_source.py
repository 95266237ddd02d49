"""pdfplumber backend producing :class:`PositionedFragment` lists per page."""

from __future__ import annotations

import io
import logging
import math
from pathlib import Path
from typing import BinaryIO, List, Union

import pdfplumber

from .models import PacketOpenError, PositionedFragment

logger = logging.getLogger(__name__)

PdfSource = Union[bytes, bytearray, BinaryIO, str, Path]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class PdfplumberTextSource:
    """Read positioned text runs from every page of a PDF.

    Words are extracted with ``keep_blank_chars`` so a glyph run such as
    ``Rent Income`` stays a single fragment while column gaps wider than
    ``x_tolerance`` still split fragments apart.
    """

    def __init__(self, x_tolerance: float = 3, y_tolerance: float = 3):
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance

    @staticmethod
    def _open(source: PdfSource):
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        return pdfplumber.open(source)

    def page_fragments(self, page) -> List[PositionedFragment]:
        """Convert one page's words to fragments.

        ``x`` is the left edge and ``y`` is ``page.height - bottom``, i.e. the
        bottom of the glyph box measured up from the page foot (PDF space).
        That is not the text baseline, but every fragment uses the same edge
        so row clustering is unaffected. Both are rounded half up.
        Whitespace-only words are dropped.
        """
        words = page.extract_words(
            keep_blank_chars=True,
            x_tolerance=self.x_tolerance,
            y_tolerance=self.y_tolerance,
        )
        fragments = []
        for w in words:
            text = w["text"].strip()
            if not text:
                continue
            fragments.append(
                PositionedFragment(
                    text=text,
                    x=_round_half_up(float(w["x0"])),
                    y=_round_half_up(float(page.height) - float(w["bottom"])),
                    width=float(w["x1"]) - float(w["x0"]),
                )
            )
        return fragments

    def read_pages(self, source: PdfSource) -> List[List[PositionedFragment]]:
        """Return one fragment list per page, in page order.

        Raises
        ------
        PacketOpenError
            If the document cannot be opened.
        """
        logging.getLogger("pdfminer").setLevel(logging.ERROR)
        try:
            pdf = self._open(source)
        except Exception as err:
            raise PacketOpenError(f"Failed to open PDF: {err}") from err

        out: List[List[PositionedFragment]] = []
        with pdf:
            try:
                pages = list(pdf.pages)
            except Exception as err:
                raise PacketOpenError(f"Failed to open PDF: {err}") from err
            for number, page in enumerate(pages, start=1):
                try:
                    out.append(self.page_fragments(page))
                except Exception as err:
                    logger.warning("page %d: text extraction failed: %s", number, err)
                    out.append([])
        return out
