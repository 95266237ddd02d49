"""Turn a page's positioned text fragments into rows and row text.

PDF text carries no row or column structure.  Rows are recovered by clustering
fragments on their y coordinate; columns survive only as horizontal gaps, which
:func:`row_to_text` renders as tabs (wide gaps) or spaces (narrow gaps).
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .models import PositionedFragment, Row

ROW_TOLERANCE = 3      # max |dy| for two fragments to share a row
TAB_GAP = 15           # gap wider than this is a column boundary
SPACE_GAP = 5          # gap wider than this is a word boundary
CHAR_WIDTH = 5         # width guess per character when a fragment has none


def extract_rows(
    fragments: Iterable[PositionedFragment], tolerance: float = ROW_TOLERANCE
) -> List[Row]:
    """Group fragments into rows, top of the page first.

    Each fragment joins the first existing row whose key lies within
    ``tolerance`` of its y, otherwise it starts a new row keyed by its own y.
    Keys are never recomputed, so a row's band stays anchored on the first
    fragment that opened it.
    """
    buckets: Dict[float, List[PositionedFragment]] = {}
    for frag in fragments:
        key = next((k for k in buckets if abs(k - frag.y) <= tolerance), frag.y)
        buckets.setdefault(key, []).append(frag)

    return [
        Row(y=key, fragments=sorted(items, key=lambda f: f.x))
        for key, items in sorted(buckets.items(), key=lambda kv: kv[0], reverse=True)
    ]


def fragment_right_edge(frag: PositionedFragment) -> float:
    return frag.x + (frag.width or len(frag.text) * CHAR_WIDTH)


def row_to_text(row: Row) -> str:
    """Join a row's fragments, sizing separators to the gaps between them."""
    parts: List[str] = []
    last_end = 0.0
    for frag in row.fragments:
        if parts:
            gap = frag.x - last_end
            if gap > TAB_GAP:
                parts.append("\t")
            elif gap > SPACE_GAP:
                parts.append(" ")
        parts.append(frag.text)
        last_end = fragment_right_edge(frag)
    return "".join(parts)


def page_text(rows: Iterable[Row], sep: str = "\n") -> str:
    return sep.join(row_to_text(r) for r in rows)
