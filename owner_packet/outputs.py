from __future__ import annotations

import csv
import json
from dataclasses import asdict
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Tuple

from .layout import row_to_text
from .models import CategorizedTransaction, ParseResult, Row

CSV_COLUMNS = [
    "property_address", "date", "payee", "type", "description", "category",
    "flow_type", "cash_in", "cash_out", "balance", "distribution",
]


def _json_default(value):
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def write_csv(transactions: List[CategorizedTransaction], out_path: Path) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f, lineterminator="\n")
        w.writerow(CSV_COLUMNS)
        for t in transactions:
            w.writerow([
                t.property_address, t.date, t.payee, t.type, t.description,
                t.category, t.flow_type,
                f"{t.cash_in:.2f}", f"{t.cash_out:.2f}", f"{t.balance:.2f}",
                "Y" if t.is_distribution else "N",
            ])


def write_json(result: ParseResult, out_path: Path) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(asdict(result), f, ensure_ascii=False, indent=2, default=_json_default)


def write_rows(pages: List[List[Row]], out_path: Path) -> None:
    """Dump every page's rows with their reconstructed text, for tuning heuristics."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    dump = [
        [{"text": row_to_text(r), **asdict(r)} for r in rows]
        for rows in pages
    ]
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(dump, f, ensure_ascii=False, indent=2)


# ------------------------------
# Payee quadtree
# ------------------------------
def expense_payees(
    transactions: List[CategorizedTransaction],
) -> Dict[str, List[CategorizedTransaction]]:
    """Group operating expenses (no distributions) by payee."""
    payees: Dict[str, List[CategorizedTransaction]] = {}
    for t in transactions:
        if not t.is_expense or t.is_distribution:
            continue
        payees.setdefault(t.payee or t.type or "Unknown", []).append(t)
    return payees


def _halve(items: List[Tuple[str, float]]):
    """Greedily deal weighted items into two piles of similar total."""
    piles: Tuple[list, list] = ([], [])
    sums = [0.0, 0.0]
    for item in sorted(items, key=lambda t: t[1], reverse=True):
        side = 0 if sums[0] <= sums[1] else 1
        piles[side].append(item)
        sums[side] += item[1]
    return piles, sums


def layout_rectangles(
    items: List[Tuple[str, float]],
    x: float = 0.0,
    y: float = 0.0,
    width: float = 1.0,
    height: float = 1.0,
) -> List[Dict[str, float]]:
    """Recursively split the unit square into four weighted quadrants."""
    total = sum(v for _, v in items)
    if not items or total <= 0:
        return []
    if len(items) == 1:
        label, value = items[0]
        return [{"label": label, "value": value, "x": x, "y": y, "w": width, "h": height}]

    (left, right), (sum_left, sum_right) = _halve(items)
    split_x = width * (sum_left / total)
    rects: List[Dict[str, float]] = []
    for column, column_sum, cx, cw in (
        (left, sum_left, x, split_x),
        (right, sum_right, x + split_x, width - split_x),
    ):
        (top, bottom), (sum_top, _) = _halve(column)
        top_h = height * (sum_top / column_sum) if column_sum else height / 2
        rects += layout_rectangles(top, cx, y + height - top_h, cw, top_h)
        rects += layout_rectangles(bottom, cx, y, cw, height - top_h)
    return rects


def build_payee_quadtree_data(transactions: List[CategorizedTransaction]) -> Dict[str, List]:
    """Return ColumnDataSource-friendly data for the expense payee quadtree."""
    payees = expense_payees(transactions)
    items = [(name, float(sum(t.cash_out for t in ts))) for name, ts in payees.items()]
    rects = layout_rectangles([i for i in items if i[1] > 0])

    data: Dict[str, List] = {
        k: [] for k in ("cx", "cy", "w", "h", "payee", "amount", "category", "properties", "label")
    }
    for r in rects:
        payee = r["label"]
        txs = payees[payee]
        w, h = r["w"], r["h"]
        data["cx"].append(r["x"] + w / 2)
        data["cy"].append(r["y"] + h / 2)
        data["w"].append(w)
        data["h"].append(h)
        data["payee"].append(payee)
        data["amount"].append(r["value"])
        data["category"].append(", ".join(sorted({t.category for t in txs})))
        data["properties"].append(
            ", ".join(sorted({t.property_address for t in txs if t.property_address}))
        )
        fits = w * 960 >= len(payee) * 7 and h * 600 >= 14
        data["label"].append(payee if fits else "")
    total = sum(data["amount"])
    data["percent"] = [v / total * 100 if total else 0 for v in data["amount"]]
    return data


def make_quadtree_figure(data: Dict[str, List]):
    from bokeh.models import ColumnDataSource, HoverTool
    from bokeh.palettes import Viridis256
    from bokeh.plotting import figure
    from bokeh.transform import linear_cmap

    source = ColumnDataSource(data)
    low = min(data["amount"]) if data["amount"] else 0
    high = max(data["amount"]) if data["amount"] else 1
    p = figure(
        width=960,
        height=600,
        x_range=(0, 1),
        y_range=(0, 1),
        toolbar_location="above",
        tools="pan,wheel_zoom,reset,save",
        outline_line_color=None,
        title=None,
    )
    p.rect(
        x="cx", y="cy", width="w", height="h", source=source,
        line_color="white", line_width=1,
        fill_color=linear_cmap("amount", Viridis256, low, high), fill_alpha=0.9,
    )
    p.text(
        x="cx", y="cy", text="label", source=source,
        text_align="center", text_baseline="middle",
        text_color="black", text_font_size="9pt",
    )
    p.add_tools(
        HoverTool(
            tooltips=[
                ("Payee", "@payee"),
                ("Cash out", "@amount{$0,0.00}"),
                ("% of expenses", "@percent{0.0}%"),
                ("Category", "@category"),
                ("Properties", "@properties"),
            ]
        )
    )
    p.xgrid.grid_line_color = None
    p.ygrid.grid_line_color = None
    return p


def write_payee_quadtree_html(
    transactions: List[CategorizedTransaction], out_path: Path
) -> None:
    """Write an HTML quadtree of expense payees sized by cash out."""
    from bokeh.plotting import output_file, save

    plot = make_quadtree_figure(build_payee_quadtree_data(transactions))
    output_file(out_path, title="Expenses by Payee")
    save(plot)
