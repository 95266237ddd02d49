#!/usr/bin/env python3
"""CLI for parsing property management owner packet PDFs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from owner_packet import (
    OwnerPacketParser,
    PacketOpenError,
    category_rollups,
    load_properties,
    match_property,
    property_rollups,
    write_csv,
    write_json,
    write_payee_quadtree_html,
    write_rows,
)
from owner_packet.classifier import INCOME_GAP
from owner_packet.layout import ROW_TOLERANCE
from owner_packet.page_extractor import default_pdf_name, extract_property_pages_pdf


def _print_rollups(title: str, roll) -> None:
    print(f"\n{title}:")
    for key, sums in sorted(roll.items()):
        print(
            f"  {key or '(unattributed)'}: income=${sums['income']:.2f}  "
            f"expenses=${sums['expenses']:.2f}  distributions=${sums['distributions']:.2f}"
        )


def main() -> None:
    ap = argparse.ArgumentParser(
        description="Parse owner packet PDFs into per-property cash summaries and transactions."
    )
    ap.add_argument("pdf", type=Path, help="Owner packet PDF path")
    ap.add_argument("--csv", type=Path, default=None, help="Output CSV path")
    ap.add_argument("--json", type=Path, default=None, help="Optional JSON output path")
    ap.add_argument("--html", type=Path, default=None, help="Optional expense payee quadtree HTML path")
    ap.add_argument("--rows", type=Path, default=None, help="Dump reconstructed page rows to JSON")
    ap.add_argument("--properties", type=Path, default=None, help="JSON list of known properties to match")
    ap.add_argument("--print-rollups", action="store_true", help="Print per-category and per-property rollups")
    ap.add_argument("--income-gap", type=float, default=INCOME_GAP,
                    help="x-gap above which a lone amount before the balance counts as cash in")
    ap.add_argument("--row-tolerance", type=float, default=ROW_TOLERANCE,
                    help="Max vertical distance for text to share a row")
    ap.add_argument(
        "--pdf", nargs="?", type=Path, const=True, dest="pdf_out", default=None,
        help=(
            "Write the property detail pages to a PDF; if no filename is given, "
            "a default name based on the statement month is used"
        ),
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    parser = OwnerPacketParser(
        args.pdf, row_tolerance=args.row_tolerance, income_gap=args.income_gap
    )
    try:
        pages = parser.extract_page_rows()
    except PacketOpenError as err:
        print(err)
        sys.exit(1)
    result = parser.parse_rows(pages)

    if args.rows:
        write_rows(pages, args.rows)
        print(f"Rows: {args.rows}")

    if not result.all_transactions:
        print("No transactions found in this PDF. Is it an owner packet with transaction details?")
        sys.exit(1)

    period = result.period.display_label if result.period else "Unknown period"
    s = result.summary
    print(f"Period: {period}")
    print(f"Properties: {s.total_properties}  Transactions: {s.total_transactions}")
    print(
        f"Income: ${s.total_income:.2f}  Expenses: ${s.total_expenses:.2f}  "
        f"Distributions: ${s.total_distributions:.2f}"
    )

    if args.csv:
        write_csv(result.all_transactions, args.csv)
        print(f"CSV: {args.csv}")
    if args.json:
        write_json(result, args.json)
        print(f"JSON: {args.json}")
    if args.html:
        write_payee_quadtree_html(result.all_transactions, args.html)
        print(f"HTML: {args.html}")

    if args.properties:
        known = load_properties(args.properties)
        print("\nProperty matches:")
        for prop in result.properties:
            hint = prop.property_address.short_address if prop.property_address else ""
            match = match_property(hint, known)
            print(f"  {hint or '(no address)'} -> {(match.name or match.id) if match else 'unmatched'}")

    if args.print_rollups:
        _print_rollups("Per-category rollups", category_rollups(result.all_transactions))
        _print_rollups("Per-property rollups", property_rollups(result.all_transactions))

    if args.pdf_out:
        out_path = default_pdf_name(result.period) if args.pdf_out is True else args.pdf_out
        if out_path is None:
            out_path = args.pdf.with_name(f"{args.pdf.stem}-properties.pdf")
        pages_written = extract_property_pages_pdf(args.pdf, result, out_path)
        print(f"PDF: {out_path} (pages {', '.join(map(str, pages_written))})")


if __name__ == "__main__":
    main()
