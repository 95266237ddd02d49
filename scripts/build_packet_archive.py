#!/usr/bin/env python3
"""Generate archive artifacts for a single owner packet PDF.

Parses the packet, then writes the property detail pages, the raw page rows
JSON and the transaction CSV under ``OwnerPacketArchive/<year>/``.

Example
-------
    python scripts/build_packet_archive.py packets/"Owner Packet Jan 2026.pdf"
"""
from __future__ import annotations

import argparse
from pathlib import Path

import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from owner_packet import OwnerPacketParser, write_csv, write_rows
from owner_packet.page_extractor import default_pdf_name, extract_property_pages_pdf


def build_archive(packet_pdf: Path, archive_dir: Path = Path("OwnerPacketArchive")) -> Path:
    packet_pdf = Path(packet_pdf)
    archive_dir = Path(archive_dir)

    parser = OwnerPacketParser(packet_pdf)
    pages = parser.extract_page_rows()
    result = parser.parse_rows(pages)

    name = default_pdf_name(result.period)
    if name is None:
        raise RuntimeError("Could not determine the statement period for the archive name")
    year_dir = archive_dir / result.period.month_key[:4]
    year_dir.mkdir(parents=True, exist_ok=True)

    pdf_out = year_dir / name
    extract_property_pages_pdf(packet_pdf, result, pdf_out)

    prefix = result.period.month_key
    write_rows(pages, year_dir / "rows" / f"{prefix}.json")
    write_csv(result.all_transactions, year_dir / "csv" / f"{prefix}.csv")

    return pdf_out


def main() -> None:
    ap = argparse.ArgumentParser(description="Archive owner packet artifacts")
    ap.add_argument("pdf", type=Path, help="Owner packet PDF path")
    ap.add_argument("--archive-dir", type=Path, default=Path("OwnerPacketArchive"), help="Archive output directory")
    args = ap.parse_args()

    pdf_out = build_archive(args.pdf, args.archive_dir)
    print(f"Archive updated: {pdf_out}")


if __name__ == "__main__":
    main()
