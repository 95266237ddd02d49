import contextlib
import io
import json
import os
import sys
import tempfile
from pathlib import Path
import unittest
from unittest.mock import patch

import pdfplumber
import pypdfium2 as pdfium

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from owner_packet import parse_owner_packet
from owner_packet.models import StatementPeriod
from owner_packet.page_extractor import default_pdf_name, extract_property_pages_pdf
from owner_packet_parser import main
from tests.packet_fixtures import statement_pdf


class TestCliPdf(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.packet = self.dir / "packet.pdf"
        self.packet.write_bytes(statement_pdf())

    def tearDown(self):
        self.tmp.cleanup()

    def _run(self, *args):
        argv = ["owner_packet_parser.py", *map(str, args)]
        with patch("sys.argv", argv):
            with io.StringIO() as buf, contextlib.redirect_stdout(buf):
                main()
                return buf.getvalue()

    def test_default_pdf_name(self):
        period = StatementPeriod("2026-01-01", "2026-01-31", "2026-01", "Jan 01, 2026 – Jan 31, 2026")
        self.assertEqual(default_pdf_name(period), Path("2026-01-owner-packet.pdf"))
        self.assertIsNone(default_pdf_name(None))

    def test_extract_property_pages(self):
        result = parse_owner_packet(self.packet)
        out = self.dir / "props.pdf"
        pages = extract_property_pages_pdf(self.packet, result, out)
        self.assertEqual(pages, [2])
        with pdfplumber.open(out) as pdf:
            self.assertEqual(len(pdf.pages), 1)
            self.assertIn("Property Cash Summary", pdf.pages[0].extract_text() or "")

    def test_cli_writes_outputs(self):
        csv_out = self.dir / "out.csv"
        json_out = self.dir / "out.json"
        props = self.dir / "props.json"
        props.write_text(json.dumps([{"id": 1, "name": "Main House", "address": "123 Main Street"}]))
        output = self._run(self.packet, "--csv", csv_out, "--json", json_out,
                           "--properties", props, "--print-rollups")
        self.assertIn("Period: Jan 01, 2026 – Jan 31, 2026", output)
        self.assertIn("Income: $150.00", output)
        self.assertIn("123 Main St -> Main House", output)
        self.assertIn("rent: income=$150.00", output)
        self.assertTrue(csv_out.exists())
        self.assertTrue(json_out.exists())

    def test_cli_pdf_out(self):
        out = self.dir / "pages.pdf"
        output = self._run(self.packet, "--pdf", out)
        self.assertIn("(pages 2)", output)
        self.assertEqual(len(pdfium.PdfDocument(str(out))), 1)

    def test_pdf_no_transactions_graceful(self):
        pdf_path = self.dir / "empty.pdf"
        doc = pdfium.PdfDocument.new()
        doc.new_page(612, 792)
        doc.save(str(pdf_path))
        argv = ["owner_packet_parser.py", str(pdf_path)]
        with patch("sys.argv", argv):
            with io.StringIO() as buf, contextlib.redirect_stdout(buf):
                with self.assertRaises(SystemExit) as cm:
                    main()
                output = buf.getvalue()
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("No transactions found", output)

    def test_corrupt_pdf(self):
        bad = self.dir / "bad.pdf"
        bad.write_bytes(b"not a pdf at all")
        argv = ["owner_packet_parser.py", str(bad)]
        with patch("sys.argv", argv):
            with io.StringIO() as buf, contextlib.redirect_stdout(buf):
                with self.assertRaises(SystemExit) as cm:
                    main()
                output = buf.getvalue()
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Failed to open PDF", output)


if __name__ == "__main__":
    unittest.main()
