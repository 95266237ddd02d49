import os
import sys
import unittest
from decimal import Decimal

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from owner_packet.layout import extract_rows
from owner_packet.segmenter import (
    extract_property_address,
    parse_property_page,
)
from tests.packet_fixtures import PROPERTY_PAGE, as_fragments, row


class TestPropertyAddress(unittest.TestCase):
    def test_dash_header(self):
        rows = [
            row(("Absolute Real Estate Management", 40), y=760),
            row(("123 Main St - Dulin - 123 Main St, Abilene, TX 79605", 40), y=740),
        ]
        addr = extract_property_address(rows)
        self.assertEqual(addr.short_address, "123 Main St")
        self.assertEqual(addr.full_address, "123 Main St, Abilene, TX 79605")

    def test_street_line_fallback(self):
        rows = [
            row(("Owner Statement", 40), y=760),
            row(("456 Oak Ave, Abilene, TX 79601", 40), y=740),
        ]
        addr = extract_property_address(rows)
        self.assertEqual(addr.short_address, "456 Oak Ave")
        self.assertEqual(addr.full_address, "456 Oak Ave, Abilene, TX 79601")

    def test_street_line_fallback_full_suffixes(self):
        cases = [
            ("123 Main Street, Abilene, TX 79605", "123 Main Street"),
            ("456 Oak Avenue", "456 Oak Avenue"),
            ("789 Elm Drive, Abilene", "789 Elm Drive"),
            ("12 Pine Road", "12 Pine Road"),
            ("34 Cedar Lane", "34 Cedar Lane"),
        ]
        for line, short in cases:
            with self.subTest(line=line):
                rows = [row(("Owner Statement", 40), y=760), row((line, 40), y=740)]
                addr = extract_property_address(rows)
                self.assertIsNotNone(addr)
                self.assertEqual(addr.short_address, short)
                self.assertEqual(addr.full_address, line)

    def test_suffix_inside_a_word_is_not_an_address(self):
        for text in ("100 Test Results", "2026 Statement Summary"):
            with self.subTest(text=text):
                rows = [row((text, 40), y=760)]
                self.assertIsNone(extract_property_address(rows))

    def test_fallback_limited_to_first_six_rows(self):
        rows = [row((f"Line {i}", 40), y=800 - i * 10) for i in range(6)]
        rows.append(row(("789 Elm Dr", 40), y=700))
        self.assertIsNone(extract_property_address(rows))

    def test_no_address(self):
        rows = [row(("2025 Annual Report", 40), y=760), row(("Notes", 40), y=740)]
        self.assertIsNone(extract_property_address(rows))


class TestPropertyPage(unittest.TestCase):
    def setUp(self):
        self.rows = extract_rows(as_fragments(PROPERTY_PAGE))

    def test_cash_summary(self):
        result = parse_property_page(self.rows)
        summary = result.cash_summary
        self.assertEqual(summary.beginning_balance, Decimal("500.00"))
        self.assertEqual(summary.cash_in, Decimal("150.00"))
        self.assertEqual(summary.ending_balance, Decimal("650.00"))
        self.assertIsNone(summary.cash_out)
        self.assertIsNone(summary.management_fees)
        self.assertEqual(
            set(summary.as_dict()), {"beginning_balance", "cash_in", "ending_balance"}
        )

    def test_all_summary_fields(self):
        rows = [
            row(("Property Cash Summary", 40), y=700),
            row(("Beginning Cash Balance", 40), ("$1,000.00", 300), y=690),
            row(("Cash In", 40), ("$1,200.00", 300), y=680),
            row(("Cash Out", 40), ("$900.00", 300), y=670),
            row(("Management Fees", 40), ("$120.00", 300), y=660),
            row(("Owner Disbursements", 40), ("$700.00", 300), y=650),
            row(("Ending Cash Balance", 40), ("$1,300.00", 300), y=640),
        ]
        summary = parse_property_page(rows).cash_summary
        self.assertEqual(summary.beginning_balance, Decimal("1000.00"))
        self.assertEqual(summary.cash_in, Decimal("1200.00"))
        self.assertEqual(summary.cash_out, Decimal("900.00"))
        self.assertEqual(summary.management_fees, Decimal("120.00"))
        self.assertEqual(summary.owner_disbursements, Decimal("700.00"))
        self.assertEqual(summary.ending_balance, Decimal("1300.00"))

    def test_summary_scan_stops_after_nine_rows(self):
        rows = [row(("Property Cash Summary", 40), y=800)]
        rows += [row((f"Note {i}", 40), y=790 - i * 10) for i in range(9)]
        rows.append(row(("Ending Cash Balance", 40), ("$5.00", 300), y=600))
        self.assertIsNone(parse_property_page(rows).cash_summary.ending_balance)

    def test_transactions_only_after_table_header(self):
        result = parse_property_page(self.rows, page_number=2)
        self.assertEqual(result.page_number, 2)
        self.assertEqual(len(result.transactions), 1)
        tx = result.transactions[0]
        self.assertEqual(tx.date, "2026-01-15")
        self.assertEqual(tx.payee, "John Doe")
        self.assertEqual(tx.cash_in, Decimal("150.00"))
        self.assertEqual(tx.balance, Decimal("650.00"))

    def test_rows_before_header_are_ignored(self):
        rows = [
            row(("01/02/2026", 40), ("John Doe", 110), ("Rent Income", 210), ("$150.00", 400), y=700),
            row(("Date", 40), ("Payee / Payer", 110), ("Type", 210), y=690),
            row(("01/03/2026", 40), ("Jane Roe", 110), ("Rent Income", 210), ("$175.00", 400), y=680),
        ]
        result = parse_property_page(rows)
        self.assertEqual([t.payee for t in result.transactions], ["Jane Roe"])
        self.assertIsNone(result.property_address)


if __name__ == "__main__":
    unittest.main()
