import os
import sys
import unittest
from unittest.mock import patch

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from owner_packet.models import PacketOpenError
from owner_packet.text_source import PdfplumberTextSource


def _word(text, x0, x1, bottom):
    return {"text": text, "x0": x0, "x1": x1, "top": bottom - 10, "bottom": bottom}


class _StubPage:
    height = 792

    def __init__(self, words=None, error=None):
        self.words = words or []
        self.error = error

    def extract_words(self, **kwargs):
        if self.error is not None:
            raise self.error
        return self.words


class _StubPdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class TestPageFragments(unittest.TestCase):
    def setUp(self):
        self.source = PdfplumberTextSource()

    def test_coordinates(self):
        page = _StubPage([_word("Rent Income", 210.4, 260.0, 180.2)])
        (frag,) = self.source.page_fragments(page)
        self.assertEqual(frag.text, "Rent Income")
        self.assertEqual(frag.x, 210)
        self.assertEqual(frag.y, 612)
        self.assertAlmostEqual(frag.width, 49.6)

    def test_half_rounds_up(self):
        page = _StubPage([_word("$150.00", 210.5, 240.0, 181.5)])
        (frag,) = self.source.page_fragments(page)
        self.assertEqual(frag.x, 211)
        self.assertEqual(frag.y, 611)

    def test_whitespace_only_words_dropped(self):
        page = _StubPage(
            [
                _word("   ", 40.0, 60.0, 100.0),
                _word(" Jane Roe ", 110.0, 160.0, 100.0),
            ]
        )
        frags = self.source.page_fragments(page)
        self.assertEqual([f.text for f in frags], ["Jane Roe"])


class TestReadPages(unittest.TestCase):
    def setUp(self):
        self.source = PdfplumberTextSource()

    def test_failing_page_is_isolated(self):
        pdf = _StubPdf(
            [
                _StubPage([_word("Owner Statement", 40.0, 120.0, 60.0)]),
                _StubPage(error=RuntimeError("broken content stream")),
                _StubPage([_word("Property Cash Summary", 40.0, 150.0, 80.0)]),
            ]
        )
        with patch.object(PdfplumberTextSource, "_open", return_value=pdf):
            with self.assertLogs("owner_packet.text_source", level="WARNING") as logs:
                pages = self.source.read_pages(b"%PDF-stub")
        self.assertEqual(len(pages), 3)
        self.assertEqual([f.text for f in pages[0]], ["Owner Statement"])
        self.assertEqual(pages[1], [])
        self.assertEqual([f.text for f in pages[2]], ["Property Cash Summary"])
        self.assertEqual(len(logs.output), 1)
        self.assertIn("page 2", logs.output[0])
        self.assertIn("broken content stream", logs.output[0])

    def test_open_failure(self):
        with patch.object(PdfplumberTextSource, "_open", side_effect=OSError("bad header")):
            with self.assertRaises(PacketOpenError) as cm:
                self.source.read_pages(b"not a pdf")
        self.assertIn("Failed to open PDF", str(cm.exception))


if __name__ == "__main__":
    unittest.main()
