import unittest
import io
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from unittest.mock import MagicMock, patch

from grid_engine.types import TextFragment
from grid_engine.fragments import FragmentExtractor, ExtractConfig, build_page_fragments, extract_fragments


def word(text, x0, bottom):
    return {'text': text, 'x0': x0, 'x1': x0 + 10, 'top': bottom - 10, 'bottom': bottom}


def mock_pdf(pages_words, height=792.0):
    pdf = MagicMock()
    pages = []
    for words in pages_words:
        page = MagicMock()
        page.height = height
        page.extract_words.return_value = words
        pages.append(page)
    pdf.pages = pages
    return pdf


class TestBuildPageFragments(unittest.TestCase):
    def test_baseline_flipped_to_pdf_space(self):
        frags = build_page_fragments([word("Total", 72.0, 92.0)], page_num=3, page_height=792.0)
        self.assertEqual(frags, [TextFragment(text="Total", x=72.0, y=700.0, page=3)])

    def test_baseline_from_char_matrix(self):
        w = word("Ag", 50.0, 94.0)
        w["chars"] = [
            {"text": "A", "matrix": (10, 0, 0, 10, 50.0, 700.0)},
            {"text": "g", "matrix": (10, 0, 0, 10, 56.7, 700.0)},
        ]
        frag = build_page_fragments([w], page_num=1, page_height=792.0)[0]
        self.assertEqual(frag.y, 700.0)
        self.assertEqual(frag.x, 50.0)

    def test_leading_blank_char_skipped(self):
        w = word(" 12", 247.2, 94.0)
        w["chars"] = [
            {"text": " ", "x0": 247.2, "matrix": (10, 0, 0, 10, 247.2, 700.0)},
            {"text": "1", "x0": 250.0, "matrix": (10, 0, 0, 10, 250.0, 700.0)},
            {"text": "2", "x0": 255.6, "matrix": (10, 0, 0, 10, 255.6, 700.0)},
        ]
        frag = build_page_fragments([w], page_num=1)[0]
        self.assertEqual((frag.text, frag.x, frag.y), ("12", 250.0, 700.0))

    def test_multi_word_run_is_one_fragment(self):
        frags = build_page_fragments([word(" Mary Ann Jones ", 50, 112)], page_num=1)
        self.assertEqual([f.text for f in frags], ["Mary Ann Jones"])

    def test_blank_text_dropped(self):
        frags = build_page_fragments([word("   ", 0, 10), word("", 5, 10), word(" ok ", 9, 10)], page_num=1)
        self.assertEqual([f.text for f in frags], ["ok"])

    def test_dash_kept(self):
        frags = build_page_fragments([word("-", 0, 10)], page_num=1)
        self.assertEqual([f.text for f in frags], ["-"])

    def test_fragment_is_immutable(self):
        frag = build_page_fragments([word("a", 0, 10)], page_num=1)[0]
        with self.assertRaises(AttributeError):
            frag.text = "b"


class TestFragmentExtractor(unittest.TestCase):
    def test_pages_in_order(self):
        with patch("pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value = mock_pdf([
                [word("A", 10, 92)],
                [],
                [word("B", 20, 92), word("C", 40, 92)],
            ])
            pages = list(FragmentExtractor().iter_pages("table.pdf"))

        self.assertEqual([p for p, _ in pages], [1, 2, 3])
        self.assertEqual([f.text for f in pages[0][1]], ["A"])
        self.assertEqual(pages[1][1], [])
        self.assertEqual([(f.text, f.page) for f in pages[2][1]], [("B", 3), ("C", 3)])

    def test_bytes_are_wrapped_in_buffer(self):
        with patch("pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value = mock_pdf([[word("A", 10, 92)]])
            frags = extract_fragments(b"%PDF-1.4 fake")

        arg = mock_open.call_args[0][0]
        self.assertIsInstance(arg, io.BytesIO)
        self.assertEqual(arg.getvalue(), b"%PDF-1.4 fake")
        self.assertEqual(len(frags), 1)

    def test_path_passed_through(self):
        with patch("pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value = mock_pdf([])
            FragmentExtractor().extract("/tmp/table.pdf")
        mock_open.assert_called_once_with("/tmp/table.pdf")

    def test_word_tolerances_from_config(self):
        config = ExtractConfig(x_tolerance=1.5, y_tolerance=2.0, keep_blank_chars=False)
        pdf = mock_pdf([[word("A", 10, 92)]])
        with patch("pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value = pdf
            FragmentExtractor(config).extract("table.pdf")
        pdf.pages[0].extract_words.assert_called_once_with(
            x_tolerance=1.5, y_tolerance=2.0, keep_blank_chars=False, return_chars=True
        )

    def test_spaces_inside_runs_kept_by_default(self):
        pdf = mock_pdf([[word("A", 10, 92)]])
        with patch("pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value = pdf
            FragmentExtractor().extract("table.pdf")
        kwargs = pdf.pages[0].extract_words.call_args.kwargs
        self.assertTrue(kwargs["keep_blank_chars"])
        self.assertTrue(kwargs["return_chars"])

    def test_missing_page_height_uses_letter(self):
        with patch("pdfplumber.open") as mock_open:
            mock_open.return_value.__enter__.return_value = mock_pdf([[word("A", 10, 92)]], height=None)
            frags = extract_fragments("table.pdf")
        self.assertEqual(frags[0].y, 700.0)


if __name__ == "__main__":
    unittest.main()
