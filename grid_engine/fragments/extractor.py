"""
Fragment Extractor
==================
Reads positioned text runs from a PDF with pdfplumber.
One TextFragment per text run (spaces inside a run are kept);
pages are yielded in ascending order.
"""

import io
import os
from dataclasses import dataclass
from typing import List, Dict, Any, Iterator, Tuple, Union, BinaryIO, Optional

import pdfplumber

from ..types import TextFragment


PdfSource = Union[bytes, bytearray, str, os.PathLike, BinaryIO]


@dataclass
class ExtractConfig:
    """Configuration for text-run extraction"""
    x_tolerance: float = 3.0
    y_tolerance: float = 3.0
    keep_blank_chars: bool = True


def _open_pdf(source: PdfSource):
    """Open raw bytes, a file object or a path with pdfplumber."""
    if isinstance(source, (bytes, bytearray)):
        return pdfplumber.open(io.BytesIO(bytes(source)))
    return pdfplumber.open(source)


def build_page_fragments(
    words: List[Dict[str, Any]],
    page_num: int,
    page_height: float = 792.0
) -> List[TextFragment]:
    """
    Build fragments from pdfplumber words, dropping blank text.

    Args:
        words: Word dicts from page.extract_words(return_chars=True)
        page_num: 1-indexed page number
        page_height: Page height in points

    Returns:
        Fragments in extraction order
    """
    fragments: List[TextFragment] = []
    for word in words:
        frag = TextFragment.from_pdfplumber(word, page_num, page_height)
        if frag is not None:
            fragments.append(frag)
    return fragments


class FragmentExtractor:
    """
    Extract positioned text fragments from a PDF.

    Usage:
        extractor = FragmentExtractor()
        for page_num, fragments in extractor.iter_pages(pdf_bytes):
            ...
    """

    def __init__(self, config: Optional[ExtractConfig] = None):
        self.config = config or ExtractConfig()

    def iter_pages(self, source: PdfSource) -> Iterator[Tuple[int, List[TextFragment]]]:
        """Yield (page_num, fragments) for each page, ascending."""
        with _open_pdf(source) as pdf:
            for i, page in enumerate(pdf.pages):
                page_num = i + 1
                words = page.extract_words(
                    x_tolerance=self.config.x_tolerance,
                    y_tolerance=self.config.y_tolerance,
                    keep_blank_chars=self.config.keep_blank_chars,
                    return_chars=True,
                )
                yield page_num, build_page_fragments(
                    words,
                    page_num=page_num,
                    page_height=page.height or 792.0,
                )

    def extract(self, source: PdfSource) -> List[TextFragment]:
        """Extract all fragments of the document (Blocking wrapper)"""
        fragments: List[TextFragment] = []
        for _, page_fragments in self.iter_pages(source):
            fragments.extend(page_fragments)
        return fragments


def extract_fragments(source: PdfSource, config: Optional[ExtractConfig] = None) -> List[TextFragment]:
    """Convenience function to extract fragments"""
    return FragmentExtractor(config).extract(source)
