"""
Unified Data Types for the Table Engine
=======================================
All modules MUST use these types. No custom structures allowed.

Type Hierarchy:
- TextFragment: One positioned piece of text from a PDF page
- ColumnSet: Ordered column centers (document-global)
- RowBand: One vertical cluster on one page, with its fragments
- Grid: Rows of cell strings
- TableExtractionError: Root of the failures reported by the pipeline
"""

import math
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


# ============================================================
# Primitive Types
# ============================================================

# Column centers, ascending
ColumnSet = List[float]

# Rows of cell strings
Grid = List[List[str]]


# ============================================================
# Core Data Structures
# ============================================================

@dataclass(frozen=True)
class TextFragment:
    """
    A single positioned piece of text.

    Attributes:
        text: Stripped, non-empty text (or the literal "-")
        x: Left edge of the text run
        y: Baseline in PDF space (larger y = higher on the page)
        page: 1-indexed page number
    """
    text: str
    x: float
    y: float
    page: int

    @property
    def rounded_y(self) -> int:
        return round_coord(self.y)

    @classmethod
    def from_pdfplumber(
        cls,
        word: Dict[str, Any],
        page_num: int,
        page_height: float
    ) -> Optional['TextFragment']:
        """
        Create from a pdfplumber word dictionary.

        x and y come from the first non-blank char: its `x0` and the
        baseline in its text matrix (`matrix[5]`, already in PDF space). Words extracted without
        chars fall back to flipping `bottom`, which sits below the
        baseline by the font's descent. Returns None for whitespace-only
        text.
        """
        text = (word.get('text') or '').strip()
        if not text:
            return None
        # Leading blanks are kept in runs; position comes from the first glyph
        first = next((c for c in word.get('chars') or [] if (c.get('text') or '').strip()), None)
        if first is not None and first.get('matrix'):
            x = float(first.get('x0', word.get('x0', 0)))
            y = float(first['matrix'][5])
        else:
            x = float(word.get('x0', 0))
            y = float(page_height) - float(word.get('bottom', 0))
        return cls(
            text=text,
            x=x,
            y=y,
            page=page_num,
        )


@dataclass
class RowBand:
    """
    A logical table row on one page.

    Attributes:
        center: Cluster center (rounded y units)
        page: 1-indexed page number
        fragments: Fragments whose rounded y lies within the row threshold
    """
    center: float
    page: int
    fragments: List[TextFragment] = field(default_factory=list)


# ============================================================
# Errors
# ============================================================

class TableExtractionError(Exception):
    """Base class for failures reported by the table pipeline."""

    user_message = "Table extraction failed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)


class NoTextFound(TableExtractionError):
    user_message = "No text found in the PDF."


class NoRowsDetected(TableExtractionError):
    user_message = "No table rows could be detected in the PDF."


class ExtractionFailure(TableExtractionError):
    user_message = "Could not read the PDF. The file may be corrupt or unsupported."


class ExportFailure(TableExtractionError):
    user_message = "Failed to write the Excel file."


# ============================================================
# Helper Functions
# ============================================================

def round_coord(value: float) -> int:
    """
    Round half up to the nearest integer.

    Examples:
    - 20.5 -> 21  (round() gives 20)
    - 20.4 -> 20
    - -0.5 -> 0
    """
    return int(math.floor(value + 0.5))
