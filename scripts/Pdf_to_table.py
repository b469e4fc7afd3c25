"""
PDF table to Excel converter.

Usage:
    python -m scripts.Pdf_to_table path/to/input.pdf [output.xlsx] [--debug]
"""

import os
import sys
import threading
from typing import List, Tuple, Optional, Union

import pyperclip

from grid_engine import TablePipeline, TableExtractionError
from grid_engine.pipeline import PipelineConfig, DebugBundle
from grid_engine.fragments.extractor import PdfSource
from grid_engine.types import Grid


class ConversionBusy(TableExtractionError):
    user_message = "A conversion is already running."


class PdfTableConverter:
    """Converts a PDF's positioned text into an Excel table, one run at a time."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig.default()
        self.grid: Grid = []
        self.debug_bundle: Optional[DebugBundle] = None
        self.output_path = ""
        self._lock = threading.Lock()

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    def convert(
        self,
        source: PdfSource,
        output_path: Union[str, os.PathLike, None] = None
    ) -> Tuple[Grid, DebugBundle]:
        """
        Run the full pipeline and write the workbook.

        Raises:
            ConversionBusy: another conversion is in flight
            TableExtractionError: any pipeline failure (no file written)
        """
        if not self._lock.acquire(blocking=False):
            raise ConversionBusy()
        try:
            # Drop the previous result before running
            self.grid = []
            self.debug_bundle = None
            self.output_path = ""

            pipeline = TablePipeline(self.config)
            grid, debug = pipeline.run(source)
            written = pipeline.export(grid, output_path, debug)

            self.grid = grid
            self.debug_bundle = debug
            self.output_path = written
            return grid, debug
        finally:
            self._lock.release()

    def to_tsv(self, grid: Optional[Grid] = None) -> str:
        """Tab-separated text of the grid (pastes into spreadsheets as cells)"""
        rows = self.grid if grid is None else grid
        return "\n".join("\t".join(row) for row in rows)

    def copy_to_clipboard(self, text: str = None) -> bool:
        """Copy text (default: last grid as TSV) to clipboard"""
        try:
            if text is None: text = self.to_tsv()
            pyperclip.copy(text)
            return True
        except pyperclip.PyperclipException as e:
            print(f"Clipboard error: {e}")
            return False


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    debug = "--debug" in args
    args = [a for a in args if a != "--debug"]

    if not args:
        print("Usage: python -m scripts.Pdf_to_table path/to/input.pdf [output.xlsx] [--debug]")
        return 1

    pdf_path = args[0]
    output_path = args[1] if len(args) > 1 else None

    if not os.path.exists(pdf_path):
        print(f"Error: File not found: {pdf_path}", file=sys.stderr)
        return 1

    config = PipelineConfig.default()
    config.debug = debug

    print(f"Processing: {pdf_path}")
    converter = PdfTableConverter(config)
    try:
        with open(pdf_path, "rb") as f:
            grid, bundle = converter.convert(f.read(), output_path)
    except TableExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if debug:
        print(bundle.summary())
    print(f"Table: {len(grid)} rows x {bundle.grid_cols} columns")
    print(f"Saved: {converter.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
