"""
Table Pipeline
==============
Single entry point for turning a PDF into a cell grid and a workbook.
Orchestrates: Fragments -> Columns + Rows -> Grid -> Normalized Grid -> Workbook

All failures surface here as TableExtractionError subclasses; the
components below only return (possibly empty) results.
"""

import os
from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Optional, Union

from .types import (
    TextFragment, RowBand, ColumnSet, Grid,
    NoTextFound, NoRowsDetected, ExtractionFailure, ExportFailure,
)
from .fragments import FragmentExtractor, ExtractConfig
from .fragments.extractor import PdfSource
from .clustering import ColumnClusterer, RowClusterer, ClusterConfig
from .grid import GridAssembler, normalize_grid, grid_width
from .export import write_table_workbook, DEFAULT_TABLE_SHEET, DEFAULT_TABLE_FILENAME


@dataclass
class PipelineConfig:
    """Complete pipeline configuration"""
    extract_config: ExtractConfig = field(default_factory=ExtractConfig)
    cluster_config: ClusterConfig = field(default_factory=ClusterConfig)

    # Output
    sheet_name: str = DEFAULT_TABLE_SHEET
    output_filename: str = DEFAULT_TABLE_FILENAME

    # Debug
    debug: bool = False

    @classmethod
    def default(cls) -> 'PipelineConfig':
        """Default thresholds: columns 18, rows 4"""
        return cls()

    @classmethod
    def loose(cls) -> 'PipelineConfig':
        """Wider thresholds for ragged alignment"""
        return cls(cluster_config=ClusterConfig(column_threshold=24.0, row_threshold=6.0))


@dataclass
class DebugBundle:
    """Debug information from pipeline run"""
    pages_count: int = 0
    fragments_count: int = 0
    fragments_per_page: Dict[int, int] = field(default_factory=dict)

    columns: List[float] = field(default_factory=list)
    rows_per_page: Dict[int, int] = field(default_factory=dict)

    grid_rows: int = 0
    grid_cols: int = 0
    blank_rows: int = 0

    output_path: str = ""

    def summary(self) -> str:
        """Generate summary string"""
        lines = [
            "=" * 60,
            "TABLE ENGINE DEBUG SUMMARY",
            "=" * 60,
            f"Pages: {self.pages_count}",
            f"Fragments: {self.fragments_count}",
            f"Columns: {len(self.columns)}",
            f"Column Centers: {[round(c, 1) for c in self.columns[:20]]}",
            "",
            f"Grid: {self.grid_rows} rows x {self.grid_cols} cols",
            f"Blank Rows: {self.blank_rows}",
            "",
            "Rows Per Page:",
        ]
        for page_num in sorted(self.rows_per_page)[:10]:
            lines.append(
                f"  page {page_num}: {self.rows_per_page[page_num]} rows, "
                f"{self.fragments_per_page.get(page_num, 0)} fragments"
            )
        if self.output_path:
            lines.append("")
            lines.append(f"Output: {self.output_path}")
        lines.append("=" * 60)
        return "\n".join(lines)


class TablePipeline:
    """
    Main table reconstruction pipeline.

    Usage:
        pipeline = TablePipeline()
        grid, debug = pipeline.run(pdf_bytes)
        pipeline.export(grid, "pdf_table.xlsx")
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig.default()

        # Initialize components
        self.extractor = FragmentExtractor(self.config.extract_config)
        self.column_clusterer = ColumnClusterer(self.config.cluster_config)
        self.row_clusterer = RowClusterer(self.config.cluster_config)
        self.assembler = GridAssembler()

    def _debug(self, msg: str):
        if self.config.debug:
            print(f"[PIPELINE] {msg}")

    def extract(self, source: PdfSource, debug: Optional[DebugBundle] = None) -> List[TextFragment]:
        """
        Read all fragments, pages in ascending order.

        Raises:
            ExtractionFailure: pdfplumber could not read the document
        """
        debug = debug if debug is not None else DebugBundle()
        fragments: List[TextFragment] = []
        try:
            for page_num, page_fragments in self.extractor.iter_pages(source):
                fragments.extend(page_fragments)
                debug.pages_count = page_num
                debug.fragments_per_page[page_num] = len(page_fragments)
        except Exception as e:
            raise ExtractionFailure(f"{ExtractionFailure.user_message} ({e})") from e

        debug.fragments_count = len(fragments)
        self._debug(f"Pages: {debug.pages_count}, fragments: {len(fragments)}")
        return fragments

    def run_from_fragments(
        self,
        fragments: List[TextFragment],
        debug: Optional[DebugBundle] = None
    ) -> Tuple[Grid, DebugBundle]:
        """
        Cluster, assemble and normalize pre-extracted fragments.

        Raises:
            NoTextFound: no fragments
            NoRowsDetected: clustering produced no rows or no columns
        """
        debug = debug if debug is not None else DebugBundle()
        if not fragments:
            raise NoTextFound()

        # 1. Columns (document-global)
        columns: ColumnSet = self.column_clusterer.cluster(fragments)
        debug.columns = list(columns)
        self._debug(f"Columns: {len(columns)} {[round(c, 1) for c in columns]}")

        # 2. Rows (per page, pages ascending)
        bands: List[RowBand] = self.row_clusterer.cluster(fragments)
        for band in bands:
            debug.rows_per_page[band.page] = debug.rows_per_page.get(band.page, 0) + 1
        self._debug(f"Row bands: {len(bands)}")

        if not columns or not bands:
            raise NoRowsDetected()

        # 3. Assemble + normalize
        grid = normalize_grid(self.assembler.assemble(bands, columns))
        if not grid:
            raise NoRowsDetected()

        debug.grid_rows = len(grid)
        debug.grid_cols = grid_width(grid)
        debug.blank_rows = sum(1 for row in grid if not any(row))
        self._debug(f"Grid: {debug.grid_rows} x {debug.grid_cols}")
        return grid, debug

    def run(self, source: PdfSource) -> Tuple[Grid, DebugBundle]:
        """Extract and rebuild the table of a whole PDF."""
        debug = DebugBundle()
        fragments = self.extract(source, debug)
        return self.run_from_fragments(fragments, debug)

    def export(
        self,
        grid: Grid,
        output_path: Union[str, os.PathLike, None] = None,
        debug: Optional[DebugBundle] = None
    ) -> str:
        """
        Write the grid as a single-sheet workbook.

        Raises:
            ExportFailure: the workbook could not be written
        """
        path = output_path or self.config.output_filename
        try:
            written = write_table_workbook(grid, path, sheet_name=self.config.sheet_name)
        except Exception as e:
            raise ExportFailure(f"{ExportFailure.user_message} ({e})") from e
        if debug is not None:
            debug.output_path = written
        self._debug(f"Saved: {written}")
        return written


def run_table_pipeline(
    source: PdfSource,
    output_path: Union[str, os.PathLike, None] = None,
    config: Optional[PipelineConfig] = None
) -> Tuple[Grid, DebugBundle]:
    """
    Convert a PDF into a workbook in one call.
    """
    pipeline = TablePipeline(config)
    grid, debug = pipeline.run(source)
    pipeline.export(grid, output_path, debug)
    return grid, debug
