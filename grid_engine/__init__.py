"""
Table Reconstruction Engine
===========================
Rebuilds a cell grid from positioned PDF text and exports it as a workbook.

Architecture:
- fragments: PDF text runs with positions (pdfplumber)
- clustering: Column (document-global) and row (per page) detection
- grid: Cell assembly and normalization
- export: Workbook output (openpyxl)

Usage:
    from grid_engine import TablePipeline
    pipeline = TablePipeline()
    grid, debug = pipeline.run(pdf_bytes)
    pipeline.export(grid, "pdf_table.xlsx")
"""

from .types import (
    TextFragment,
    RowBand,
    ColumnSet,
    Grid,
    TableExtractionError,
    NoTextFound,
    NoRowsDetected,
    ExtractionFailure,
    ExportFailure,
)
from .pipeline import TablePipeline, PipelineConfig, DebugBundle, run_table_pipeline

__all__ = [
    'TextFragment',
    'RowBand',
    'ColumnSet',
    'Grid',
    'TableExtractionError',
    'NoTextFound',
    'NoRowsDetected',
    'ExtractionFailure',
    'ExportFailure',
    'TablePipeline',
    'PipelineConfig',
    'DebugBundle',
    'run_table_pipeline',
]

__version__ = '1.0.0'
