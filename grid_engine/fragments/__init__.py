"""
Fragment Extraction Module
==========================
Positioned text fragments from PDF pages.
"""

from .extractor import (
    FragmentExtractor, ExtractConfig, build_page_fragments, extract_fragments
)

__all__ = ['FragmentExtractor', 'ExtractConfig', 'build_page_fragments', 'extract_fragments']
