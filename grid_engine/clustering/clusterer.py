"""
Coordinate Clustering
=====================
Greedy single-pass clustering of rounded coordinates.

- Columns: x values of the whole document, walked ascending (threshold 18)
- Rows: y values of one page, walked descending (threshold 4)

Each walk is a fold over the sorted distinct values: a value within the
threshold of an existing center pulls that center to their midpoint,
otherwise it opens a new cluster.
"""

from dataclasses import dataclass
from functools import reduce
from typing import List, Dict, Iterable, Optional

from ..types import TextFragment, RowBand, ColumnSet, round_coord


@dataclass
class ClusterConfig:
    """Configuration for row/column clustering"""
    column_threshold: float = 18.0  # horizontal spacing varies more
    row_threshold: float = 4.0


def _merge_into(centers: List[float], value: float, threshold: float) -> List[float]:
    """Fold step: merge value into the first center within threshold, or open a cluster."""
    for i, c in enumerate(centers):
        if abs(c - value) <= threshold:
            return centers[:i] + [(c + value) / 2] + centers[i + 1:]
    return centers + [value]


def cluster_positions(
    values: Iterable[float],
    threshold: float,
    descending: bool = False
) -> List[float]:
    """
    Cluster coordinates into ordered centers.

    Args:
        values: Raw coordinates (duplicates allowed)
        threshold: Max distance for a value to join a center
        descending: Walk and return centers high-to-low

    Returns:
        Cluster centers, sorted in walk direction
    """
    distinct = sorted({round_coord(v) for v in values}, reverse=descending)
    centers = reduce(lambda acc, v: _merge_into(acc, v, threshold), distinct, [])
    return sorted(centers, reverse=descending)


class ColumnClusterer:
    """Document-global column detection."""

    def __init__(self, config: Optional[ClusterConfig] = None):
        self.config = config or ClusterConfig()

    def cluster(self, fragments: Iterable[TextFragment]) -> ColumnSet:
        """Column centers for all fragments of the document, ascending."""
        return cluster_positions(
            (f.x for f in fragments),
            self.config.column_threshold,
        )


class RowClusterer:
    """Per-page row band detection."""

    def __init__(self, config: Optional[ClusterConfig] = None):
        self.config = config or ClusterConfig()

    def cluster_page(self, fragments: List[TextFragment], page_num: int) -> List[RowBand]:
        """
        Row bands for one page, top to bottom.

        A fragment joins every band whose center is within the row
        threshold of its rounded y.
        """
        threshold = self.config.row_threshold
        centers = cluster_positions(
            (f.y for f in fragments),
            threshold,
            descending=True,
        )
        return [
            RowBand(
                center=center,
                page=page_num,
                fragments=[f for f in fragments if abs(f.rounded_y - center) <= threshold],
            )
            for center in centers
        ]

    def cluster(self, fragments: Iterable[TextFragment]) -> List[RowBand]:
        """Row bands for a whole document: pages ascending, rows top to bottom."""
        pages: Dict[int, List[TextFragment]] = {}
        for frag in fragments:
            pages.setdefault(frag.page, []).append(frag)

        bands: List[RowBand] = []
        for page_num in sorted(pages):
            bands.extend(self.cluster_page(pages[page_num], page_num))
        return bands


def cluster_columns(fragments: Iterable[TextFragment], threshold: float = 18.0) -> ColumnSet:
    """Convenience function for column clustering"""
    return ColumnClusterer(ClusterConfig(column_threshold=threshold)).cluster(fragments)


def cluster_rows(fragments: Iterable[TextFragment], threshold: float = 4.0) -> List[RowBand]:
    """Convenience function for row clustering"""
    return RowClusterer(ClusterConfig(row_threshold=threshold)).cluster(fragments)
