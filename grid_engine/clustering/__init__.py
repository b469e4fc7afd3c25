"""
Clustering Module
=================
Column and row detection from fragment coordinates.
"""

from .clusterer import (
    ClusterConfig,
    ColumnClusterer,
    RowClusterer,
    cluster_positions,
    cluster_columns,
    cluster_rows,
)

__all__ = [
    'ClusterConfig', 'ColumnClusterer', 'RowClusterer',
    'cluster_positions', 'cluster_columns', 'cluster_rows',
]
