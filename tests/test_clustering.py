import unittest
import sys
import os

# Add parent directory to path to allow importing modules from root
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_engine.types import TextFragment, round_coord
from grid_engine.clustering import (
    ClusterConfig, ColumnClusterer, RowClusterer,
    cluster_positions, cluster_columns, cluster_rows,
)


def frag(text, x, y, page=1):
    return TextFragment(text=text, x=x, y=y, page=page)


class TestRoundCoord(unittest.TestCase):
    def test_half_rounds_up(self):
        self.assertEqual(round_coord(20.5), 21)
        self.assertEqual(round_coord(21.5), 22)
        self.assertEqual(round_coord(20.49), 20)
        self.assertEqual(round_coord(-0.5), 0)
        self.assertEqual(round_coord(-1.6), -2)


class TestClusterPositions(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(cluster_positions([], 18), [])

    def test_single_value(self):
        self.assertEqual(cluster_positions([42.2], 18), [42])

    def test_duplicates_collapse(self):
        self.assertEqual(cluster_positions([10, 10.2, 9.8], 0), [10])

    def test_merge_averages_center(self):
        # 0 and 20 are 20 apart (> 18); 22 merges into 20 -> 21
        self.assertEqual(cluster_positions([0, 20, 0, 22], 18), [0, 21])

    def test_threshold_is_inclusive(self):
        self.assertEqual(cluster_positions([0, 18], 18), [9])
        self.assertEqual(cluster_positions([0, 19], 18), [0, 19])

    def test_center_drifts_with_each_merge(self):
        # 0 -> 1 (with 2) -> 2.5 (with 4) -> 4.25 (with 6)
        self.assertEqual(cluster_positions([0, 2, 4, 6], 4), [4.25])

    def test_descending_order(self):
        self.assertEqual(cluster_positions([50, 100, 75], 4, descending=True), [100, 75, 50])

    def test_idempotent_on_own_output(self):
        values = [0, 3, 40, 44, 100, 131, 150, 152, 300]
        for threshold in (0, 4, 18, 30):
            centers = cluster_positions(values, threshold)
            again = cluster_positions(centers, threshold)
            self.assertEqual(again, [round_coord(c) for c in centers])

    def test_idempotent_integer_centers(self):
        centers = cluster_positions([0, 20, 22], 18)
        self.assertEqual(centers, [0, 21])
        self.assertEqual(cluster_positions(centers, 18), centers)

    def test_centers_pairwise_beyond_threshold(self):
        values = [0, 5, 11, 17, 30, 33, 48, 70, 71, 90, 120]
        threshold = 10
        centers = cluster_positions(values, threshold)
        self.assertEqual(centers, sorted(centers))
        for a, b in zip(centers, centers[1:]):
            self.assertGreater(b - a, threshold)

    def test_count_non_increasing_with_threshold(self):
        values = [0, 2, 50, 52, 100, 102]
        counts = [len(cluster_positions(values, t)) for t in (0, 1, 2, 10, 48, 60, 200)]
        self.assertEqual(counts, [6, 6, 3, 3, 3, 2, 1])
        for a, b in zip(counts, counts[1:]):
            self.assertGreaterEqual(a, b)

    def test_row_count_non_increasing_with_threshold(self):
        values = [700, 698, 650, 648, 600]
        counts = [len(cluster_positions(values, t, descending=True)) for t in (0, 2, 10, 50, 120)]
        self.assertEqual(counts, [5, 3, 3, 2, 1])
        for a, b in zip(counts, counts[1:]):
            self.assertGreaterEqual(a, b)


class TestColumnClusterer(unittest.TestCase):
    def test_document_global(self):
        fragments = [
            frag("A", 0, 100, page=1),
            frag("B", 20, 100, page=1),
            frag("X", 0, 50, page=2),
            frag("Y", 22, 50, page=2),
        ]
        self.assertEqual(cluster_columns(fragments, 18), [0, 21])

    def test_uses_configured_threshold(self):
        fragments = [frag("A", 0, 10), frag("B", 20, 10)]
        self.assertEqual(ColumnClusterer(ClusterConfig(column_threshold=25)).cluster(fragments), [10])
        self.assertEqual(ColumnClusterer(ClusterConfig(column_threshold=5)).cluster(fragments), [0, 20])

    def test_empty(self):
        self.assertEqual(ColumnClusterer().cluster([]), [])


class TestRowClusterer(unittest.TestCase):
    def test_bands_top_to_bottom(self):
        fragments = [frag("low", 0, 50), frag("high", 0, 100), frag("mid", 0, 75)]
        bands = RowClusterer().cluster_page(fragments, page_num=1)
        self.assertEqual([b.center for b in bands], [100, 75, 50])
        self.assertEqual([b.fragments[0].text for b in bands], ["high", "mid", "low"])

    def test_band_collects_fragments_within_threshold(self):
        fragments = [frag("a", 0, 100), frag("b", 30, 101.6), frag("c", 60, 99)]
        bands = RowClusterer(ClusterConfig(row_threshold=4)).cluster_page(fragments, page_num=1)
        self.assertEqual(len(bands), 1)
        self.assertEqual({f.text for f in bands[0].fragments}, {"a", "b", "c"})

    def test_pages_ascending(self):
        fragments = [frag("p2", 0, 100, page=2), frag("p1", 0, 100, page=1)]
        bands = cluster_rows(fragments)
        self.assertEqual([b.page for b in bands], [1, 2])
        self.assertEqual([b.fragments[0].text for b in bands], ["p1", "p2"])

    def test_rows_never_merge_across_pages(self):
        fragments = [frag("a", 0, 100, page=1), frag("b", 0, 100, page=2)]
        self.assertEqual(len(cluster_rows(fragments)), 2)

    def test_empty_page(self):
        self.assertEqual(RowClusterer().cluster_page([], page_num=3), [])


if __name__ == "__main__":
    unittest.main()
