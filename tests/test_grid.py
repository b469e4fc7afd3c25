import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_engine.types import TextFragment, RowBand
from grid_engine.clustering import cluster_columns, cluster_rows
from grid_engine.grid import (
    GridAssembler, assemble_grid, nearest_column,
    normalize_grid, grid_width, is_rectangular,
)


def frag(text, x, y, page=1):
    return TextFragment(text=text, x=x, y=y, page=page)


def build(fragments, col_threshold=18, row_threshold=4):
    columns = cluster_columns(fragments, col_threshold)
    bands = cluster_rows(fragments, row_threshold)
    return normalize_grid(assemble_grid(bands, columns))


class TestNearestColumn(unittest.TestCase):
    def test_closest_center(self):
        self.assertEqual(nearest_column(2, [0, 21, 60]), 0)
        self.assertEqual(nearest_column(30, [0, 21, 60]), 1)
        self.assertEqual(nearest_column(500, [0, 21, 60]), 2)

    def test_tie_goes_to_lowest_index(self):
        self.assertEqual(nearest_column(10, [0, 20]), 0)
        self.assertEqual(nearest_column(50, [0, 40, 60]), 1)

    def test_no_columns(self):
        self.assertEqual(nearest_column(10, []), -1)


class TestGridAssembler(unittest.TestCase):
    def test_two_by_two_table(self):
        fragments = [
            frag("A", 0, 100),
            frag("B", 20, 100),
            frag("X", 0, 50),
            frag("Y", 22, 50),
        ]
        self.assertEqual(build(fragments), [["A", "B"], ["X", "Y"]])

    def test_single_row_many_columns(self):
        fragments = [frag("a", 0, 300), frag("b", 100, 301), frag("c", 200, 299.5), frag("d", 300, 300)]
        self.assertEqual(build(fragments), [["a", "b", "c", "d"]])

    def test_equidistant_fragment_goes_left(self):
        columns = [0, 20]
        band = RowBand(center=100, page=1, fragments=[frag("mid", 10, 100)])
        self.assertEqual(GridAssembler().assemble_row(band, columns), ["mid", ""])

    def test_two_pages_keep_page_order(self):
        fragments = [frag("second", 0, 700, page=2), frag("first", 0, 100, page=1)]
        self.assertEqual(build(fragments), [["first"], ["second"]])

    def test_same_cell_joined_left_to_right(self):
        columns = [0]
        band = RowBand(center=100, page=1, fragments=[frag("World", 8, 100), frag("Hello", 2, 100)])
        self.assertEqual(GridAssembler().assemble_row(band, columns), ["Hello World"])

    def test_rows_start_full_width(self):
        columns = [0, 50, 100, 150]
        bands = [
            RowBand(center=100, page=1, fragments=[frag("x", 0, 100)]),
            RowBand(center=80, page=1, fragments=[]),
        ]
        rows = assemble_grid(bands, columns)
        self.assertTrue(all(len(row) == len(columns) for row in rows))
        self.assertEqual(rows[1], ["", "", "", ""])

    def test_zero_columns(self):
        band = RowBand(center=100, page=1, fragments=[frag("x", 0, 100)])
        self.assertEqual(GridAssembler().assemble_row(band, []), [])

    def test_dash_fragment_kept(self):
        fragments = [frag("Name", 0, 100), frag("-", 60, 100)]
        self.assertEqual(build(fragments), [["Name", "-"]])

    def test_empty_cell_in_middle(self):
        fragments = [
            frag("h1", 0, 200), frag("h2", 100, 200), frag("h3", 200, 200),
            frag("v1", 0, 180), frag("v3", 200, 180),
        ]
        self.assertEqual(build(fragments), [["h1", "h2", "h3"], ["v1", "", "v3"]])


class TestNormalizer(unittest.TestCase):
    def test_pads_to_widest_row(self):
        grid = normalize_grid([["a"], ["b", "c", "d"], []])
        self.assertEqual(grid, [["a", "", ""], ["b", "c", "d"], ["", "", ""]])
        self.assertTrue(is_rectangular(grid))
        self.assertEqual(grid_width(grid), 3)

    def test_trims_cells(self):
        self.assertEqual(normalize_grid([["  a ", "\tb\n"]]), [["a", "b"]])

    def test_keeps_blank_rows(self):
        grid = normalize_grid([["a", "b"], ["", ""], ["c", "d"]])
        self.assertEqual(len(grid), 3)
        self.assertEqual(grid[1], ["", ""])

    def test_empty(self):
        self.assertEqual(normalize_grid([]), [])
        self.assertEqual(grid_width([]), 0)


if __name__ == "__main__":
    unittest.main()
