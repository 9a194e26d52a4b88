import unittest

from csv_viewer.selection import Selection


class SelectionTests(unittest.TestCase):
    def test_plain_click_selects_only_index(self):
        selection = Selection()
        selection.select_column(1)
        selection.select_column(3)
        self.assertEqual(selection.columns, {3})
        self.assertEqual(selection.last_column, 3)

    def test_shift_extends_range_from_anchor(self):
        selection = Selection()
        selection.select_row(4)
        selection.select_column(2)
        selection.select_column(5, extend=True)
        self.assertEqual(selection.columns, {2, 3, 4, 5})
        self.assertEqual(selection.rows, set())
        self.assertIsNone(selection.last_row)

    def test_extend_backwards(self):
        selection = Selection()
        selection.select_row(5)
        selection.select_row(2, extend=True)
        self.assertEqual(selection.rows, {2, 3, 4, 5})
        self.assertEqual(selection.last_row, 2)

    def test_extend_without_anchor_selects_index(self):
        selection = Selection()
        selection.select_row(3, extend=True)
        self.assertEqual(selection.rows, {3})

    def test_toggle_flips_membership(self):
        selection = Selection()
        selection.select_row(1)
        selection.select_row(4, toggle=True)
        self.assertEqual(selection.rows, {1, 4})
        selection.select_row(1, toggle=True)
        self.assertEqual(selection.rows, {4})

    def test_extend_with_toggle_unions_range(self):
        selection = Selection()
        selection.select_column(0)
        selection.select_column(7, toggle=True)
        selection.select_column(9, extend=True, toggle=True)
        self.assertEqual(selection.columns, {0, 7, 8, 9})

    def test_row_selection_clears_columns(self):
        selection = Selection()
        selection.select_column(2)
        selection.select_row(0)
        self.assertEqual(selection.columns, set())
        self.assertIsNone(selection.last_column)
        self.assertEqual(selection.rows, {0})

    def test_remap_rows_follows_moved_rows(self):
        selection = Selection()
        selection.select_row(0)
        selection.select_row(2, toggle=True)
        # new order: old rows 2, 0, 1
        selection.remap_rows([2, 0, 1])
        self.assertEqual(selection.rows, {0, 1})
        self.assertEqual(selection.last_row, 0)

    def test_is_cell_selected(self):
        selection = Selection()
        selection.select_column(1)
        self.assertTrue(selection.is_cell_selected(9, 1))
        self.assertFalse(selection.is_cell_selected(1, 0))
