import unittest

from csv_viewer.search import SearchMatch, SearchState

ROWS = [["Ann", "30", "anna@example.com"], ["Bo", "5", "bo@example.com"], ["Hannah", "41", ""]]


class SearchStateTests(unittest.TestCase):
    def test_case_insensitive_substring(self):
        state = SearchState()
        matches = state.search([["Ann", "30"], ["Bo", "5"]], "an")
        self.assertEqual(matches, [SearchMatch(0, 0)])

    def test_matches_are_in_row_then_column_order(self):
        state = SearchState()
        state.search(ROWS, "AN")
        self.assertEqual(state.matches, [SearchMatch(0, 0), SearchMatch(0, 2), SearchMatch(2, 0)])
        self.assertFalse(state.is_column_scoped)

    def test_empty_query_has_no_matches(self):
        state = SearchState()
        self.assertEqual(state.search(ROWS, ""), [])
        self.assertIsNone(state.current_match)

    def test_scoped_search(self):
        state = SearchState()
        state.search(ROWS, "a", scope_columns={2, 0, 9})
        self.assertTrue(state.is_column_scoped)
        self.assertEqual(
            state.matches,
            [SearchMatch(0, 0), SearchMatch(0, 2), SearchMatch(1, 2), SearchMatch(2, 0)],
        )

    def test_advance_wraps_both_ways(self):
        state = SearchState()
        state.search(ROWS, "example")
        self.assertEqual(state.current_match, SearchMatch(0, 2))
        state.advance(forward=True)
        self.assertEqual(state.current_match, SearchMatch(1, 2))
        state.advance(forward=True)
        self.assertEqual(state.current_match, SearchMatch(0, 2))
        state.advance(forward=False)
        self.assertEqual(state.current_match, SearchMatch(1, 2))

    def test_advance_without_matches_is_noop(self):
        state = SearchState()
        state.search(ROWS, "zzz")
        self.assertIsNone(state.advance())
        self.assertEqual(state.current_index, 0)

    def test_new_search_resets_current_index(self):
        state = SearchState()
        state.search(ROWS, "o")
        state.advance()
        state.search(ROWS, "o")
        self.assertEqual(state.current_index, 0)

    def test_match_lookup_helpers(self):
        state = SearchState()
        state.search(ROWS, "bo")
        self.assertTrue(state.is_match(1, 0))
        self.assertTrue(state.is_current(1, 0))
        self.assertTrue(state.is_match(1, 2))
        self.assertFalse(state.is_current(1, 2))
        state.clear()
        self.assertFalse(state.is_match(1, 0))
