import pytest

from csv_viewer.sorting import SortState, compare_values, parse_number, sorted_order


@pytest.mark.parametrize(
    "value, expected",
    [
        ("5", 5.0),
        ("-2.5", -2.5),
        ("+3", 3.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("", None),
        (" 5", None),
        ("5 kg", None),
        ("inf", None),
        ("nan", None),
        ("1_000", None),
    ],
)
def test_parse_number(value, expected):
    assert parse_number(value) == expected


def test_numbers_compare_numerically():
    assert compare_values("5", "30") < 0
    assert compare_values("30", "5") > 0
    assert compare_values("2.0", "2") == 0


def test_text_compares_case_insensitively():
    assert compare_values("apple", "Banana") < 0
    assert compare_values("ABC", "abc") == 0


def test_mixed_pair_falls_back_to_text():
    assert compare_values("10", "abc") < 0
    assert compare_values("9", "10x") > 0


def test_sorted_order_is_stable_in_both_directions():
    rows = [["b", "1"], ["a", "2"], ["B", "3"]]
    assert sorted_order(rows, 0, True) == [1, 0, 2]
    assert sorted_order(rows, 0, False) == [0, 2, 1]


def test_missing_cells_compare_as_empty():
    rows = [["x", "b"], ["y"], ["z", "a"]]
    assert sorted_order(rows, 1, True) == [1, 2, 0]


def test_sort_state_toggles_direction_on_same_column():
    state = SortState()
    assert state.next_direction(2) is True
    state.record(2, True)
    assert state.next_direction(2) is False
    assert state.next_direction(1) is True
    state.reset()
    assert state.column is None
    assert state.ascending is True
