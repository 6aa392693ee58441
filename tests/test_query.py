import copy

import pytest

from gsheetsql.sheets.query import (Condition, column_index, column_indexes, filter_rows,
                                    select, to_records)

def people():
    return [
        ["name", "age", "city"],
        ["Alice", "30", "Boston"],
        ["Bob", "25", "Denver"],
        ["Carol", "35"],
        ["Dan", "250", "Austin"],
    ]

def test_select_scenario():
    grid = [["name", "age"], ["Alice", "30"], ["Bob", "25"]]
    result = select(grid, ["name"], [{"header": "age", "value": "25"}])
    assert(result == [["name"], ["Bob"]])

def test_select_wildcard_no_conditions():
    grid = people()
    # short rows come back padded with absent cells
    expected = [r + [None] * (3 - len(r)) for r in grid]
    assert(expected[3] == ["Carol", "35", None])
    assert(select(grid, "*") == expected)
    assert(select(grid, "*", []) == expected)
    assert(grid[3] == ["Carol", "35"])

def test_select_substring_match():
    result = select(people(), ["name"], [Condition("age", "25")])
    # substring, so 250 matches too
    assert(result == [["name"], ["Bob"], ["Dan"]])

def test_select_case_sensitive():
    assert(select(people(), ["name"], [Condition("city", "boston")]) == [["name"]])
    assert(select(people(), ["name"], [Condition("city", "Boston")]) == [["name"], ["Alice"]])

def test_select_empty_value_matches_all():
    grid = [["name", "age"], ["Alice", "30"], ["Bob", "25"]]
    assert(select(grid, "*", [Condition("age", "")]) == grid)

def test_select_conditions_are_anded():
    result = select(people(), ["name"], [Condition("age", "25"), Condition("city", "Aus")])
    assert(result == [["name"], ["Dan"]])

def test_select_projection_order_and_duplicates():
    result = select(people(), ["city", "name", "city"], [Condition("name", "Alice")])
    assert(result == [["city", "name", "city"], ["Boston", "Alice", "Boston"]])

def test_select_projection_skips_unknown_columns():
    result = select(people(), ["name", "phone"], [Condition("name", "Bob")])
    assert(result == [["name"], ["Bob"]])

def test_select_empty_projection():
    result = select(people(), [], [Condition("age", "3")])
    assert(result == [[], [], []])

def test_select_no_match_is_header_only():
    assert(select(people(), ["name", "age"], [Condition("name", "Zed")]) == [["name", "age"]])

def test_select_short_rows():
    result = select(people(), ["name", "city"], [Condition("name", "Carol")])
    assert(result == [["name", "city"], ["Carol", None]])
    # a row without the condition cell can't match it
    assert(select(people(), ["name"], [Condition("city", "")]) == [["name"], ["Alice"], ["Bob"], ["Dan"]])

def test_select_unknown_condition_column_matches_nothing():
    assert(select(people(), ["name"], [Condition("phone", "5")]) == [["name"]])

def test_filter_rows_unknown_column_any():
    rows = filter_rows(people(), [Condition("phone", "Den")], unknown_column="any")
    assert(rows == [["Bob", "25", "Denver"]])
    with pytest.raises(ValueError):
        filter_rows(people(), [], unknown_column="some")

def test_select_never_adds_rows():
    grid = people()
    everything = select(grid, "*", [])
    for c in [[Condition("age", "3")], [Condition("name", "")], [Condition("city", "x")],
              [Condition("nope", "a")], [Condition("age", "2"), Condition("age", "5")]]:
        assert(len(select(grid, "*", c)) <= len(everything))

def test_select_does_not_mutate_input():
    grid = people()
    before = copy.deepcopy(grid)
    result = select(grid, "*", [Condition("age", "25")])
    assert(grid == before)
    result[1][0] = "changed"
    assert(grid == before)

def test_select_records():
    records = select(people(), ["name", "city"], [Condition("age", "3")], as_records=True)
    assert(records == [{"name": "Alice", "city": "Boston"}, {"name": "Carol", "city": ""}])

def test_select_empty_grid():
    assert(select([], "*") == [[]])
    assert(select([], "*", as_records=True) == [])

def test_to_records_stringifies():
    grid = [["n", "ok"], [1, True], ["x"]]
    assert(to_records(grid) == [{"n": "1", "ok": "True"}, {"n": "x", "ok": ""}])
    assert(to_records([]) == [])
    assert(to_records([["a"]]) == [])

def test_column_lookup():
    headers = ["a", "b", "a"]
    assert(column_index(headers, "a") == 0)
    assert(column_index(headers, "c") is None)
    assert(column_indexes(headers, "*") == [0, 1, 2])
    assert(column_indexes(headers, "b") == [1])
    assert(column_indexes(headers, ["b", "c", "a"]) == [1, 0])

def test_condition_coerce():
    assert(Condition.coerce({"header": "a", "value": "1"}) == Condition("a", "1"))
    assert(Condition.coerce(("a", "1")) == Condition("a", "1"))
    c = Condition("a", "1")
    assert(Condition.coerce(c) is c)
    with pytest.raises(ValueError):
        Condition.coerce({"header": "a"})
    with pytest.raises(TypeError):
        Condition.coerce("a=1")
    assert(Condition.coerce_all(None) == [])
