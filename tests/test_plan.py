import copy

import pytest

from gsheetsql.sheets.notation import NotationOutOfRangeError
from gsheetsql.sheets.plan import (ColumnAppendPlan, InsertPlan, RowUpdate, merge_rows,
                                   plan_append_columns, plan_insert, plan_update,
                                   row_from_record)
from gsheetsql.sheets.query import Condition

def grid():
    return [
        ["name", "age", "city"],
        ["Alice", "30", "Boston"],
        ["Bob", "25", "Denver"],
        ["Carol", "25"],
    ]

def test_insert_scenario():
    plan = plan_insert(["name", "age"], [{"name": "Carol"}])
    assert(plan.rows == [["Carol"]])

def test_row_from_record():
    headers = ["name", "age", "city"]
    assert(row_from_record(headers, {"city": "Reno", "name": "Eve"}) == ["Eve", None, "Reno"])
    assert(row_from_record(headers, {"age": "40"}) == [None, "40"])
    assert(row_from_record(headers, {"age": None, "name": "Eve"}) == ["Eve"])
    # empty string is a value, not absent
    assert(row_from_record(headers, {"name": "", "age": "1"}) == ["", "1"])
    # nothing in common with the header is just an empty row
    assert(row_from_record(headers, {"phone": "555"}) == [])

def test_insert_plan_value_range():
    plan = plan_insert(["name", "age"], [{"name": "Eve", "age": "41"}, {"age": "9"}])
    assert(len(plan) == 2)
    assert(plan)
    vr = plan.to_value_range("People")
    assert(vr.range == "People!A:A")
    assert(vr.majorDimension == "ROWS")
    assert(vr.values == [["Eve", "41"], [None, "9"]])
    assert(not plan_insert(["name"], []))

def test_update_merges_with_existing_row():
    updates = plan_update(grid(), {"city": "Miami"}, [Condition("name", "Bob")])
    assert(updates == [RowUpdate(3, ["Bob", "25", "Miami"])])
    assert(updates[0].a1("People") == "People!3:3")

def test_update_fills_short_rows():
    updates = plan_update(grid(), {"city": "Reno"}, [{"header": "name", "value": "Carol"}])
    assert(updates == [RowUpdate(4, ["Carol", "25", "Reno"])])
    updates = plan_update(grid(), {"name": "Caz"}, [Condition("name", "Carol")])
    assert(updates == [RowUpdate(4, ["Caz", "25"])])

def test_update_is_exact_match():
    # '2' is a substring of '25' but update wants equality
    assert(plan_update(grid(), {"city": "X"}, [Condition("age", "2")]) == [])
    updates = plan_update(grid(), {"city": "X"}, [Condition("age", "25")])
    assert([u.row_number for u in updates] == [3, 4])

def test_update_conditions_are_independent():
    updates = plan_update(grid(), {"age": "99"},
                          [Condition("name", "Alice"), Condition("city", "Denver")])
    assert(len(updates) == 2)
    assert(updates[0] == RowUpdate(2, ["Alice", "99", "Boston"]))
    assert(updates[1] == RowUpdate(3, ["Bob", "99", "Denver"]))

def test_update_same_row_twice():
    updates = plan_update(grid(), {"age": "31"},
                          [Condition("name", "Alice"), Condition("city", "Boston")])
    assert([u.row_number for u in updates] == [2, 2])
    assert(updates[0].values == updates[1].values)

def test_update_rows_are_not_shared():
    updates = plan_update(grid(), {"city": "X"}, [Condition("age", "25")])
    updates[0].values[0] = "changed"
    assert(updates[1].values == ["Carol", "25", "X"])

def test_update_idempotent():
    g = grid()
    values = {"age": "50", "city": "Tulsa"}
    first = plan_update(g, values, [Condition("name", "Bob")])
    # apply it and plan again against the result
    applied = copy.deepcopy(g)
    for u in first:
        applied[u.row_number - 1] = list(u.values)
    second = plan_update(applied, values, [Condition("name", "Bob")])
    assert(first == second)

def test_update_does_not_mutate_grid():
    g = grid()
    before = copy.deepcopy(g)
    plan_update(g, {"city": "X", "age": "1"}, [Condition("age", "25")])
    assert(g == before)

def test_update_unknown_column_and_empty():
    assert(plan_update(grid(), {"age": "1"}, [Condition("phone", "555")]) == [])
    assert(plan_update(grid(), {"age": "1"}, []) == [])
    assert(plan_update([], {"age": "1"}, [Condition("name", "Bob")]) == [])
    # a record without any header only rewrites the row as it is
    assert(plan_update(grid(), {"phone": "1"}, [Condition("name", "Bob")]) ==
           [RowUpdate(3, ["Bob", "25", "Denver"])])

def test_update_value_range():
    u = RowUpdate(3, ["Bob", None, "Miami"])
    vr = u.to_value_range("My People")
    assert(vr.range == "'My People'!3:3")
    assert(vr.values == [["Bob", None, "Miami"]])

def test_merge_rows():
    assert(merge_rows([None, "b"], ["A", "B", "C"]) == ["A", "b", "C"])
    assert(merge_rows(["x", None, "z"], ["A"]) == ["x", None, "z"])
    assert(merge_rows([], []) == [])

def test_append_columns():
    plan = plan_append_columns(3, ["email", "phone", "zip"])
    assert(plan == ColumnAppendPlan(3, 5, ["email", "phone", "zip"]))
    assert(plan.start_col == "D")
    assert(plan.end_col == "F")
    assert(plan.a1("People") == "People!D1:F1")
    vr = plan.to_value_range("People")
    assert(vr.values == [["email", "phone", "zip"]])

def test_append_single_column_to_empty_sheet():
    plan = plan_append_columns(0, ["name"])
    assert(plan.a1("People") == "People!A1:A1")

def test_append_columns_out_of_range():
    assert(plan_append_columns(24, ["y", "z"]).end_col == "Z")
    with pytest.raises(NotationOutOfRangeError):
        plan_append_columns(25, ["z", "aa"])
    with pytest.raises(NotationOutOfRangeError):
        plan_append_columns(26, ["aa"])
    with pytest.raises(ValueError):
        plan_append_columns(2, [])
    with pytest.raises(ValueError):
        plan_append_columns(-1, ["a"])

def test_insert_plan_empty():
    assert(len(InsertPlan()) == 0)
