"""
Edit planning for the table operations.  Nothing here talks to Google, each
function works out which rows or cells have to be written and with what, and
hands back a plan the spreadsheet client turns into values requests:

    INSERT INTO <sheet> VALUES (...)            -> plan_insert()
    UPDATE <sheet> SET ... WHERE ...            -> plan_update()
    ALTER TABLE <sheet> ADD COLUMN ...          -> plan_append_columns()

Records are dicts of column name to value.  A column a record doesn't give
a value for is left absent in the planned row: None in the middle of a row,
and trimmed off the end.  The Sheets API skips null cells on write so absent
cells never overwrite what is already in the sheet.
"""
import logging

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .notation import append_range, cell_span_range, column_letter, row_range
from .query import Condition, Row, cell, column_index
from .resources import ValueRange

logger = logging.getLogger(__name__)

def _trim(row: Row) -> Row:
    end = len(row)
    while end and row[end - 1] is None:
        end -= 1
    return row[:end]

def row_from_record(headers: Sequence[str], record: Mapping[str, Any]) -> Row:
    """
    Lay a record out in header order.
    A header the record has no value for (missing key or None) is absent.
    A record that shares no keys with the header gives an empty row.
    """
    return _trim([record.get(h) for h in headers])

def merge_rows(new: Sequence, old: Sequence) -> Row:
    """Cells from new, falling back to old wherever new is absent"""
    merged = [cell(new, i) if cell(new, i) is not None else cell(old, i)
              for i in range(max(len(new), len(old)))]
    return _trim(merged)

@dataclass
class InsertPlan():
    """Rows to append after the last row of a table"""
    rows: list[Row] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def a1(self, sheet: str) -> str:
        return append_range(sheet)

    def to_value_range(self, sheet: str) -> ValueRange:
        return ValueRange(self.a1(sheet), "ROWS", [list(r) for r in self.rows])

@dataclass
class RowUpdate():
    """
    Full replacement content for one existing row.
    row_number is the sheet row, 1-based, so the header is row 1 and the
    first data row is row 2.
    """
    row_number: int
    values: Row = field(default_factory=list)

    def a1(self, sheet: str) -> str:
        return row_range(sheet, self.row_number)

    def to_value_range(self, sheet: str) -> ValueRange:
        return ValueRange(self.a1(sheet), "ROWS", [list(self.values)])

@dataclass
class ColumnAppendPlan():
    """
    New column names written into the header row right after the last
    existing column.  Positions are 0-based and inclusive.
    """
    start_position: int
    end_position: int
    names: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # both ends have to be addressable
        column_letter(self.start_position)
        column_letter(self.end_position)

    @property
    def start_col(self) -> str:
        return column_letter(self.start_position)

    @property
    def end_col(self) -> str:
        return column_letter(self.end_position)

    def a1(self, sheet: str) -> str:
        return cell_span_range(sheet, self.start_position, self.end_position, 1)

    def to_value_range(self, sheet: str) -> ValueRange:
        return ValueRange(self.a1(sheet), "ROWS", [list(self.names)])

def plan_insert(headers: Sequence[str], records: Iterable[Mapping[str, Any]]) -> InsertPlan:
    """
    One new row per record, cells in header order.
    Existing rows are never read, the rows are only ever appended.
    """
    rows = [row_from_record(headers, r) for r in records]
    logger.debug("insert plan: %d rows", len(rows))
    return InsertPlan(rows)

def matching_row_numbers(grid: Sequence[Sequence], condition: Condition) -> list[int]:
    """
    Sheet row numbers (1-based, header is row 1) of the data rows whose
    cell in the condition column is exactly equal to the condition value.
    A column that isn't in the header matches nothing.
    """
    if not grid:
        return []
    index = column_index(grid[0], condition.header)
    if index is None:
        logger.warning("update condition column %r is not in the header", condition.header)
        return []
    return [n + 1 for n in range(1, len(grid)) if cell(grid[n], index) == condition.value]

def plan_update(grid: Sequence[Sequence], column_values: Mapping[str, Any],
                conditions: Iterable) -> list[RowUpdate]:
    """
    Plan an UPDATE ... SET column_values WHERE conditions.

    Unlike select(), each condition is an exact match and the conditions are
    not ANDed: every condition picks its own rows and they all get updated,
    in condition order.  A row picked by two conditions shows up twice with
    the same content.

    Each planned row is the full merged row, column_values where given and
    the current cell otherwise.
    """
    if not grid:
        return []
    headers = grid[0]
    new_values = row_from_record(headers, column_values)
    updates = []
    for c in Condition.coerce_all(conditions):
        numbers = matching_row_numbers(grid, c)
        if not numbers:
            logger.debug("no rows where %s == %r", c.header, c.value)
        for n in numbers:
            updates.append(RowUpdate(n, merge_rows(new_values, grid[n - 1])))
    logger.debug("update plan: rows %s", [u.row_number for u in updates])
    return updates

def plan_append_columns(current_header_count: int, new_column_names: Sequence[str]) -> ColumnAppendPlan:
    """
    Work out where new columns go, contiguous after the last existing one.
    Raises NotationOutOfRangeError if that runs past column 'Z'.
    """
    names = [str(n) for n in new_column_names]
    if not names:
        raise ValueError("no column names to add")
    start = int(current_header_count)
    if start < 0:
        raise ValueError(f"header count cannot be negative: {start}")
    plan = ColumnAppendPlan(start, start + len(names) - 1, names)
    logger.debug("add columns %s:%s", plan.start_col, plan.end_col)
    return plan
