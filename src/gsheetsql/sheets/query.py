"""
Query side of the table operations, the equivalent of

    SELECT <columns> FROM <sheet> WHERE <conditions>

run against the values of a sheet that have already been fetched.
A grid is a list of rows, row 0 being the column names and the rest data.
Rows coming back from the Sheets API stop at the last non-empty cell so they
can be shorter than the header, a cell past the end of a row is 'absent'
and is never treated as an empty string.

Nothing here mutates the grid passed in, every result is a new list.
"""
import logging

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Self

from . import WILDCARD

logger = logging.getLogger(__name__)

Row = list[Any]
Grid = list[Row]

# what a condition on a column missing from the header does
UNKNOWN_COLUMN_MATCH_NONE = "none"
UNKNOWN_COLUMN_MATCH_ANY = "any"

@dataclass(frozen=True)
class Condition():
    """
    A WHERE term: the cell in column 'header' must contain 'value'.
    Whether 'contains' means substring (select) or equality (update) is up
    to the operation using it.
    """
    header: str
    value: str

    @classmethod
    def coerce(cls, condition: Self|Mapping|Sequence) -> Self:
        """
        Accept a Condition, a {'header': ..., 'value': ...} mapping or a
        (header, value) pair.
        """
        if isinstance(condition, Condition):
            return condition
        if isinstance(condition, Mapping):
            try:
                return cls(condition['header'], condition['value'])
            except KeyError as e:
                raise ValueError(f"condition is missing {e.args[0]!r}: {dict(condition)}") from e
        if isinstance(condition, Sequence) and not isinstance(condition, str) and len(condition) == 2:
            return cls(condition[0], condition[1])
        raise TypeError(f"cannot make a condition from {condition!r}")

    @classmethod
    def coerce_all(cls, conditions: Iterable|None) -> list[Self]:
        return [cls.coerce(c) for c in (conditions or [])]

def cell(row: Sequence, index: int) -> Any:
    """Cell at index, or None if the row stops before it"""
    return row[index] if 0 <= index < len(row) else None

def column_index(headers: Sequence[str], name: str) -> int|None:
    """0-based position of the first header equal to name, None if not there"""
    for i, h in enumerate(headers):
        if h == name:
            return i
    return None

def column_indexes(headers: Sequence[str], names: str|Iterable[str]) -> list[int]:
    """
    Resolve a projection to header positions in the requested order.
    The wildcard gives every column.  Names that are not in the header are
    skipped, a name asked for twice is returned twice.
    """
    if isinstance(names, str):
        if names == WILDCARD:
            return list(range(len(headers)))
        names = [names]
    indexes = []
    for n in names:
        i = column_index(headers, n)
        if i is None:
            logger.debug("column %r not in header, leaving it out", n)
        else:
            indexes.append(i)
    return indexes

def _contains(value: Any, keyword: str) -> bool:
    return value is not None and str(keyword) in str(value)

def _row_matches(row: Sequence, keyword: str, index: int|None) -> bool:
    if index is None:
        return any(_contains(v, keyword) for v in row)
    return _contains(cell(row, index), keyword)

def filter_rows(grid: Sequence[Sequence], conditions: Iterable|None,
                unknown_column: str = UNKNOWN_COLUMN_MATCH_NONE) -> Grid:
    """
    The data rows (header excluded) whose cells contain every condition value,
    case sensitive substring match, conditions ANDed together.

    unknown_column: what to do with a condition on a column that isn't in the
                    header.  'none' (default) matches no rows, 'any' keeps rows
                    where any cell contains the value.
    """
    if unknown_column not in (UNKNOWN_COLUMN_MATCH_NONE, UNKNOWN_COLUMN_MATCH_ANY):
        raise ValueError(f"unknown_column must be 'none' or 'any' not: {unknown_column}")
    if not grid:
        return []
    headers = grid[0]
    rows = [list(r) for r in grid[1:]]
    for c in Condition.coerce_all(conditions):
        index = column_index(headers, c.header)
        if index is None:
            logger.warning("condition column %r is not in the header", c.header)
            if unknown_column == UNKNOWN_COLUMN_MATCH_NONE:
                return []
        rows = [r for r in rows if _row_matches(r, c.value, index)]
    return rows

def project(rows: Iterable[Sequence], indexes: Sequence[int]) -> Grid:
    """Reduce each row to the given column positions, absent cells stay None"""
    return [[cell(r, i) for i in indexes] for r in rows]

def to_records(grid: Sequence[Sequence]) -> list[dict[str, str]]:
    """
    Turn a header + rows grid into one dict per data row keyed by header.
    Values are strings, an absent cell is ''.
    """
    if not grid:
        return []
    headers = grid[0]
    records = []
    for row in grid[1:]:
        records.append({h: "" if cell(row, i) is None else str(cell(row, i))
                        for i, h in enumerate(headers)})
    return records

def select(grid: Sequence[Sequence], columns: str|Iterable[str] = WILDCARD,
           conditions: Iterable|None = None, as_records: bool = False,
           unknown_column: str = UNKNOWN_COLUMN_MATCH_NONE) -> Grid|list[dict[str, str]]:
    """
    SELECT columns WHERE conditions over a grid.

    grid:           header row followed by data rows
    columns:        column names to return in that order, or '*' for all
    conditions:     Condition (or {'header','value'} mappings), ANDed, each one
                    a substring match on its column
    as_records:     False returns a grid starting with the projected header,
                    True returns a list of dicts, one per matching row

    A condition that never matches gives back just the header, never an error.
    """
    headers = list(grid[0]) if grid else []
    indexes = column_indexes(headers, columns)
    rows = filter_rows(grid, conditions, unknown_column)
    result = [[headers[i] for i in indexes]] + project(rows, indexes)
    logger.debug("select %d of %d rows, %d columns", len(rows), max(len(grid) - 1, 0), len(indexes))
    if as_records:
        return to_records(result)
    return result
