import logging

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Self

from googleapiclient.discovery import Resource

from . import WILDCARD
from .notation import header_range, sheet_range
from .ops import appendValues, get, getValues, updateValues
from .plan import plan_append_columns, plan_insert, plan_update
from .query import UNKNOWN_COLUMN_MATCH_NONE, Grid, select
from .resources import Spreadsheet, ValueRange

logger = logging.getLogger(__name__)

class GoogleSpreadSheetTable():
    """
    A spreadsheet where every sheet is a table: the first row has the column
    names, every row after it is a record.  This gives SQL flavoured calls
    over it:

        table = GoogleSpreadSheetTable.connect(spreadsheet_id, access)
        table.select("People", ["name"], [Condition("age", "25")])
        table.insert("People", [{"name": "Carol"}])
        table.update_where("People", {"age": "26"}, [Condition("name", "Bob")])
        table.add_columns("People", ["email"])

    Every call reads what it needs fresh from the sheet, nothing is cached
    between calls.  The sheets service is passed in so tests and callers
    with their own credentials can supply it.  API errors (HttpError) are
    not caught, see ops.error_message().
    """
    def __init__(self, spreadsheet_id: str, service: Resource) -> None:
        if not spreadsheet_id:
            raise ValueError("spreadsheet_id is required")
        if service is None:
            raise ValueError("a sheets service is required")
        self._spreadsheet_id = spreadsheet_id
        self._service = service

    @classmethod
    def connect(cls, spreadsheet_id: str, access) -> Self:
        """
        Build the sheets service from a GWSAccess (or anything with a
        get_service(name, version)) and wrap it.
        """
        service = access.get_service("sheets", "v4")
        if service is None:
            raise RuntimeError("could not get an authenticated sheets service")
        return cls(spreadsheet_id, service)

    def __str__(self) -> str:
        return self._spreadsheet_id

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    @property
    def service(self) -> Resource:
        return self._service

    def info(self) -> Spreadsheet:
        """Title of the spreadsheet and the sheets in it"""
        return get(self._service, self._spreadsheet_id)

    def _values(self, a1: str) -> Grid:
        response = getValues(self._service, self._spreadsheet_id, a1)
        if not response.valueRanges:
            return []
        return [list(r) for r in response.valueRanges[0].values]

    def get_sheet(self, sheet: str) -> Grid:
        """All values of a sheet, header row first.  An empty sheet is []"""
        return self._values(sheet_range(sheet))

    def get_headers(self, sheet: str) -> list[str]:
        """Column names of a sheet, the first row"""
        values = self._values(header_range(sheet))
        return list(values[0]) if values else []

    def select(self, sheet: str, columns: str|Iterable[str] = WILDCARD,
               conditions: Iterable|None = None,
               as_records: bool = False,
               unknown_column: str = UNKNOWN_COLUMN_MATCH_NONE) -> Grid|list[dict[str, str]]:
        """
        SELECT columns FROM sheet WHERE conditions.
        See query.select() for how columns, conditions and unknown_column behave.
        """
        return select(self.get_sheet(sheet), columns, conditions, as_records, unknown_column)

    def update(self, a1: str, values: Sequence[Sequence[Any]]) -> int:
        """
        Overwrite a range with a 2D list of values, raw.

        return: number of rows updated
        """
        response = updateValues(self._service, self._spreadsheet_id,
                                ValueRange(a1, "ROWS", [list(r) for r in values]))
        return response.totalUpdatedRows

    def insert(self, sheet: str, records: Iterable[Mapping[str, Any]],
               headers: Sequence[str]|None = None) -> int:
        """
        INSERT INTO sheet, one row per record appended after the last row.
        headers are fetched from the sheet when not given.

        return: number of rows added
        """
        cols = list(headers) if headers is not None else self.get_headers(sheet)
        plan = plan_insert(cols, records)
        if not any(plan.rows):
            logger.info("nothing to insert into %s", sheet)
            return 0
        response = appendValues(self._service, self._spreadsheet_id, plan.to_value_range(sheet))
        logger.info("inserted %d rows into %s", response.updatedRows, sheet)
        return response.updatedRows

    def update_where(self, sheet: str, column_values: Mapping[str, Any],
                     conditions: Iterable) -> int:
        """
        UPDATE sheet SET column_values WHERE conditions.
        Each condition is an exact match and picks rows on its own, see
        plan.plan_update().  Nothing is sent if no row matches.  A row picked
        by more than one condition is only written once.

        return: total number of rows updated
        """
        updates = []
        for u in plan_update(self.get_sheet(sheet), column_values, conditions):
            if u.row_number not in (v.row_number for v in updates):
                updates.append(u)
        if not updates:
            logger.info("no rows found to update in %s", sheet)
            return 0
        response = updateValues(self._service, self._spreadsheet_id,
                                [u.to_value_range(sheet) for u in updates])
        logger.info("updated %d rows in %s", response.totalUpdatedRows, sheet)
        return response.totalUpdatedRows

    def add_columns(self, sheet: str, column_names: Sequence[str],
                    header_count: int|None = None) -> int:
        """
        ALTER TABLE sheet ADD columns, the names go in the header row after
        the last existing column.  The current column count is read from the
        sheet when not given.

        return: number of columns updated
        """
        count = header_count if header_count is not None else len(self.get_headers(sheet))
        plan = plan_append_columns(count, column_names)
        response = updateValues(self._service, self._spreadsheet_id, plan.to_value_range(sheet))
        logger.info("added columns %s:%s to %s", plan.start_col, plan.end_col, sheet)
        return response.totalUpdatedColumns
