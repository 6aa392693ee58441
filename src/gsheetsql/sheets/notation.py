"""
A1 notation helpers for the table operations.
See https://developers.google.com/sheets/api/guides/concepts#cell
A general A1 has the form:

    <title>!<start col><start row>:<end col><end row>

Rows are 1-based integers, columns are letters.  The table operations only
ever address the first 26 columns, so a column is a single letter A-Z and
anything past 'Z' is rejected rather than turned into a wrong character.
Positions in this module are 0-based like list indexes, so position 0 is 'A'.
"""
import re

from collections.abc import Sequence

from . import SingleLetterColumns

# titles that can go into an A1 without quoting
_PLAIN_TITLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# plain titles that would read as a cell, Q1 or FY2024 or R1C1
_CELL_LIKE_RE = re.compile(r"^([A-Za-z]{1,3}[0-9]+|[Rr][0-9]*[Cc][0-9]*)$")
_COLUMN_RE = re.compile(r"^[A-Z]$")

class NotationOutOfRangeError(ValueError):
    """A column position or letter outside the single letter range A-Z"""
    pass

def column_letter(position: int) -> str:
    """
    Translate a 0-based column position to its letter, 0 -> 'A', 25 -> 'Z'.

    position:   0-based column position, must be in [0, 25]

    return:     single uppercase letter
    """
    p = int(position)
    if p < 0 or p >= SingleLetterColumns:
        raise NotationOutOfRangeError(f"column position {p} is outside A-Z")
    return chr(ord('A') + p)

def column_position(letter: str) -> int:
    """Inverse of column_letter(), 'A' -> 0"""
    c = str(letter).upper()
    if not _COLUMN_RE.match(c):
        raise NotationOutOfRangeError(f"column {letter!r} is not a single letter A-Z")
    return ord(c) - ord('A')

def notation_for_column(headers: Sequence[str], name: str) -> str|None:
    """
    Letter of the column titled name, or None if no header matches.
    The first matching header wins.
    """
    for i, h in enumerate(headers):
        if h == name:
            return column_letter(i)
    return None

def quote_sheet_title(title: str) -> str:
    """
    Quote a sheet title for use in an A1 if it needs it.
    Titles that are already quoted are left alone, anything with spaces or
    other non word characters is wrapped in single quotes with embedded
    quotes doubled, as the Sheets UI does it.  So are titles like Q1 that
    the API would otherwise take for a cell reference.
    """
    t = str(title)
    if not t:
        raise ValueError("sheet title cannot be empty")
    if len(t) > 1 and t[0] == t[-1] == "'":
        return t
    if _PLAIN_TITLE_RE.match(t) and not _CELL_LIKE_RE.match(t):
        return t
    escaped = t.replace("'", "''")
    return f"'{escaped}'"

def sheet_range(title: str, cells: str = "") -> str:
    """'<title>!<cells>' or just the quoted title when cells is empty (whole sheet)"""
    t = quote_sheet_title(title)
    return f"{t}!{cells}" if cells else t

def header_range(title: str) -> str:
    """The whole first row, where the column names live"""
    return sheet_range(title, "1:1")

def row_range(title: str, row: int) -> str:
    """A single whole row, 1-based"""
    r = int(row)
    if r < 1:
        raise ValueError(f"row numbers are 1-based, got {r}")
    return sheet_range(title, f"{r}:{r}")

def append_range(title: str) -> str:
    """
    Range handed to values.append(), the API finds the end of the table
    from column A and appends after it.
    """
    return sheet_range(title, "A:A")

def cell_span_range(title: str, start_position: int, end_position: int, row: int = 1) -> str:
    """
    Horizontal span of cells in one row, e.g. Sheet1!D1:F1
    Positions are 0-based and inclusive.
    """
    if end_position < start_position:
        raise ValueError(f"end column {end_position} is before start column {start_position}")
    r = int(row)
    if r < 1:
        raise ValueError(f"row numbers are 1-based, got {r}")
    return sheet_range(title, f"{column_letter(start_position)}{r}:{column_letter(end_position)}{r}")
